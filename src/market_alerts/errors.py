"""Errors raised across the service boundary (persistence, transport, auth)."""


class PersistenceUnavailable(Exception):
    """The persistence store could not complete a read or write."""


class TransportClosed(Exception):
    """A push channel was written to after its transport went away."""

    def __init__(self, session_id: int) -> None:
        super().__init__(f"Stream for session {session_id} is closed")
        self.session_id = session_id


class AuthRequired(Exception):
    """The request carries no authenticated session."""
