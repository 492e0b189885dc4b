"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

The lifespan (main.py) resolves the container once and attaches the results
to app.state; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from market_alerts.db import SqlStore
from market_alerts.errors import AuthRequired
from market_alerts.providers import QuoteProviderABC
from market_alerts.streaming import SessionStreamRegistry


def get_store(request: Request) -> SqlStore:
    """Resolve the persistence store from app.state."""
    return request.app.state.store


def get_quote_provider(request: Request) -> QuoteProviderABC:
    """Resolve the configured quote provider from app.state."""
    return request.app.state.quote_provider


def get_registry(request: Request) -> SessionStreamRegistry:
    """Resolve the live stream registry from app.state."""
    return request.app.state.registry


def require_user(request: Request) -> int:
    """Return the logged-in user id; raises AuthRequired (401) otherwise."""
    user_id = request.session.get("user_id")
    if user_id is None:
        raise AuthRequired()
    return int(user_id)


# Type aliases for route injection
StoreDep = Annotated[SqlStore, Depends(get_store)]
QuoteProviderDep = Annotated[QuoteProviderABC, Depends(get_quote_provider)]
RegistryDep = Annotated[SessionStreamRegistry, Depends(get_registry)]
CurrentUser = Annotated[int, Depends(require_user)]
