"""Command-line helpers for manual testing against a running server."""
