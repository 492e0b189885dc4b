"""Main module for the market alerts service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from market_alerts.container import Container
from market_alerts.db import init_db
from market_alerts.errors import AuthRequired, PersistenceUnavailable
from market_alerts.providers.core import ConfigurationMissingError
from market_alerts.routers import (alerts_router, auth_router, quotes_router,
                                   stream_router, watchlist_router)

logger = logging.getLogger(__name__)

SESSION_MAX_AGE = 60 * 60 * 24 * 7


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Resolve singletons at startup; close live streams and the provider on shutdown."""
    container: Container = fastapi_app.state.container
    init_db(container.engine())

    quote_provider = container.quote_provider()
    try:
        quote_provider.check_configuration()
    except ConfigurationMissingError as exc:
        # Not fatal: every fetch reports CONFIGURATION_MISSING until fixed.
        logger.error("Quote provider misconfigured: %s", exc)

    fastapi_app.state.store = container.store()
    fastapi_app.state.quote_provider = quote_provider
    fastapi_app.state.registry = container.registry()

    yield

    await fastapi_app.state.registry.close_all()
    try:
        await quote_provider.close()
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Error closing provider %s: %s", type(quote_provider).__name__, exc)


async def _auth_required(request: Request, exc: AuthRequired) -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": "Unauthorized"})


async def _persistence_unavailable(
    request: Request, exc: PersistenceUnavailable
) -> JSONResponse:
    logger.error("Persistence unavailable on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI app around a container (tests pass an overridden one)."""
    container = container or Container()
    settings = container.settings()

    fastapi_app = FastAPI(
        title="Market Alerts",
        description="Watchlists, one-shot price alerts and a live quote stream",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container
    fastapi_app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=SESSION_MAX_AGE,
        same_site="lax",
        https_only=False,
    )
    fastapi_app.add_exception_handler(AuthRequired, _auth_required)
    fastapi_app.add_exception_handler(PersistenceUnavailable, _persistence_unavailable)

    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(watchlist_router)
    fastapi_app.include_router(alerts_router)
    fastapi_app.include_router(quotes_router)
    fastapi_app.include_router(stream_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    settings = app.state.container.settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("market_alerts.main:app", host="127.0.0.1", port=8000)
