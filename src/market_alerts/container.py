"""DI container. Built in create_app(); the lifespan copies singletons onto app.state."""
from dependency_injector import containers, providers

from market_alerts.config import load_settings
from market_alerts.db import SqlStore, make_engine
from market_alerts.providers.factory import create_quote_provider
from market_alerts.streaming import PollingScheduler, SessionStreamRegistry


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(load_settings)

    engine = providers.Singleton(make_engine, settings.provided.database_url)
    store = providers.Singleton(SqlStore, engine)

    quote_provider = providers.Singleton(create_quote_provider, settings)

    scheduler = providers.Singleton(
        PollingScheduler,
        quote_provider,
        store,
        poll_interval_seconds=settings.provided.poll_interval_seconds,
        max_symbols_per_session=settings.provided.max_symbols_per_session,
    )
    registry = providers.Singleton(
        SessionStreamRegistry,
        scheduler,
        keepalive_seconds=settings.provided.keepalive_seconds,
    )
