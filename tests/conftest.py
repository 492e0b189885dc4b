"""Fixtures for the market_alerts test suite."""
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from market_alerts.config import Settings
from market_alerts.container import Container
from market_alerts.db import SqlStore, init_db, make_engine
from market_alerts.main import create_app
from tests.fakes import StubProvider


def build_app(database_url: str, provider):
    """App whose container uses the given DB and quote provider, with fast polling."""
    container = Container()
    container.settings.override(
        providers.Object(
            Settings(
                database_url=database_url,
                poll_interval_seconds=0.05,
                keepalive_seconds=0.5,
                session_secret="test-secret",
            )
        )
    )
    container.quote_provider.override(providers.Object(provider))
    return create_app(container)


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def sql_store(sqlite_url) -> SqlStore:
    engine = make_engine(sqlite_url)
    init_db(engine)
    yield SqlStore(engine)
    engine.dispose()


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def api_client(sqlite_url, stub_provider):
    with TestClient(build_app(sqlite_url, stub_provider)) as client:
        yield client


@pytest.fixture
def logged_in(api_client):
    r = api_client.post("/api/register", json={"email": "Trader@Example.com", "password": "hunter22"})
    assert r.status_code == 200
    return api_client
