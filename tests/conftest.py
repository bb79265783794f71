"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, backend and gateway clients.

The gateway is wired to the backend in-process through httpx.ASGITransport,
or to a scripted httpx.MockTransport for failure scenarios.

==============================================================================
"""

import os

# Keep the backend's own startup away from the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from product_catalog.main import app as catalog_app
from product_catalog.gateway.main import app as gateway_app
from product_catalog.gateway.proxy import GatewayResilienceProxy
from product_catalog.gateway.routes import get_proxy
from product_catalog.db.database import Base, get_db
from product_catalog.services.product_service import ProductLifecycleManager


BACKEND_URL = "http://catalog.test/api"
SERVICE_NAME = "catalog-service"


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def manager(db: Session) -> ProductLifecycleManager:
    """Lifecycle manager on the test database."""
    return ProductLifecycleManager(db)


@pytest.fixture
def catalog_db_override(db: Session) -> Generator[None, None, None]:
    """Point the catalog backend's get_db at the test session."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    catalog_app.dependency_overrides[get_db] = override_get_db
    yield
    catalog_app.dependency_overrides.clear()


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def client(catalog_db_override) -> Generator[TestClient, None, None]:
    """Catalog backend test client."""
    with TestClient(catalog_app) as test_client:
        yield test_client


@pytest.fixture
def make_gateway_client() -> Generator[Callable[..., TestClient], None, None]:
    """
    Factory for gateway clients bound to a given httpx transport.

    Usage:
        gateway = make_gateway_client(httpx.MockTransport(handler))
    """
    clients = []

    def factory(transport: httpx.AsyncBaseTransport, **proxy_kwargs) -> TestClient:
        proxy = GatewayResilienceProxy(
            base_url=BACKEND_URL,
            service_name=SERVICE_NAME,
            transport=transport,
            **proxy_kwargs,
        )
        gateway_app.dependency_overrides[get_proxy] = lambda: proxy
        test_client = TestClient(gateway_app)
        clients.append(test_client)
        return test_client

    yield factory

    for test_client in clients:
        test_client.close()
    gateway_app.dependency_overrides.clear()


@pytest.fixture
def gateway(catalog_db_override, make_gateway_client) -> TestClient:
    """Gateway test client talking to the in-process catalog backend."""
    return make_gateway_client(httpx.ASGITransport(app=catalog_app))


# ============================================================================
# SCRIPTED BACKEND HELPERS
# ============================================================================

def healthy_backend(handler: Callable[[httpx.Request], httpx.Response]):
    """
    Wrap a handler so the liveness probe succeeds and every probe/forward
    request is recorded on the returned function's ``calls`` list.
    """
    calls = []

    def wrapped(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        if request.url.path.endswith("/health-check"):
            return httpx.Response(200, json={"status": "ok"})
        return handler(request)

    wrapped.calls = calls
    return wrapped


@pytest.fixture
def scripted_backend():
    """Expose healthy_backend to tests."""
    return healthy_backend
