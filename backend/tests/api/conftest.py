"""API test fixtures - FastAPI test client over the in-memory test database.

Invariants:
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so readiness probes see the test engine
    - Every request carries the configured FRONTEND_URL as its Origin

Design Decisions:
    - httpx AsyncClient over ASGITransport: lifespan is not run, so tests never
      touch the configured DATABASE_URL
"""

import pytest
from httpx import ASGITransport, AsyncClient

from products_api.infrastructure.database import get_db, DatabaseSessionManager
from products_api.models.product import Product
import products_api.infrastructure.database as db_module
from products_api.config import get_settings
from products_api.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
        headers={"Origin": get_settings().frontend_url},
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_products(test_db):
    """Insert two products: one available, one unavailable."""
    monitor = Product(name="Monitor", price=300, availability=True)
    keyboard = Product(name="Keyboard", price=49.5, availability=False)
    test_db.add_all([monitor, keyboard])
    await test_db.commit()
    await test_db.refresh(monitor)
    await test_db.refresh(keyboard)
    return monitor, keyboard
