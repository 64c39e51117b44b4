"""Service test fixtures - async DB, FastAPI test client, in-memory fakes.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness checks see the test engine

Design Decisions:
    - StaticPool: one shared connection keeps the in-memory database alive across sessions
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager, get_db
from app.main import app
from app.models.page_document import PageDocument

from tests.services.fake_stores import FakePageCatalog, InMemorySettingsStore

TENANT = "store-1"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


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
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_pages(test_db):
    """Published and draft pages for TENANT plus one page of another tenant."""
    rows = [
        PageDocument(id="home", tenant_id=TENANT, name="Home", slug="/",
                     status="published", navigation_placement="header", position=0),
        PageDocument(id="contact", tenant_id=TENANT, name="Contact", slug="/contact",
                     status="published", navigation_placement="both", position=1),
        PageDocument(id="privacy", tenant_id=TENANT, name="Privacy", slug="/privacy",
                     status="published", navigation_placement="footer",
                     footer_column=4, position=2),
        PageDocument(id="site-footer", tenant_id=TENANT, name="Footer", slug="/footer",
                     status="published", navigation_placement="both", position=3),
        PageDocument(id="draft", tenant_id=TENANT, name="Draft", slug="/draft",
                     status="draft", navigation_placement="both", position=4),
        PageDocument(id="other", tenant_id="store-2", name="Other", slug="/other",
                     status="published", navigation_placement="both", position=0),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows


@pytest.fixture
def settings_store():
    return InMemorySettingsStore()


@pytest.fixture
def page_catalog():
    return FakePageCatalog([
        {"id": "home", "name": "Home", "slug": "/", "navigation_placement": "header"},
        {"id": "contact", "name": "Contact", "slug": "/contact",
         "navigation_placement": "both"},
        {"id": "privacy", "name": "Privacy", "slug": "/privacy",
         "navigation_placement": "footer", "footer_column": 4},
        {"id": "header-page", "name": "Header Settings", "slug": "/header",
         "navigation_placement": "both"},
    ])
