"""SQL adapters - tests for SqlSettingsStore and SqlPageCatalog on SQLite.

Tests cover:
    - get() of a never-saved key returns None
    - upsert() inserts then updates in place (one row per tenant/key)
    - Values are tenant-scoped
    - Page catalog lists only published pages of the tenant, in position order
    - SQLAlchemy failures surface as DatabaseError
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.core.errors import DatabaseError
from app.infrastructure.page_catalog import SqlPageCatalog
from app.infrastructure.settings_repository import SqlSettingsStore
from app.models.store_setting import StoreSetting

TENANT = "store-1"


async def test_get_missing_returns_none(test_db):
    assert await SqlSettingsStore(test_db).get(TENANT, "header_configuration") is None


async def test_upsert_inserts_then_updates(test_db):
    store = SqlSettingsStore(test_db)
    await store.upsert(TENANT, "footer_configuration", {"textColor": "#111111"})
    await store.upsert(TENANT, "footer_configuration", {"textColor": "#222222"})

    assert await store.get(TENANT, "footer_configuration") == {"textColor": "#222222"}
    count = await test_db.scalar(
        select(func.count()).select_from(StoreSetting).where(
            StoreSetting.tenant_id == TENANT,
        ),
    )
    assert count == 1


async def test_scalar_values_stored(test_db):
    store = SqlSettingsStore(test_db)
    await store.upsert(TENANT, "footer_column_count", 3)
    assert await store.get(TENANT, "footer_column_count") == 3


async def test_settings_are_tenant_scoped(test_db):
    store = SqlSettingsStore(test_db)
    await store.upsert(TENANT, "footer_column_count", 2)
    assert await store.get("store-2", "footer_column_count") is None


async def test_store_failure_raises_database_error(test_db, monkeypatch):
    async def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(test_db, "execute", broken_execute)
    with pytest.raises(DatabaseError) as exc_info:
        await SqlSettingsStore(test_db).upsert(TENANT, "footer_column_count", 2)
    assert exc_info.value.http_status == 503
    assert exc_info.value.context.setting_key == "footer_column_count"


async def test_catalog_lists_published_pages_in_order(test_db, seed_pages):
    records = await SqlPageCatalog(test_db).list_published_pages(TENANT)
    assert [r["id"] for r in records] == ["home", "contact", "privacy", "site-footer"]
    privacy = records[2]
    assert privacy == {
        "id": "privacy", "name": "Privacy", "slug": "/privacy",
        "navigation_placement": "footer", "footer_column": 4,
    }


async def test_catalog_empty_for_unknown_tenant(test_db, seed_pages):
    assert await SqlPageCatalog(test_db).list_published_pages("nobody") == []
