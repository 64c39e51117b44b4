"""SQL Settings Store - SettingsStore implementation over the store_settings table.

Invariants:
    - get() returns None for a missing (tenant, key) row; lazy defaults are core's job
    - upsert() is last-write-wins: no version column, no optimistic check
    - Every SQLAlchemy failure is rolled back and raised as DatabaseError

Design Decisions:
    - Select-then-write upsert instead of dialect-specific ON CONFLICT: runs on
      PostgreSQL and the SQLite test database alike
    - Takes an AsyncSession so it composes with the get_db dependency
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import TenantId
from app.core.errors import DatabaseError, ErrorContext
from app.models.store_setting import StoreSetting

logger = logging.getLogger(__name__)


class SqlSettingsStore:
    """Tenant-scoped key/value persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, tenant_id: TenantId, key: str) -> Any | None:
        try:
            row = await self._find(tenant_id, key)
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Failed to read setting {key}: {e}",
                extra={"tenant_id": tenant_id, "setting_key": key},
            )
            raise DatabaseError(
                "Could not read setting", "select",
                ErrorContext(tenant_id=tenant_id, setting_key=key),
            )
        return row.setting_value if row else None

    async def upsert(self, tenant_id: TenantId, key: str, value: Any) -> None:
        now = datetime.now(timezone.utc)
        try:
            row = await self._find(tenant_id, key)
            if row is None:
                self._db.add(StoreSetting(
                    tenant_id=tenant_id, setting_key=key,
                    setting_value=value, created_at=now, updated_at=now,
                ))
            else:
                row.setting_value = value
                row.updated_at = now
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Failed to upsert setting {key}: {e}",
                extra={"tenant_id": tenant_id, "setting_key": key},
            )
            raise DatabaseError(
                "Could not save setting", "upsert",
                ErrorContext(tenant_id=tenant_id, setting_key=key),
            )

    async def _find(self, tenant_id: TenantId, key: str) -> StoreSetting | None:
        result = await self._db.execute(
            select(StoreSetting).where(
                StoreSetting.tenant_id == tenant_id,
                StoreSetting.setting_key == key,
            ),
        )
        return result.scalar_one_or_none()
