"""StoreSetting ORM - tenant-scoped key/value row backing the SettingsStore.

Invariants:
    - (tenant_id, setting_key) is unique: one value per key per tenant
    - setting_value is an opaque JSON blob interpreted only by core/
    - Rows are created on first save and updated in place; never deleted here

Design Decisions:
    - JSON column for setting_value: header/footer blobs, counts and column
      records share one table
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class StoreSetting(Base):
    """One persisted setting for one tenant."""
    __tablename__ = "store_settings"
    __table_args__ = (
        UniqueConstraint("tenant_id", "setting_key", name="uq_store_settings_tenant_key"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    setting_key: Mapped[str] = mapped_column(String(64), nullable=False)
    setting_value: Mapped[Any] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
