"""PageDocument ORM - the navigation-relevant slice of a tenant's content pages.

Invariants:
    - Read-only from this service: pages are authored by the page builder
    - navigation_placement in {header, footer, both, none}; NULL means "both"
    - footer_column NULL means unassigned (falls back to column 2)

Design Decisions:
    - Only navigation metadata is mapped; page content lives elsewhere
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class PageDocument(Base):
    """A content page as listed for navigation."""
    __tablename__ = "page_documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )
    navigation_placement: Mapped[str | None] = mapped_column(
        String(10), nullable=True,
    )
    footer_column: Mapped[int | None] = mapped_column(Integer, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
