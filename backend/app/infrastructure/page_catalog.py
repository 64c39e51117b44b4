"""SQL Page Catalog - PageCatalog implementation over the page_documents table.

Invariants:
    - Only status == "published" pages are listed
    - Ordering is stable: position, then created_at, then id
    - Records are plain dicts; core.classify_navigation.page_from_record interprets them
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import TenantId
from app.core.errors import DatabaseError, ErrorContext
from app.models.page_document import PageDocument

logger = logging.getLogger(__name__)

PUBLISHED = "published"


class SqlPageCatalog:
    """Read-only listing of a tenant's published pages."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_published_pages(self, tenant_id: TenantId) -> list[dict]:
        try:
            result = await self._db.execute(
                select(PageDocument)
                .where(
                    PageDocument.tenant_id == tenant_id,
                    PageDocument.status == PUBLISHED,
                )
                .order_by(
                    PageDocument.position,
                    PageDocument.created_at,
                    PageDocument.id,
                ),
            )
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Failed to list pages: {e}", extra={"tenant_id": tenant_id},
            )
            raise DatabaseError(
                "Could not list pages", "select", ErrorContext(tenant_id=tenant_id),
            )
        return [
            {
                "id": page.id,
                "name": page.name,
                "slug": page.slug,
                "navigation_placement": page.navigation_placement,
                "footer_column": page.footer_column,
            }
            for page in result.scalars().all()
        ]
