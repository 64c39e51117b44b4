"""Chrome Layout Routes - header/footer configuration surfaces and production render.

Invariants:
    - Routes contain no composition logic; everything goes through services/chrome_layout
    - GET /{surface} (production) and POST /{surface}/preview share ChromeContext.descriptor()
    - A failed save answers 503 with the SaveResult body; nothing is retried
    - Save routes load strictly: an unreadable setting answers 503 (DatabaseError)
      before anything is written
    - Unknown keys / malformed values surface as 400 via SettingsValidationError

Design Decisions:
    - Saves load persisted state first and merge the request over it, so a partial
      body never wipes fields it does not mention
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.chrome_context import ChromeContext
from app.core.domain_types import (
    ChromeSurface, SettingKey, TenantId, column_key_for, settings_key_for,
)
from app.core.resolve_settings import settings_to_json
from app.infrastructure.database import get_db
from app.infrastructure.page_catalog import SqlPageCatalog
from app.infrastructure.settings_repository import SqlSettingsStore
from app.schemas.chrome import (
    ColumnCountUpdate, ColumnUpdate, PreviewRequest, SettingsUpdate,
)
from app.services.chrome_layout import load_chrome_context
from app.services.configuration_persister import ConfigurationPersister, SaveResult

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tenants/{tenant_id}/chrome", tags=["chrome"])


async def _context(
    tenant_id: str, surface: ChromeSurface, db: AsyncSession, strict: bool = False,
) -> ChromeContext:
    return await load_chrome_context(
        TenantId(tenant_id), surface, SqlSettingsStore(db), SqlPageCatalog(db),
        strict=strict,
    )


def _save_response(result: SaveResult, **extra: Any) -> JSONResponse:
    code = status.HTTP_200_OK if result.ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content={"result": result.to_dict(), **extra})


def _columns_payload(context: ChromeContext) -> dict:
    policy = context.column_policy
    return {
        "column_count": policy.column_count,
        "active_columns": list(policy.active_columns),
        "columns": [
            {"column_number": c.column_number, "title": c.title, "enabled": c.enabled}
            for c in policy.columns
        ],
        "hidden_pages": [
            {"id": p.id, "name": p.name, "footer_column": p.footer_column}
            for p in context.hidden_footer_pages()
        ],
    }


# ─── Production render ───────────────────────────────────────────

@router.get("/{surface}")
async def get_descriptor(
    tenant_id: str, surface: ChromeSurface, db: AsyncSession = Depends(get_db),
):
    """Renderer-ready descriptor from persisted settings and published pages."""
    context = await _context(tenant_id, surface, db)
    return context.descriptor().to_dict()


# ─── Style settings ──────────────────────────────────────────────

@router.get("/{surface}/settings")
async def get_settings(
    tenant_id: str, surface: ChromeSurface, db: AsyncSession = Depends(get_db),
):
    """Resolved settings (defaults for anything never saved)."""
    context = await _context(tenant_id, surface, db)
    return {"surface": surface.value, "settings": settings_to_json(context.settings)}


@router.put("/{surface}/settings")
async def save_settings(
    tenant_id: str,
    surface: ChromeSurface,
    body: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
):
    context = await _context(tenant_id, surface, db, strict=True)
    descriptor = context.edit(body.settings)
    blob = settings_to_json(context.settings)
    result = await ConfigurationPersister(SqlSettingsStore(db)).save(
        TenantId(tenant_id), settings_key_for(surface).value, blob,
    )
    return _save_response(result, settings=blob, descriptor=descriptor.to_dict())


@router.post("/{surface}/preview")
async def preview(
    tenant_id: str,
    surface: ChromeSurface,
    body: PreviewRequest,
    db: AsyncSession = Depends(get_db),
):
    """Compose unsaved editor state without persisting anything."""
    context = await _context(tenant_id, surface, db)
    context.edit(body.settings)
    if surface == ChromeSurface.FOOTER:
        if body.column_count is not None:
            context.set_column_count(body.column_count)
        for number, update in sorted(body.columns.items()):
            context.set_column(number, _column_record(context, number, update))
    return context.descriptor().to_dict()


# ─── Footer columns ──────────────────────────────────────────────

@router.get("/footer/columns")
async def get_columns(tenant_id: str, db: AsyncSession = Depends(get_db)):
    context = await _context(tenant_id, ChromeSurface.FOOTER, db)
    return _columns_payload(context)


@router.put("/footer/columns/count")
async def save_column_count(
    tenant_id: str, body: ColumnCountUpdate, db: AsyncSession = Depends(get_db),
):
    context = await _context(tenant_id, ChromeSurface.FOOTER, db, strict=True)
    context.set_column_count(body.column_count)
    result = await ConfigurationPersister(SqlSettingsStore(db)).save(
        TenantId(tenant_id), SettingKey.FOOTER_COLUMN_COUNT.value, body.column_count,
    )
    return _save_response(result, **_columns_payload(context))


@router.put("/footer/columns/{column_number}")
async def save_column(
    tenant_id: str,
    body: ColumnUpdate,
    column_number: int = Path(ge=2, le=4),
    db: AsyncSession = Depends(get_db),
):
    context = await _context(tenant_id, ChromeSurface.FOOTER, db, strict=True)
    context.set_column(column_number, _column_record(context, column_number, body))
    config = context.column_policy.config_for(column_number)
    result = await ConfigurationPersister(SqlSettingsStore(db)).save(
        TenantId(tenant_id),
        column_key_for(column_number).value,
        {"title": config.title, "enabled": config.enabled},
    )
    return _save_response(result, **_columns_payload(context))


def _column_record(context: ChromeContext, number: int, update: ColumnUpdate) -> dict:
    current = context.column_policy.config_for(number)
    title = current.title if update.title is None else update.title
    return {"title": title, "enabled": update.enabled}
