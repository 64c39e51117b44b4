"""Chrome Layout Service - imperative shell around the pure composition core.

Invariants:
    - Production render and editor preview both call ChromeContext.descriptor()
    - Read failures (settings or pages) degrade to defaults / empty lists, are
      logged, and never abort composition
    - Loads that feed a save (strict=True) never degrade settings reads: a partial
      update merged over defaults would overwrite what the tenant saved earlier
    - ChromeEditor keeps edited values after a failed save; only reopen() discards them
    - ChromeEditor loads strictly: an unreadable setting fails open() / reopen()

Design Decisions:
    - Impureim sandwich: load (async IO) -> compose (pure) -> save (async IO)
    - Store and catalog injected as protocols; routes pass SQL adapters, tests pass fakes
"""

import logging
from typing import Any

from app.core.assign_footer_columns import FooterColumnPolicy, resolve_column_policy
from app.core.chrome_context import ChromeContext
from app.core.classify_navigation import NavigationPage, page_from_record
from app.core.compose_descriptor import LayoutDescriptor
from app.core.domain_types import (
    ASSIGNABLE_COLUMNS, ChromeSurface, SettingKey, TenantId,
    column_key_for, settings_key_for,
)
from app.core.errors import ChromeLayoutError, DatabaseError, ErrorContext
from app.core.repository_protocols import PageCatalog, SettingsStore
from app.core.resolve_settings import resolve_settings, settings_to_json
from app.services.configuration_persister import ConfigurationPersister, SaveResult

logger = logging.getLogger(__name__)


# ─── Loading ─────────────────────────────────────────────────────

async def load_chrome_context(
    tenant_id: TenantId,
    surface: ChromeSurface,
    store: SettingsStore,
    catalog: PageCatalog,
    strict: bool = False,
) -> ChromeContext:
    """Load persisted state for one tenant surface into a ChromeContext.

    With strict=True a settings read failure raises DatabaseError instead of
    falling back to defaults. Page reads always degrade.
    """
    raw = await _read_setting(store, tenant_id, settings_key_for(surface), strict)
    settings = resolve_settings(surface, raw, tenant_id)
    pages = await load_pages(catalog, tenant_id)
    policy = (
        await load_column_policy(store, tenant_id, strict)
        if surface == ChromeSurface.FOOTER else FooterColumnPolicy()
    )
    return ChromeContext(
        tenant_id=tenant_id, settings=settings, pages=pages, column_policy=policy,
    )


async def load_column_policy(
    store: SettingsStore, tenant_id: TenantId, strict: bool = False,
) -> FooterColumnPolicy:
    count = await _read_setting(
        store, tenant_id, SettingKey.FOOTER_COLUMN_COUNT, strict,
    )
    records = {
        n: await _read_setting(store, tenant_id, column_key_for(n), strict)
        for n in ASSIGNABLE_COLUMNS
    }
    return resolve_column_policy(count, records, tenant_id)


async def load_pages(
    catalog: PageCatalog, tenant_id: TenantId,
) -> tuple[NavigationPage, ...]:
    try:
        records = await catalog.list_published_pages(tenant_id)
    except (ChromeLayoutError, OSError) as e:
        logger.warning(
            f"Page catalog unavailable, rendering without navigation: {e}",
            extra={"tenant_id": tenant_id},
        )
        return ()
    pages = []
    for record in records or []:
        if not isinstance(record, dict):
            logger.warning(
                f"Skipping malformed page record {record!r}",
                extra={"tenant_id": tenant_id},
            )
            continue
        pages.append(page_from_record(record))
    return tuple(pages)


async def render_chrome(
    tenant_id: TenantId,
    surface: ChromeSurface,
    store: SettingsStore,
    catalog: PageCatalog,
) -> LayoutDescriptor:
    """Production path: persisted settings + published pages -> descriptor."""
    context = await load_chrome_context(tenant_id, surface, store, catalog)
    return context.descriptor()


async def _read_setting(
    store: SettingsStore, tenant_id: TenantId, key: SettingKey, strict: bool = False,
) -> Any | None:
    try:
        return await store.get(tenant_id, key.value)
    except (ChromeLayoutError, OSError) as e:
        if strict:
            logger.error(
                f"Could not read {key.value} before saving: {e}",
                extra={"tenant_id": tenant_id, "setting_key": key.value},
            )
            if isinstance(e, ChromeLayoutError):
                raise
            raise DatabaseError(
                "Could not read setting", "select",
                ErrorContext(tenant_id=tenant_id, setting_key=key.value),
            ) from e
        logger.warning(
            f"Could not read {key.value}, using defaults: {e}",
            extra={"tenant_id": tenant_id, "setting_key": key.value},
        )
        return None


# ─── Editing Session ─────────────────────────────────────────────

class ChromeEditor:
    """A configuration-surface session: edit -> preview, save -> persist."""

    def __init__(
        self,
        context: ChromeContext,
        store: SettingsStore,
        catalog: PageCatalog,
        persister: ConfigurationPersister | None = None,
    ):
        self.context = context
        self._store = store
        self._catalog = catalog
        self._persister = persister or ConfigurationPersister(store)
        self.preview: LayoutDescriptor = context.descriptor()

    @classmethod
    async def open(
        cls,
        tenant_id: TenantId,
        surface: ChromeSurface,
        store: SettingsStore,
        catalog: PageCatalog,
        persister: ConfigurationPersister | None = None,
    ) -> "ChromeEditor":
        context = await load_chrome_context(
            tenant_id, surface, store, catalog, strict=True,
        )
        return cls(context, store, catalog, persister)

    @property
    def tenant_id(self) -> TenantId:
        return self.context.tenant_id

    @property
    def surface(self) -> ChromeSurface:
        return self.context.surface

    def edit(self, updates: dict[str, Any]) -> LayoutDescriptor:
        self.preview = self.context.edit(updates)
        return self.preview

    def set_column_count(self, count: int) -> LayoutDescriptor:
        self.preview = self.context.set_column_count(count)
        return self.preview

    def set_column(self, column_number: int, record: dict[str, Any]) -> LayoutDescriptor:
        self.preview = self.context.set_column(column_number, record)
        return self.preview

    async def save(self) -> SaveResult:
        """Persist the current style settings. Failure leaves edits in place."""
        return await self._persister.save(
            self.tenant_id,
            settings_key_for(self.surface).value,
            settings_to_json(self.context.settings),
        )

    async def save_column_policy(self) -> list[SaveResult]:
        """Persist column count and the column 2-4 records."""
        policy = self.context.column_policy
        results = [await self._persister.save(
            self.tenant_id, SettingKey.FOOTER_COLUMN_COUNT.value, policy.column_count,
        )]
        for config in policy.columns:
            results.append(await self._persister.save(
                self.tenant_id,
                column_key_for(config.column_number).value,
                {"title": config.title, "enabled": config.enabled},
            ))
        return results

    async def reopen(self) -> LayoutDescriptor:
        """Discard unsaved edits by reloading persisted state."""
        self.context = await load_chrome_context(
            self.tenant_id, self.surface, self._store, self._catalog, strict=True,
        )
        self.preview = self.context.descriptor()
        return self.preview
