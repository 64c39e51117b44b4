"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core functions that consume their results are never async themselves;
      the shell orchestrates the async calls around the pure logic
"""

from typing import Any, Protocol

from app.core.domain_types import TenantId


class SettingsStore(Protocol):
    """Tenant-scoped key/value persistence. Values are opaque JSON."""
    async def get(self, tenant_id: TenantId, key: str) -> Any | None: ...
    async def upsert(self, tenant_id: TenantId, key: str, value: Any) -> None: ...


class PageCatalog(Protocol):
    """Read-only source of published pages with navigation metadata."""
    async def list_published_pages(self, tenant_id: TenantId) -> list[dict]: ...
