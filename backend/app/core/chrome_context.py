"""Chrome Context - explicit tenant-scoped configuration passed into composition.

Invariants:
    - One ChromeContext per (tenant, surface) editing scope; never a module global
    - Holds resolved values only: settings, column policy, pages are already normalized
    - edit() returns the recomposed descriptor for every mutation (live preview)
    - Mutations are in-memory only; persistence is the shell's job

Design Decisions:
    - Dataclass with a descriptor() method: pure, testable without mocks
    - The context keeps edited settings after a failed save; callers reload to discard
"""

from dataclasses import dataclass, field, replace
from typing import Any

from app.core.assign_footer_columns import (
    FooterColumnPolicy, hidden_pages, resolve_column_config,
)
from app.core.classify_navigation import NavigationPage, classify_for_surface
from app.core.compose_descriptor import LayoutDescriptor, compose_descriptor
from app.core.domain_types import (
    ASSIGNABLE_COLUMNS, MAX_COLUMN_COUNT, MIN_COLUMN_COUNT, ChromeSurface, TenantId,
)
from app.core.errors import ErrorContext, SettingsValidationError
from app.core.resolve_settings import LayoutSettings, apply_edit, surface_of


@dataclass
class ChromeContext:
    """Everything the composer needs for one tenant surface."""

    tenant_id: TenantId
    settings: LayoutSettings
    pages: tuple[NavigationPage, ...] = ()
    column_policy: FooterColumnPolicy = field(default_factory=FooterColumnPolicy)

    @property
    def surface(self) -> ChromeSurface:
        return surface_of(self.settings)

    def descriptor(self) -> LayoutDescriptor:
        return compose_descriptor(self.settings, self.pages, self.column_policy)

    def edit(self, updates: dict[str, Any]) -> LayoutDescriptor:
        """Apply a settings mutation and recompose."""
        self.settings = apply_edit(self.settings, updates, self.tenant_id)
        return self.descriptor()

    def set_column_count(self, count: int) -> LayoutDescriptor:
        if isinstance(count, bool) or not MIN_COLUMN_COUNT <= count <= MAX_COLUMN_COUNT:
            raise SettingsValidationError(
                f"Column count must be between {MIN_COLUMN_COUNT} and {MAX_COLUMN_COUNT}",
                "column_count", self._error_context(),
            )
        self.column_policy = replace(self.column_policy, column_count=count)
        return self.descriptor()

    def set_column(self, column_number: int, record: dict[str, Any]) -> LayoutDescriptor:
        if column_number not in ASSIGNABLE_COLUMNS:
            raise SettingsValidationError(
                f"Column {column_number} is not assignable", "column_number",
                self._error_context(),
            )
        updated = resolve_column_config(column_number, record, self.tenant_id)
        self.column_policy = replace(
            self.column_policy,
            columns=tuple(
                updated if c.column_number == column_number else c
                for c in self.column_policy.columns
            ),
        )
        return self.descriptor()

    def hidden_footer_pages(self) -> tuple[NavigationPage, ...]:
        """Footer pages the current column policy hides from the footer."""
        eligible = classify_for_surface(self.pages, ChromeSurface.FOOTER)
        return hidden_pages(eligible, self.column_policy)

    def _error_context(self) -> ErrorContext:
        return ErrorContext(tenant_id=self.tenant_id, surface=self.surface.value)
