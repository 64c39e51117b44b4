"""Footer Column Assignment - groups footer pages into the operator's active columns.

Invariants:
    - Column 1 (brand) is always present and never receives pages
    - Columns 2-4 are active only up to the active column count AND when enabled
    - A page with no valid explicit column (unset, 1, or out of range) goes to column 2
    - A page explicitly assigned to an inactive column is DROPPED, never reassigned
    - No page appears in more than one column (repeated catalog ids keep the first);
      order within a column is input order
    - Keyword grouping (classify_navigation.secondary_group) never affects placement

Design Decisions:
    - Policy resolution (count + per-column records) separated from assignment:
      resolution tolerates malformed persisted data, assignment assumes a valid policy
    - Output dict keyed by active columns in ascending order, empty columns kept so
      the renderer sees a stable column layout while editing
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from app.core.classify_navigation import NavigationPage
from app.core.domain_types import (
    ASSIGNABLE_COLUMNS,
    BRAND_COLUMN,
    DEFAULT_COLUMN_COUNT,
    DEFAULT_COLUMN_TITLES,
    FALLBACK_COLUMN,
    MAX_COLUMN_COUNT,
    MIN_COLUMN_COUNT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnConfig:
    """Operator title/visibility for one assignable footer column."""
    column_number: int
    title: str
    enabled: bool = True


@dataclass(frozen=True)
class FooterColumnPolicy:
    """Active column count plus the per-column records for columns 2-4."""
    column_count: int = DEFAULT_COLUMN_COUNT
    columns: tuple[ColumnConfig, ...] = tuple(
        ColumnConfig(n, DEFAULT_COLUMN_TITLES[n]) for n in ASSIGNABLE_COLUMNS
    )

    @property
    def active_columns(self) -> tuple[int, ...]:
        enabled = {c.column_number for c in self.columns if c.enabled}
        return tuple(
            n for n in ASSIGNABLE_COLUMNS
            if n <= self.column_count and n in enabled
        )

    def config_for(self, column_number: int) -> ColumnConfig:
        for config in self.columns:
            if config.column_number == column_number:
                return config
        return ColumnConfig(column_number, DEFAULT_COLUMN_TITLES[column_number])

    def title_for(self, column_number: int) -> str:
        if column_number == BRAND_COLUMN:
            return DEFAULT_COLUMN_TITLES[BRAND_COLUMN]
        return self.config_for(column_number).title


# ─── Policy Resolution ───────────────────────────────────────────

def resolve_column_count(persisted: Any, tenant_id: str | None = None) -> int:
    """Resolve the active column count (1-4). Malformed values give the default."""
    if persisted is None:
        return DEFAULT_COLUMN_COUNT
    value: int | None = None
    if isinstance(persisted, int) and not isinstance(persisted, bool):
        value = persisted
    elif isinstance(persisted, str) and persisted.strip().isdecimal():
        value = int(persisted.strip())
    if value is None or not MIN_COLUMN_COUNT <= value <= MAX_COLUMN_COUNT:
        logger.warning(
            f"Invalid footer column count {persisted!r}; "
            f"using {DEFAULT_COLUMN_COUNT}",
            extra={"tenant_id": tenant_id, "setting_key": "footer_column_count"},
        )
        return DEFAULT_COLUMN_COUNT
    return value


def resolve_column_config(
    column_number: int, persisted: Any, tenant_id: str | None = None,
) -> ColumnConfig:
    """Resolve one column record; title and enabled fall back independently."""
    default = ColumnConfig(column_number, DEFAULT_COLUMN_TITLES[column_number])
    if persisted is None:
        return default
    if not isinstance(persisted, dict):
        logger.warning(
            f"Footer column {column_number} record is not an object; using defaults",
            extra={"tenant_id": tenant_id, "field": f"column_{column_number}"},
        )
        return default

    title = persisted.get("title", persisted.get("column_title"))
    if not isinstance(title, str) or not title.strip():
        title = default.title
    enabled = persisted.get("enabled", persisted.get("is_enabled", True))
    if not isinstance(enabled, bool):
        logger.warning(
            f"Footer column {column_number} has non-boolean enabled={enabled!r}",
            extra={"tenant_id": tenant_id, "field": f"column_{column_number}"},
        )
        enabled = True
    return ColumnConfig(column_number, title.strip(), enabled)


def resolve_column_policy(
    count: Any,
    column_records: dict[int, Any] | None = None,
    tenant_id: str | None = None,
) -> FooterColumnPolicy:
    """Build a complete policy from persisted count and per-column records."""
    records = column_records or {}
    return FooterColumnPolicy(
        column_count=resolve_column_count(count, tenant_id),
        columns=tuple(
            resolve_column_config(n, records.get(n), tenant_id)
            for n in ASSIGNABLE_COLUMNS
        ),
    )


# ─── Assignment ──────────────────────────────────────────────────

def target_column(page: NavigationPage) -> int:
    """The column a page belongs to before activity is considered."""
    if page.footer_column in ASSIGNABLE_COLUMNS:
        return page.footer_column
    return FALLBACK_COLUMN


def assign_footer_columns(
    pages: Iterable[NavigationPage], policy: FooterColumnPolicy,
) -> dict[int, tuple[NavigationPage, ...]]:
    """Group footer-eligible pages by active column. Pure."""
    active = policy.active_columns
    grouped: dict[int, list[NavigationPage]] = {n: [] for n in active}
    seen: set[str] = set()
    for page in pages:
        if page.id:
            if page.id in seen:
                continue
            seen.add(page.id)
        column = target_column(page)
        if column in grouped:
            grouped[column].append(page)
    return {n: tuple(grouped[n]) for n in active}


def hidden_pages(
    pages: Iterable[NavigationPage], policy: FooterColumnPolicy,
) -> tuple[NavigationPage, ...]:
    """Footer pages that the current policy hides (their column is inactive)."""
    active = set(policy.active_columns)
    return tuple(page for page in pages if target_column(page) not in active)
