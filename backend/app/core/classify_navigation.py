"""Navigation Classification - which pages are eligible for which chrome surface.

Invariants:
    - Internally-managed pages (name contains "header" or "footer", any case)
      never appear in any navigation collection, whatever their placement
    - Pages without a slug are not linkable and are excluded
    - Output order preserves input order
    - secondary_group is display-only: it never moves a page between columns

Design Decisions:
    - page_from_record is the only place raw catalog dicts are interpreted
    - Missing placement means "both"; an unknown placement string means "none"
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from app.core.domain_types import (
    ChromeSurface, NavigationPlacement, SecondaryGroup,
)

logger = logging.getLogger(__name__)

INTERNAL_PAGE_MARKERS: tuple[str, ...] = ("header", "footer")

LEGAL_KEYWORDS: tuple[str, ...] = (
    "privacy", "terms", "legal", "cookie",
    "policy", "disclaimer", "returns", "refund",
)
_LEGAL_PATTERN = re.compile("|".join(LEGAL_KEYWORDS), re.IGNORECASE)


@dataclass(frozen=True)
class NavigationPage:
    """A published page as seen by navigation composition. Read-only."""
    id: str
    name: str
    slug: str
    placement: NavigationPlacement = NavigationPlacement.BOTH
    footer_column: int | None = None


def page_from_record(record: dict[str, Any]) -> NavigationPage:
    """Normalize a PageCatalog record (snake_case or camelCase keys)."""
    raw_placement = _first(record, "navigation_placement", "navigationPlacement")
    raw_column = _first(record, "footer_column", "footerColumn")
    raw_id = record.get("id")
    return NavigationPage(
        id="" if raw_id is None else str(raw_id),
        name=str(record.get("name") or ""),
        slug=str(record.get("slug") or ""),
        placement=_parse_placement(raw_placement, record.get("id")),
        footer_column=_parse_column(raw_column),
    )


def is_internally_managed(page: NavigationPage) -> bool:
    """Pages used to edit the chrome itself are never navigation targets."""
    name = page.name.lower()
    return any(marker in name for marker in INTERNAL_PAGE_MARKERS)


def classify_for_surface(
    pages: Iterable[NavigationPage], surface: ChromeSurface,
) -> tuple[NavigationPage, ...]:
    """Return the pages eligible for a surface, in input order."""
    wanted = {NavigationPlacement(surface.value), NavigationPlacement.BOTH}
    return tuple(
        page for page in pages
        if page.placement in wanted
        and page.slug
        and not is_internally_managed(page)
    )


def secondary_group(name: str) -> SecondaryGroup:
    """Keyword grouping for auxiliary display only (legal vs general)."""
    if _LEGAL_PATTERN.search(name or ""):
        return SecondaryGroup.LEGAL
    return SecondaryGroup.GENERAL


# ─── Internals ───────────────────────────────────────────────────

def _first(record: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def _parse_placement(raw: Any, page_id: Any) -> NavigationPlacement:
    if raw is None or raw == "":
        return NavigationPlacement.BOTH
    if isinstance(raw, NavigationPlacement):
        return raw
    try:
        return NavigationPlacement(str(raw).lower())
    except ValueError:
        logger.warning(f"Page {page_id!r} has unknown navigation placement {raw!r}")
        return NavigationPlacement.NONE


def _parse_column(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw.strip())
    return None
