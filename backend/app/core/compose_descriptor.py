"""Layout Descriptor Composition - pure translation of settings + pages into renderer tokens.

Invariants:
    - compose_descriptor is PURE: identical inputs give equal descriptors and
      byte-identical to_json() output (preview and production share this path)
    - Edge-style enums become concrete radii, spacing enums become padding pairs
    - Colors pass through unchanged
    - Footer columns: brand column 1 always first, then active columns ascending;
      no column above the active count ever appears
    - Descriptors are frozen and never persisted

Design Decisions:
    - Classification and column assignment run inside the composer so callers
      cannot feed preview and production different navigation
    - to_json uses sorted keys and fixed separators for stable bytes
"""

import dataclasses
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from app.core.assign_footer_columns import FooterColumnPolicy, assign_footer_columns
from app.core.classify_navigation import (
    NavigationPage, classify_for_surface, secondary_group,
)
from app.core.domain_types import (
    BRAND_COLUMN, ChromeSurface, EdgeStyle, SpacingCategory,
)
from app.core.resolve_settings import FooterSettings, HeaderSettings, LayoutSettings


EDGE_RADIUS: dict[EdgeStyle, str] = {
    EdgeStyle.SQUARE: "0",
    EdgeStyle.ROUNDED: "0.375rem",
    EdgeStyle.ROUND: "9999px",
}

# (vertical, horizontal)
HEADER_PADDING: dict[SpacingCategory, tuple[str, str]] = {
    SpacingCategory.THIN: ("0.5rem", "1rem"),
    SpacingCategory.STANDARD: ("1rem", "1.5rem"),
    SpacingCategory.EXPANDED: ("1.5rem", "2rem"),
}
FOOTER_PADDING: dict[SpacingCategory, tuple[str, str]] = {
    SpacingCategory.THIN: ("1rem", "1rem"),
    SpacingCategory.STANDARD: ("2rem", "1.5rem"),
    SpacingCategory.EXPANDED: ("3rem", "2rem"),
}

BORDER_WIDTH = "1px"
NO_BORDER = "0"
TRANSPARENT = "transparent"


# ─── Descriptor Types ────────────────────────────────────────────

@dataclass(frozen=True)
class Padding:
    vertical: str
    horizontal: str


@dataclass(frozen=True)
class Branding:
    show_logo: bool
    show_name: bool
    show_tagline: bool


@dataclass(frozen=True)
class LinkStyle:
    text_color: str
    hover_color: str
    border_width: str
    border_color: str
    border_radius: str
    background: str | None


@dataclass(frozen=True)
class ButtonStyle:
    border_radius: str
    border_width: str
    border_color: str
    background: str


@dataclass(frozen=True)
class NavEntry:
    id: str
    name: str
    slug: str
    group: str | None = None


@dataclass(frozen=True)
class FooterColumn:
    number: int
    title: str
    entries: tuple[NavEntry, ...] = ()


@dataclass(frozen=True)
class LayoutDescriptor:
    """Renderer-ready chrome description. Shape is stable across versions."""
    surface: ChromeSurface
    background_color: str
    text_color: str
    padding: Padding
    branding: Branding
    nav_link: LinkStyle
    navigation: tuple[NavEntry, ...] = ()
    columns: tuple[FooterColumn, ...] = ()
    button: ButtonStyle | None = None
    cart_display: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _plain(dataclasses.asdict(self))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    def column(self, number: int) -> FooterColumn | None:
        for col in self.columns:
            if col.number == number:
                return col
        return None


# ─── Composition ─────────────────────────────────────────────────

def compose_descriptor(
    settings: LayoutSettings,
    pages: Iterable[NavigationPage],
    policy: FooterColumnPolicy | None = None,
) -> LayoutDescriptor:
    """Compose the descriptor for whichever surface the settings belong to."""
    if isinstance(settings, HeaderSettings):
        return compose_header(settings, pages)
    return compose_footer(settings, pages, policy or FooterColumnPolicy())


def compose_header(
    settings: HeaderSettings, pages: Iterable[NavigationPage],
) -> LayoutDescriptor:
    eligible = classify_for_surface(pages, ChromeSurface.HEADER)
    return LayoutDescriptor(
        surface=ChromeSurface.HEADER,
        background_color=settings.background_color,
        text_color=settings.text_color,
        padding=Padding(*HEADER_PADDING[settings.horizontal_spacing]),
        branding=_branding(settings),
        nav_link=_link_style(settings, settings.nav_link_border_color),
        navigation=tuple(_entry(page) for page in eligible),
        button=ButtonStyle(
            border_radius=EDGE_RADIUS[settings.button_style],
            border_width=BORDER_WIDTH if settings.button_border else NO_BORDER,
            border_color=(
                settings.button_border_color if settings.button_border else TRANSPARENT
            ),
            background=(
                settings.button_body_color if settings.button_body_fill else TRANSPARENT
            ),
        ),
        cart_display=settings.cart_display.value,
    )


def compose_footer(
    settings: FooterSettings,
    pages: Iterable[NavigationPage],
    policy: FooterColumnPolicy,
) -> LayoutDescriptor:
    eligible = classify_for_surface(pages, ChromeSurface.FOOTER)
    grouped = assign_footer_columns(eligible, policy)
    columns = [FooterColumn(BRAND_COLUMN, policy.title_for(BRAND_COLUMN))]
    for number, column_pages in grouped.items():
        columns.append(FooterColumn(
            number=number,
            title=policy.title_for(number),
            entries=tuple(
                _entry(page, secondary_group(page.name).value)
                for page in column_pages
            ),
        ))
    return LayoutDescriptor(
        surface=ChromeSurface.FOOTER,
        background_color=settings.background_color,
        text_color=settings.text_color,
        padding=Padding(*FOOTER_PADDING[settings.vertical_spacing]),
        branding=_branding(settings),
        # footer link borders follow the link text color
        nav_link=_link_style(settings, settings.nav_link_text_color),
        columns=tuple(columns),
    )


# ─── Internals ───────────────────────────────────────────────────

def _branding(settings: LayoutSettings) -> Branding:
    return Branding(
        show_logo=settings.display_store_logo,
        show_name=settings.show_store_name,
        show_tagline=settings.show_store_tagline,
    )


def _link_style(settings: LayoutSettings, border_color: str) -> LinkStyle:
    return LinkStyle(
        text_color=settings.nav_link_text_color,
        hover_color=settings.nav_link_hover_color,
        border_width=BORDER_WIDTH if settings.nav_link_border else NO_BORDER,
        border_color=border_color if settings.nav_link_border else TRANSPARENT,
        border_radius=EDGE_RADIUS[settings.nav_link_border_style],
        background=TRANSPARENT if settings.nav_link_border_transparent else None,
    )


def _entry(page: NavigationPage, group: str | None = None) -> NavEntry:
    return NavEntry(id=page.id, name=page.name, slug=page.slug, group=group)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
