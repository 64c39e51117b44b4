"""Layout Settings Resolution - field-by-field merge of persisted overrides over defaults.

Invariants:
    - resolve_settings always returns a COMPLETE settings object, never raises on bad data
    - Merge is per field: a record missing field X resolves X to its default
    - A field of the wrong type (or an enum value outside its set) is logged and defaulted
    - nav_link_border_style narrows EdgeStyle to LINK_BORDER_STYLES (no "round")
    - apply_edit never mutates its input; settings objects are frozen
    - Persisted shape uses camelCase keys; snake_case keys are accepted on read

Design Decisions:
    - Defaults live on the dataclass fields: HeaderSettings() IS the default constant
    - Field kinds derived from annotations (bool, str, Enum): one table, no parallel schema
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.core.domain_types import (
    CartDisplay, ChromeSurface, EdgeStyle, SpacingCategory,
)

logger = logging.getLogger(__name__)

LINK_BORDER_STYLES: tuple[EdgeStyle, ...] = (EdgeStyle.ROUNDED, EdgeStyle.SQUARE)


def _link_border_style() -> Any:
    # nav links only take rounded or square corners
    return dataclasses.field(
        default=EdgeStyle.ROUNDED, metadata={"allowed": LINK_BORDER_STYLES},
    )


@dataclass(frozen=True)
class HeaderSettings:
    """Style settings for the site header."""

    background_color: str = "#ffffff"
    text_color: str = "#1f2937"

    display_store_logo: bool = True
    show_store_name: bool = True
    show_store_tagline: bool = False

    button_style: EdgeStyle = EdgeStyle.ROUNDED
    button_border: bool = True
    button_border_color: str = "#3b82f6"
    button_body_fill: bool = False
    button_body_color: str = "#3b82f6"

    nav_link_border: bool = False
    nav_link_border_style: EdgeStyle = _link_border_style()
    nav_link_border_transparent: bool = True
    nav_link_border_color: str = "#3b82f6"
    nav_link_text_color: str = "#1f2937"
    nav_link_hover_color: str = "#3b82f6"

    cart_display: CartDisplay = CartDisplay.ICON
    horizontal_spacing: SpacingCategory = SpacingCategory.STANDARD


@dataclass(frozen=True)
class FooterSettings:
    """Style settings for the site footer."""

    background_color: str = "#1f2937"
    text_color: str = "#f9fafb"

    display_store_logo: bool = True
    show_store_name: bool = True
    show_store_tagline: bool = False

    nav_link_border: bool = False
    nav_link_border_style: EdgeStyle = _link_border_style()
    nav_link_border_transparent: bool = True
    nav_link_text_color: str = "#f9fafb"
    nav_link_hover_color: str = "#3b82f6"

    vertical_spacing: SpacingCategory = SpacingCategory.STANDARD


LayoutSettings = HeaderSettings | FooterSettings

_SETTINGS_TYPES: dict[ChromeSurface, type] = {
    ChromeSurface.HEADER: HeaderSettings,
    ChromeSurface.FOOTER: FooterSettings,
}


class _InvalidValue(Exception):
    """Raised internally when a raw value does not fit its field kind."""


def default_settings(surface: ChromeSurface) -> LayoutSettings:
    """Return the default settings for a surface."""
    return _SETTINGS_TYPES[surface]()


def resolve_settings(
    surface: ChromeSurface,
    persisted: Any,
    tenant_id: str | None = None,
) -> LayoutSettings:
    """Merge a possibly-partial persisted blob over the surface defaults."""
    defaults = default_settings(surface)
    if persisted is None:
        return defaults
    if not isinstance(persisted, dict):
        logger.warning(
            f"Persisted {surface.value} settings are not an object "
            f"({type(persisted).__name__}); using defaults",
            extra={"tenant_id": tenant_id, "surface": surface.value},
        )
        return defaults
    return _merge(defaults, persisted, surface, tenant_id)


def apply_edit(
    settings: LayoutSettings,
    updates: dict[str, Any],
    tenant_id: str | None = None,
) -> LayoutSettings:
    """Apply an in-memory edit. Invalid values keep the current value."""
    surface = surface_of(settings)
    return _merge(settings, updates, surface, tenant_id)


def settings_to_json(settings: LayoutSettings) -> dict[str, Any]:
    """Serialize settings to the camelCase blob stored under the surface key."""
    blob: dict[str, Any] = {}
    for f in dataclasses.fields(settings):
        value = getattr(settings, f.name)
        blob[_to_camel(f.name)] = value.value if isinstance(value, Enum) else value
    return blob


def surface_of(settings: LayoutSettings) -> ChromeSurface:
    """Return the surface a settings object belongs to."""
    if isinstance(settings, HeaderSettings):
        return ChromeSurface.HEADER
    return ChromeSurface.FOOTER


# ─── Internals ───────────────────────────────────────────────────

def _merge(
    base: LayoutSettings,
    overrides: dict[str, Any],
    surface: ChromeSurface,
    tenant_id: str | None,
) -> LayoutSettings:
    changes: dict[str, Any] = {}
    for f in dataclasses.fields(base):
        found, raw = _lookup(overrides, f.name)
        if not found:
            continue
        try:
            value = _coerce(f.type, raw)
            allowed = f.metadata.get("allowed")
            if allowed is not None and value not in allowed:
                raise _InvalidValue
            changes[f.name] = value
        except _InvalidValue:
            logger.warning(
                f"Invalid value for {surface.value}.{f.name}: {raw!r}; "
                f"keeping {getattr(base, f.name)!r}",
                extra={
                    "tenant_id": tenant_id,
                    "surface": surface.value,
                    "field": f.name,
                },
            )
    if not changes:
        return base
    return dataclasses.replace(base, **changes)


def _lookup(blob: dict[str, Any], field_name: str) -> tuple[bool, Any]:
    camel = _to_camel(field_name)
    if camel in blob:
        return True, blob[camel]
    if field_name in blob:
        return True, blob[field_name]
    return False, None


def _coerce(kind: type, raw: Any) -> Any:
    if kind is bool:
        if isinstance(raw, bool):
            return raw
        raise _InvalidValue
    if kind is str:
        if isinstance(raw, str):
            return raw
        raise _InvalidValue
    if isinstance(kind, type) and issubclass(kind, Enum):
        if isinstance(raw, kind):
            return raw
        if isinstance(raw, str):
            try:
                return kind(raw)
            except ValueError:
                raise _InvalidValue
        raise _InvalidValue
    raise _InvalidValue


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
