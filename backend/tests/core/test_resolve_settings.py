"""Settings Resolution - tests for field-by-field merge and in-memory edits.

Tests cover:
    - Missing / None / non-object persisted data resolves to defaults
    - Partial records: each missing field resolves to its default
    - Wrong-typed fields and unknown enum values fall back per field, with a warning
    - camelCase and snake_case keys both read
    - apply_edit keeps the current value on invalid input and never mutates
    - settings_to_json round-trips through resolve_settings
"""

import logging

import pytest

from app.core.domain_types import (
    CartDisplay, ChromeSurface, EdgeStyle, SpacingCategory,
)
from app.core.resolve_settings import (
    FooterSettings,
    HeaderSettings,
    apply_edit,
    default_settings,
    resolve_settings,
    settings_to_json,
    surface_of,
)


# ─── Defaults ────────────────────────────────────────────────────

def test_none_resolves_to_header_defaults():
    assert resolve_settings(ChromeSurface.HEADER, None) == HeaderSettings()


def test_none_resolves_to_footer_defaults():
    settings = resolve_settings(ChromeSurface.FOOTER, None)
    assert settings == FooterSettings()
    assert settings.background_color == "#1f2937"
    assert settings.vertical_spacing == SpacingCategory.STANDARD


def test_default_settings_per_surface():
    assert isinstance(default_settings(ChromeSurface.HEADER), HeaderSettings)
    assert isinstance(default_settings(ChromeSurface.FOOTER), FooterSettings)


@pytest.mark.parametrize("persisted", ["oops", 42, ["backgroundColor"], True])
def test_non_object_resolves_to_defaults(persisted, caplog):
    with caplog.at_level(logging.WARNING):
        settings = resolve_settings(ChromeSurface.HEADER, persisted)
    assert settings == HeaderSettings()
    assert "not an object" in caplog.text


# ─── Partial merge ───────────────────────────────────────────────

def test_missing_field_resolves_to_default():
    settings = resolve_settings(
        ChromeSurface.HEADER, {"backgroundColor": "#000000"},
    )
    assert settings.background_color == "#000000"
    assert settings.text_color == HeaderSettings().text_color
    assert settings.cart_display == CartDisplay.ICON


def test_record_predating_new_field_stays_valid():
    old_record = settings_to_json(HeaderSettings(background_color="#111111"))
    del old_record["cartDisplay"]
    settings = resolve_settings(ChromeSurface.HEADER, old_record)
    assert settings.background_color == "#111111"
    assert settings.cart_display == CartDisplay.ICON


def test_snake_case_keys_accepted():
    settings = resolve_settings(
        ChromeSurface.FOOTER, {"vertical_spacing": "thin"},
    )
    assert settings.vertical_spacing == SpacingCategory.THIN


def test_unknown_keys_ignored():
    settings = resolve_settings(ChromeSurface.FOOTER, {"fontFamily": "serif"})
    assert settings == FooterSettings()


def test_header_only_fields_ignored_for_footer():
    settings = resolve_settings(ChromeSurface.FOOTER, {"cartDisplay": "button"})
    assert not hasattr(settings, "cart_display")


# ─── Per-field fallback ──────────────────────────────────────────

def test_wrong_type_field_falls_back_and_logs(caplog):
    with caplog.at_level(logging.WARNING):
        settings = resolve_settings(
            ChromeSurface.HEADER,
            {"showStoreName": "yes", "textColor": "#abcdef"},
        )
    assert settings.show_store_name is True
    assert settings.text_color == "#abcdef"
    assert "show_store_name" in caplog.text


def test_bool_rejected_for_color_field():
    settings = resolve_settings(ChromeSurface.HEADER, {"backgroundColor": False})
    assert settings.background_color == "#ffffff"


def test_int_rejected_for_bool_field():
    settings = resolve_settings(ChromeSurface.FOOTER, {"navLinkBorder": 1})
    assert settings.nav_link_border is False


@pytest.mark.parametrize("surface", list(ChromeSurface))
def test_nav_link_border_style_rejects_round(surface):
    settings = resolve_settings(surface, {"navLinkBorderStyle": "round"})
    assert settings.nav_link_border_style == EdgeStyle.ROUNDED


def test_nav_link_border_style_accepts_square():
    settings = resolve_settings(ChromeSurface.FOOTER, {"navLinkBorderStyle": "square"})
    assert settings.nav_link_border_style == EdgeStyle.SQUARE


def test_button_style_still_accepts_round():
    settings = resolve_settings(ChromeSurface.HEADER, {"buttonStyle": "round"})
    assert settings.button_style == EdgeStyle.ROUND


def test_apply_edit_round_link_style_keeps_current():
    current = HeaderSettings(nav_link_border_style=EdgeStyle.SQUARE)
    edited = apply_edit(current, {"navLinkBorderStyle": "round"})
    assert edited.nav_link_border_style == EdgeStyle.SQUARE


def test_unknown_enum_value_falls_back():
    settings = resolve_settings(
        ChromeSurface.HEADER,
        {"buttonStyle": "hexagon", "horizontalSpacing": "expanded"},
    )
    assert settings.button_style == EdgeStyle.ROUNDED
    assert settings.horizontal_spacing == SpacingCategory.EXPANDED


# ─── apply_edit ──────────────────────────────────────────────────

def test_apply_edit_returns_new_object():
    original = HeaderSettings()
    edited = apply_edit(original, {"cartDisplay": "button"})
    assert edited.cart_display == CartDisplay.BUTTON
    assert original.cart_display == CartDisplay.ICON


def test_apply_edit_invalid_keeps_current_not_default():
    current = FooterSettings(vertical_spacing=SpacingCategory.EXPANDED)
    edited = apply_edit(current, {"verticalSpacing": "huge"})
    assert edited.vertical_spacing == SpacingCategory.EXPANDED


def test_apply_edit_with_no_valid_changes_returns_same_settings():
    current = FooterSettings()
    assert apply_edit(current, {}) is current


# ─── Serialization ───────────────────────────────────────────────

def test_settings_to_json_uses_camel_case_and_enum_values():
    blob = settings_to_json(FooterSettings())
    assert blob["backgroundColor"] == "#1f2937"
    assert blob["navLinkBorderStyle"] == "rounded"
    assert blob["verticalSpacing"] == "standard"
    assert "vertical_spacing" not in blob


def test_settings_json_resolves_back_to_same_settings():
    settings = HeaderSettings(
        button_style=EdgeStyle.ROUND, cart_display=CartDisplay.BUTTON,
        nav_link_border=True,
    )
    assert resolve_settings(ChromeSurface.HEADER, settings_to_json(settings)) == settings


def test_surface_of():
    assert surface_of(HeaderSettings()) == ChromeSurface.HEADER
    assert surface_of(FooterSettings()) == ChromeSurface.FOOTER
