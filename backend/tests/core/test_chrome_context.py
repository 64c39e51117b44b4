"""Chrome Context - tests for per-mutation recomposition of the preview descriptor.

Tests cover:
    - edit() recomposes immediately and keeps the context's settings updated
    - set_column_count / set_column validate input and change visible columns
    - hidden_footer_pages reports pages the policy hides
"""

import pytest

from app.core.chrome_context import ChromeContext
from app.core.classify_navigation import NavigationPage
from app.core.domain_types import NavigationPlacement, TenantId
from app.core.errors import SettingsValidationError
from app.core.resolve_settings import FooterSettings, HeaderSettings


def _footer_context(*pages):
    return ChromeContext(
        tenant_id=TenantId("store-1"), settings=FooterSettings(), pages=tuple(pages),
    )


def _page(name, footer_column=None):
    return NavigationPage(
        id=name.lower(), name=name, slug=f"/{name.lower()}",
        placement=NavigationPlacement.FOOTER, footer_column=footer_column,
    )


def test_edit_recomposes_on_every_mutation():
    context = ChromeContext(tenant_id=TenantId("store-1"), settings=HeaderSettings())
    first = context.edit({"backgroundColor": "#000000"})
    second = context.edit({"backgroundColor": "#000001"})
    assert first.background_color == "#000000"
    assert second.background_color == "#000001"
    assert context.settings.background_color == "#000001"


def test_descriptor_matches_last_edit():
    context = ChromeContext(tenant_id=TenantId("store-1"), settings=HeaderSettings())
    preview = context.edit({"cartDisplay": "button"})
    assert context.descriptor() == preview


def test_set_column_count_changes_visible_columns():
    context = _footer_context(_page("Privacy", 4))
    descriptor = context.set_column_count(2)
    assert [c.number for c in descriptor.columns] == [1, 2]
    assert [p.name for p in context.hidden_footer_pages()] == ["Privacy"]

    descriptor = context.set_column_count(4)
    assert [e.name for e in descriptor.column(4).entries] == ["Privacy"]
    assert context.hidden_footer_pages() == ()


@pytest.mark.parametrize("count", [0, 5, True])
def test_set_column_count_rejects_out_of_range(count):
    context = _footer_context()
    with pytest.raises(SettingsValidationError):
        context.set_column_count(count)
    assert context.column_policy.column_count == 4


def test_set_column_updates_title():
    context = _footer_context()
    descriptor = context.set_column(3, {"title": "Help Center"})
    assert descriptor.column(3).title == "Help Center"


def test_set_column_disable_hides_column():
    context = _footer_context(_page("Help", 3))
    descriptor = context.set_column(3, {"title": "Support", "enabled": False})
    assert descriptor.column(3) is None


@pytest.mark.parametrize("column", [1, 5])
def test_set_column_rejects_unassignable(column):
    with pytest.raises(SettingsValidationError):
        _footer_context().set_column(column, {"title": "X"})
