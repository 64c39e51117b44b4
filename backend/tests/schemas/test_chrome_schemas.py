"""Chrome request schemas - boundary validation for column and preview payloads.

Invariants:
    - column_count bounded 1-4 at the boundary
    - Column titles stripped, max 100 chars; enabled defaults to True
    - Settings blobs are accepted as free-form dicts
"""

import pytest
from pydantic import ValidationError

from app.schemas.chrome import (
    ColumnCountUpdate,
    ColumnUpdate,
    PreviewRequest,
    SettingsUpdate,
)


# --- ColumnUpdate -------------------------------------------------------------

def test_column_update_strips_title():
    assert ColumnUpdate(title="  Help  ").title == "Help"


def test_column_update_defaults():
    update = ColumnUpdate()
    assert update.title is None
    assert update.enabled is True


def test_column_title_max_length_enforced():
    with pytest.raises(ValidationError):
        ColumnUpdate(title="x" * 101)


# --- ColumnCountUpdate --------------------------------------------------------

@pytest.mark.parametrize("count", [1, 4])
def test_column_count_bounds_accepted(count):
    assert ColumnCountUpdate(column_count=count).column_count == count


@pytest.mark.parametrize("count", [0, 5])
def test_column_count_out_of_range_rejected(count):
    with pytest.raises(ValidationError):
        ColumnCountUpdate(column_count=count)


# --- PreviewRequest / SettingsUpdate -------------------------------------------

def test_preview_request_coerces_column_keys():
    request = PreviewRequest(columns={"3": {"title": "Support"}})
    assert list(request.columns) == [3]
    assert request.column_count is None


def test_settings_update_accepts_any_fields():
    update = SettingsUpdate(settings={"backgroundColor": "#fff", "unknown": 1})
    assert update.settings["unknown"] == 1
