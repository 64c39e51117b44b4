"""Chrome Schemas - Pydantic models for the chrome configuration API boundary.

Invariants:
    - Settings blobs stay free-form dicts here; per-field validation is core's job
      (resolve_settings falls back per field instead of rejecting the request)
    - Column count bounded 1-4; column titles stripped, max 100 chars

Design Decisions:
    - Field-level constraints over custom validators where Pydantic has them
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class SettingsUpdate(BaseModel):
    """Partial or full settings blob for one surface (camelCase keys)."""
    settings: dict[str, Any] = Field(default_factory=dict)


class ColumnUpdate(BaseModel):
    """Title/visibility for one assignable footer column."""
    title: str | None = Field(None, max_length=100)
    enabled: bool = True

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class ColumnCountUpdate(BaseModel):
    column_count: int = Field(ge=1, le=4)


class PreviewRequest(BaseModel):
    """Unsaved editor state to compose against the persisted page list."""
    settings: dict[str, Any] = Field(default_factory=dict)
    column_count: int | None = Field(None, ge=1, le=4)
    columns: dict[int, ColumnUpdate] = Field(default_factory=dict)

