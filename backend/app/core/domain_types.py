"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - TenantId wraps the tenant identifier; never pass a bare str through core logic
    - All valid states encoded as Enums, no raw string matching outside this module
    - Column 1 is the brand column; only ASSIGNABLE_COLUMNS (2-4) carry pages

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (descriptor is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TenantId = NewType("TenantId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ChromeSurface(str, Enum):
    """The two chrome elements that can be configured."""
    HEADER = "header"
    FOOTER = "footer"


class NavigationPlacement(str, Enum):
    """Per-page control of where its link appears."""
    HEADER = "header"
    FOOTER = "footer"
    BOTH = "both"
    NONE = "none"


class EdgeStyle(str, Enum):
    """Corner treatment for links and buttons."""
    ROUNDED = "rounded"
    SQUARE = "square"
    ROUND = "round"


class SpacingCategory(str, Enum):
    """Padding category for the chrome container."""
    THIN = "thin"
    STANDARD = "standard"
    EXPANDED = "expanded"


class CartDisplay(str, Enum):
    """Header shopping-cart rendering mode."""
    ICON = "icon"
    BUTTON = "button"


class SecondaryGroup(str, Enum):
    """Auxiliary display grouping for footer links. Never persisted."""
    GENERAL = "general"
    LEGAL = "legal"


class SettingKey(str, Enum):
    """Keys this core reads and writes in the SettingsStore."""
    HEADER_CONFIGURATION = "header_configuration"
    FOOTER_CONFIGURATION = "footer_configuration"
    FOOTER_COLUMN_COUNT = "footer_column_count"
    FOOTER_COLUMN_2 = "footer_column_2"
    FOOTER_COLUMN_3 = "footer_column_3"
    FOOTER_COLUMN_4 = "footer_column_4"


# ─── Column Constants ────────────────────────────────────────────

BRAND_COLUMN: int = 1
ASSIGNABLE_COLUMNS: tuple[int, ...] = (2, 3, 4)
FALLBACK_COLUMN: int = 2
MIN_COLUMN_COUNT: int = 1
MAX_COLUMN_COUNT: int = 4
DEFAULT_COLUMN_COUNT: int = 4

DEFAULT_COLUMN_TITLES: dict[int, str] = {
    1: "Company",
    2: "General",
    3: "Support",
    4: "Legal",
}


def settings_key_for(surface: ChromeSurface) -> SettingKey:
    """Map a chrome surface to the key its style settings are stored under."""
    if surface == ChromeSurface.HEADER:
        return SettingKey.HEADER_CONFIGURATION
    return SettingKey.FOOTER_CONFIGURATION


def column_key_for(column_number: int) -> SettingKey:
    """Map an assignable column to the key its title/enabled record uses."""
    if column_number not in ASSIGNABLE_COLUMNS:
        raise ValueError(f"column {column_number} is not assignable")
    return SettingKey(f"footer_column_{column_number}")
