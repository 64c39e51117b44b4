"""Configuration Persister - validated last-write-wins upsert of one (tenant, key) setting.

Invariants:
    - Unknown keys and values that cannot be stored raise SettingsValidationError
      BEFORE the store is touched
    - A storage failure is returned as SaveResult(status="failed"), never raised,
      never retried automatically, and nothing in memory is rolled back
    - Every save gets a per-(tenant, key) sequence number; a save that completes
      after a newer one was issued is reported superseded=True

Design Decisions:
    - Sequencing only tags results; the write itself is not suppressed (the store
      has no fencing, the caller decides whether to discard a superseded result)
    - _save_sequencer is module-level so persisters built per request share it
      (single-process deployment, counters reset on restart)
"""

import json
import logging
from dataclasses import dataclass, asdict
from typing import Any

from app.core.domain_types import (
    ASSIGNABLE_COLUMNS, MAX_COLUMN_COUNT, MIN_COLUMN_COUNT, SettingKey, TenantId,
)
from app.core.errors import ChromeLayoutError, ErrorContext, SettingsValidationError
from app.core.repository_protocols import SettingsStore

logger = logging.getLogger(__name__)

SAVED = "saved"
FAILED = "failed"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of one save call."""
    status: str
    tenant_id: str
    key: str
    sequence: int
    superseded: bool = False
    error_code: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == SAVED

    def to_dict(self) -> dict:
        return asdict(self)


class SaveSequencer:
    """Monotonic save counter per (tenant, key)."""

    def __init__(self) -> None:
        self._latest: dict[tuple[str, str], int] = {}

    def issue(self, tenant_id: str, key: str) -> int:
        sequence = self._latest.get((tenant_id, key), 0) + 1
        self._latest[(tenant_id, key)] = sequence
        return sequence

    def is_latest(self, tenant_id: str, key: str, sequence: int) -> bool:
        return self._latest.get((tenant_id, key), 0) == sequence


_save_sequencer = SaveSequencer()


class ConfigurationPersister:
    """Validates and upserts settings through a SettingsStore."""

    def __init__(self, store: SettingsStore, sequencer: SaveSequencer | None = None):
        self._store = store
        self._sequencer = sequencer or _save_sequencer

    async def save(self, tenant_id: TenantId, key: str, value: Any) -> SaveResult:
        setting_key = validate_setting(tenant_id, key, value)
        sequence = self._sequencer.issue(tenant_id, setting_key.value)
        try:
            await self._store.upsert(tenant_id, setting_key.value, value)
        except (ChromeLayoutError, OSError) as e:
            code = e.code if isinstance(e, ChromeLayoutError) else "STORE_UNAVAILABLE"
            logger.error(
                f"Save of {setting_key.value} failed: {e}",
                extra={
                    "tenant_id": tenant_id,
                    "setting_key": setting_key.value,
                    "sequence": sequence,
                    "error_code": code,
                },
            )
            return SaveResult(
                status=FAILED,
                tenant_id=tenant_id,
                key=setting_key.value,
                sequence=sequence,
                superseded=self._superseded(tenant_id, setting_key, sequence),
                error_code=code,
                message="Settings could not be saved. Retry to persist the shown values.",
            )

        superseded = self._superseded(tenant_id, setting_key, sequence)
        logger.info(
            f"Saved {setting_key.value}"
            + (" (superseded by a newer save)" if superseded else ""),
            extra={
                "tenant_id": tenant_id,
                "setting_key": setting_key.value,
                "sequence": sequence,
            },
        )
        return SaveResult(
            status=SAVED,
            tenant_id=tenant_id,
            key=setting_key.value,
            sequence=sequence,
            superseded=superseded,
        )

    def _superseded(self, tenant_id: str, key: SettingKey, sequence: int) -> bool:
        return not self._sequencer.is_latest(tenant_id, key.value, sequence)


def validate_setting(tenant_id: TenantId, key: str, value: Any) -> SettingKey:
    """Check the key is known and the value fits it. Raises SettingsValidationError."""
    context = ErrorContext(tenant_id=tenant_id, setting_key=str(key))
    if not tenant_id:
        raise SettingsValidationError("Tenant id is required", "tenant_id", context)
    try:
        setting_key = SettingKey(key)
    except ValueError:
        raise SettingsValidationError(f"Unknown setting key '{key}'", "key", context)

    try:
        json.dumps(value)
    except (TypeError, ValueError):
        raise SettingsValidationError(
            "Setting value must be JSON-serializable", "value", context,
        )

    if setting_key == SettingKey.FOOTER_COLUMN_COUNT:
        if (
            isinstance(value, bool) or not isinstance(value, int)
            or not MIN_COLUMN_COUNT <= value <= MAX_COLUMN_COUNT
        ):
            raise SettingsValidationError(
                f"Column count must be an integer between "
                f"{MIN_COLUMN_COUNT} and {MAX_COLUMN_COUNT}",
                "value", context,
            )
    elif not isinstance(value, dict):
        raise SettingsValidationError(
            f"Value for '{setting_key.value}' must be an object", "value", context,
        )
    elif setting_key.value in _COLUMN_KEYS:
        _validate_column_record(value, context)
    return setting_key


_COLUMN_KEYS = {f"footer_column_{n}" for n in ASSIGNABLE_COLUMNS}


def _validate_column_record(value: dict, context: ErrorContext) -> None:
    title = value.get("title")
    if title is not None and not isinstance(title, str):
        raise SettingsValidationError("Column title must be a string", "title", context)
    enabled = value.get("enabled")
    if enabled is not None and not isinstance(enabled, bool):
        raise SettingsValidationError("Column enabled must be a boolean", "enabled", context)
