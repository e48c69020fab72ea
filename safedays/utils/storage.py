"""
Local file storage for the persisted settings blob.

The engine never touches storage directly; callers load a CycleSettings value
at startup, save after each update and clear on reset. Loading never raises:
it returns Ok(settings) or Err(reason), and load_or_default() applies the
documented recovery policy of falling back to default settings.

Typical usage:
    store = get_store()
    settings = store.load_or_default(date.today())
    store.save(update_cycle_start(settings, date.today()))
"""
import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union
from datetime import date
from pydantic import ValidationError

from safedays.models.settings import AppMode, CycleSettings, Theme
from safedays.services.constants import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_DURATION
from safedays.services.exceptions import SettingsClearError, SettingsSaveError
from safedays.services.history import close_stranded_cycles
from safedays.services.utils import DateLike, parse_date, to_day
from safedays.utils.logging import logger

DEFAULT_DATA_FILE = Path.home() / ".safedays" / "safedays_data_v2.json"

# Themes written by older releases
LEGACY_THEMES = {"PURPLE": Theme.DARK.value}

# Singleton instance
_store_instance = None

def get_store() -> 'SettingsStore':
    """
    Get or create the singleton settings store.

    The file location comes from the SAFEDAYS_DATA_FILE environment variable,
    defaulting to ~/.safedays/safedays_data_v2.json.

    Returns:
        SettingsStore: Singleton store instance
    """
    global _store_instance
    if _store_instance is None:
        path = os.environ.get('SAFEDAYS_DATA_FILE') or DEFAULT_DATA_FILE
        _store_instance = SettingsStore(Path(path))
    return _store_instance

@dataclass(frozen=True)
class Ok:
    """Settings loaded successfully."""
    settings: CycleSettings

@dataclass(frozen=True)
class Err:
    """Settings could not be loaded."""
    reason: str
    error_type: str

LoadResult = Union[Ok, Err]

def default_settings(today: DateLike) -> CycleSettings:
    """Settings for a user who has not been onboarded yet."""
    return CycleSettings(
        is_onboarded=False,
        last_period_date=to_day(today),
        average_cycle_length=DEFAULT_CYCLE_LENGTH,
        period_duration=DEFAULT_PERIOD_DURATION,
        cycles=[],
        logs={},
        mode=AppMode.TRACKING,
        theme=Theme.AUTO
    )

def migrate_settings(raw: Dict[str, Any], today: DateLike) -> Dict[str, Any]:
    """
    Upgrade a persisted blob to the current shape.

    Fills in fields added by later releases, maps legacy theme names and
    reduces every stored timestamp to its calendar date. Dates that cannot be
    parsed become today.

    Args:
        raw: Blob as read from storage (camelCase keys)
        today: Day to use for missing or malformed dates

    Returns:
        New dictionary ready for CycleSettings validation
    """
    data = dict(raw)
    data["lastPeriodDate"] = parse_date(data.get("lastPeriodDate"), today).isoformat()

    if data.get("pregnancyStartDate"):
        data["pregnancyStartDate"] = parse_date(data["pregnancyStartDate"], today).isoformat()
    else:
        data.pop("pregnancyStartDate", None)

    if data.get("cycles") is None:
        data["cycles"] = [{"startDate": data["lastPeriodDate"]}]
    else:
        cycles = []
        for cycle in data["cycles"]:
            migrated = dict(cycle)
            migrated["startDate"] = parse_date(cycle.get("startDate"), today).isoformat()
            if cycle.get("endDate"):
                migrated["endDate"] = parse_date(cycle["endDate"], today).isoformat()
            else:
                migrated.pop("endDate", None)
            if not cycle.get("length"):
                migrated.pop("length", None)
            cycles.append(migrated)
        data["cycles"] = cycles

    if not data.get("mode"):
        data["mode"] = AppMode.TRACKING.value
    if not data.get("theme"):
        data["theme"] = Theme.AUTO.value
    data["theme"] = LEGACY_THEMES.get(data["theme"], data["theme"])
    if not data.get("periodDuration"):
        data["periodDuration"] = DEFAULT_PERIOD_DURATION

    logs = data.get("logs") or {}
    data["logs"] = {
        key: entry for key, entry in logs.items()
        if isinstance(entry, dict) and (entry.get("flow") or entry.get("spotting"))
    }

    return data

class SettingsStore:
    """JSON file holding the settings blob of the single local user."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self, today: date) -> LoadResult:
        """
        Read and migrate the stored settings.

        Args:
            today: Day used for defaults and malformed dates

        Returns:
            Ok with the settings (defaults when nothing is stored yet), or
            Err when the stored blob is unreadable or invalid
        """
        if not self.path.exists():
            logger.info("No stored settings found, using defaults", extra={"path": str(self.path)})
            return Ok(default_settings(today))

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            return Err(reason=f"Failed to read settings: {str(e)}", error_type=e.__class__.__name__)

        if not isinstance(raw, dict):
            return Err(reason="Stored settings are not a JSON object", error_type="TypeError")

        try:
            settings = CycleSettings.model_validate(migrate_settings(raw, today))
        except (ValidationError, AttributeError, TypeError) as e:
            return Err(reason=f"Invalid settings: {str(e)}", error_type=e.__class__.__name__)

        settings = settings.model_copy(update={"cycles": close_stranded_cycles(settings.cycles)})

        logger.info("Loaded settings", extra={
            "path": str(self.path),
            "cycles": len(settings.cycles),
            "logs": len(settings.logs)
        })
        return Ok(settings)

    def load_or_default(self, today: date) -> CycleSettings:
        """
        Load the stored settings, recovering with defaults on failure.

        The unreadable blob is left in place so it can still be inspected.
        """
        result = self.load(today)
        if isinstance(result, Err):
            logger.warning("Falling back to default settings", extra={
                "path": str(self.path),
                "reason": result.reason,
                "error_type": result.error_type
            })
            return default_settings(today)
        return result.settings

    def save(self, settings: CycleSettings) -> None:
        """
        Persist the settings, replacing the stored blob.

        Raises:
            SettingsSaveError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(json.dumps(settings.to_blob()), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            logger.exception("Error saving settings", extra={
                "path": str(self.path),
                "error_type": e.__class__.__name__
            })
            raise SettingsSaveError(f"Failed to save settings: {str(e)}") from e

        logger.info("Saved settings", extra={"path": str(self.path)})

    def clear(self) -> None:
        """
        Remove the stored settings.

        Raises:
            SettingsClearError: If the file exists but cannot be removed
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.exception("Error clearing settings", extra={
                "path": str(self.path),
                "error_type": e.__class__.__name__
            })
            raise SettingsClearError(f"Failed to clear settings: {str(e)}") from e

        logger.info("Cleared settings", extra={"path": str(self.path)})
