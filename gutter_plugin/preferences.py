"""User preferences loaded from ``gutter_message.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from gutter_client.panel_placer import PlacementSettings

PREFERENCES_FILENAME = "gutter_message.json"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20

_LOGGER = logging.getLogger("GutterMessage")

DEFAULT_PANEL_OPTIONS: Mapping[str, Any] = MappingProxyType(
    {
        "diff": False,
        "ruler": False,
        "filetype": "gutter-message",
        "softwrap": True,
        "diffgutter": False,
        "statusline": False,
        "statusformatl": "$(filename)",
        "statusformatr": "",
        "readonly": True,
        "scratch": True,
    }
)


@dataclass(frozen=True)
class PluginPreferences:
    panel_name: str = "Gutter Message"
    bullet: str = "* "
    title_row: bool = True
    min_width_divisor: int = 3
    max_width_margin: int = 4
    flip_above_ratio: float = 1.5
    log_retention: int = 5
    debug_logging: bool = False
    panel_options: Mapping[str, Any] = field(default_factory=lambda: dict(DEFAULT_PANEL_OPTIONS))

    def placement_settings(self) -> PlacementSettings:
        return PlacementSettings(
            min_width_divisor=self.min_width_divisor,
            max_width_margin=self.max_width_margin,
            flip_above_ratio=self.flip_above_ratio,
            title_row=self.title_row,
        )


def _coerce_log_retention(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return None
    if numeric < LOG_RETENTION_MIN:
        return LOG_RETENTION_MIN
    if numeric > LOG_RETENTION_MAX:
        return LOG_RETENTION_MAX
    return numeric


def _coerce_positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return None
    return numeric if numeric >= 1 else None


def _coerce_non_negative_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return None
    return numeric if numeric >= 0 else None


def _coerce_ratio(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if numeric != numeric or numeric <= 0.0:
        return None
    return numeric


def _coerce_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
    return None


def _coerce_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "panel_name": _coerce_text,
    "bullet": _coerce_text,
    "title_row": _coerce_bool,
    "min_width_divisor": _coerce_positive_int,
    "max_width_margin": _coerce_non_negative_int,
    "flip_above_ratio": _coerce_ratio,
    "log_retention": _coerce_log_retention,
    "debug_logging": _coerce_bool,
}


def load_preferences(path: Path) -> PluginPreferences:
    """Read preferences from ``path``; missing or malformed input falls back to defaults."""

    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _LOGGER.debug("Preferences not found at %s; using defaults", path)
        return PluginPreferences()
    except OSError as exc:
        _LOGGER.warning("Failed to read %s; using defaults (%s)", path, exc)
        return PluginPreferences()
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        _LOGGER.warning("Failed to parse %s; using defaults (%s)", path, exc)
        return PluginPreferences()
    if not isinstance(data, dict):
        _LOGGER.warning("Preferences at %s are not a JSON object; using defaults", path)
        return PluginPreferences()
    return preferences_from_mapping(data)


def preferences_from_mapping(data: Mapping[str, Any]) -> PluginPreferences:
    values: Dict[str, Any] = {}
    for key, coerce in _COERCERS.items():
        if key not in data:
            continue
        coerced = coerce(data[key])
        if coerced is None:
            _LOGGER.warning("Ignoring invalid preference '%s': %r", key, data[key])
            continue
        values[key] = coerced

    options = dict(DEFAULT_PANEL_OPTIONS)
    overrides = data.get("panel_options")
    if isinstance(overrides, dict):
        options.update({str(key): value for key, value in overrides.items()})
    elif overrides is not None:
        _LOGGER.warning("Ignoring invalid preference 'panel_options': %r", overrides)
    values["panel_options"] = options
    return PluginPreferences(**values)
