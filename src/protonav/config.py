"""Engine configuration and its JSON persistence."""
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from protonav.core.types import TRIGGER_KINDS, BusyPolicy, TriggerKind

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS_THRESHOLD = 10.0
_DEFAULT_BUSY_POLICY: BusyPolicy = "reject"
_DEFAULT_TRIGGER: TriggerKind = "ON_CLICK"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables for one navigation session.

    busy_policy: what a navigating click does while a transition animates;
        "reject" drops the click, "cancel" truncates the running animation.
    duration_ms_threshold: raw durations above this are milliseconds.
    default_trigger: trigger used by ``activate`` when none is given.
    max_history: history entries kept; 0 keeps everything.
    """

    busy_policy: BusyPolicy = _DEFAULT_BUSY_POLICY
    duration_ms_threshold: float = DEFAULT_DURATION_MS_THRESHOLD
    default_trigger: TriggerKind = _DEFAULT_TRIGGER
    max_history: int = 0


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "protonav"
        return Path.home() / "protonav"
    return Path.home() / ".config" / "protonav"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_busy_policy(value: object) -> BusyPolicy:
    return "cancel" if value == "cancel" else _DEFAULT_BUSY_POLICY


def _normalize_threshold(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_DURATION_MS_THRESHOLD
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_DURATION_MS_THRESHOLD
    return float(value)


def _normalize_trigger(value: object) -> TriggerKind:
    return value if value in TRIGGER_KINDS else _DEFAULT_TRIGGER


def _normalize_max_history(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


def config_from_mapping(raw: object) -> EngineConfig:
    """Build a config from loosely typed data, replacing bad values with defaults."""
    if not isinstance(raw, dict):
        return EngineConfig()
    return EngineConfig(
        busy_policy=_normalize_busy_policy(raw.get("busy_policy")),
        duration_ms_threshold=_normalize_threshold(raw.get("duration_ms_threshold")),
        default_trigger=_normalize_trigger(raw.get("default_trigger")),
        max_history=_normalize_max_history(raw.get("max_history")),
    )


def load_config(path: Path | None = None) -> EngineConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return EngineConfig()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return EngineConfig()
    return config_from_mapping(raw)


def save_config(config: EngineConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(config_from_mapping(asdict(config)))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
