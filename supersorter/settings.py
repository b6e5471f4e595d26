import json
import logging
import os
from dataclasses import dataclass, fields, replace

from .errors import ConfigError

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH   = 1100
WINDOW_HEIGHT  = 680
FPS            = 60
FRAME_INTERVAL = 1.0 / FPS

DEFAULT_ARRAY_SIZE = 10
MAX_ARRAY_SIZE     = 128
MIN_ARRAY_VALUE    = 5
MAX_ARRAY_VALUE    = 500

# Inter-step delay in milliseconds. Anything below BURST_THRESHOLD_MS runs
# in burst mode: as many steps per frame as fit in FRAME_BUDGET_MS.
ANIMATION_SPEED_DEFAULT = 200
BURST_THRESHOLD_MS      = 5
FRAME_BUDGET_MS         = 12

BENCHMARK_SIZE_DEFAULT = 1000
BENCHMARK_SIZE_MIN     = 100
BENCHMARK_SIZE_MAX     = 5000
BENCHMARK_VALUE_MAX    = 10000

# Export keeps every Nth step of the history (plus the last one).
HISTORY_DOWNSAMPLE = 10

# ============================================================
# ========================= UI THEME =========================
# ============================================================

BACKGROUND_COLOR = (5, 5, 10)
BAR_COLOR        = (99, 102, 241)
COMPARE_COLOR    = (234, 179, 8)
SWAP_COLOR       = (239, 68, 68)
SORTED_COLOR     = (34, 197, 94)
RANGE_COLOR      = (22, 22, 36)
PIVOT_COLOR      = (255, 255, 255)
UI_TEXT          = (215, 215, 228)
UI_SUBTEXT       = (105, 105, 130)
BAR_SPACING      = 1

if os.name == "nt":
    APPDATA = os.getenv("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
    SETTINGS_PATH = os.path.join(APPDATA, "SuperSorter", "settings.json")
else:
    SETTINGS_PATH = os.path.expanduser("~/.supersorter/settings.json")


@dataclass(frozen=True)
class Settings:
    """The tunable subset of the constants above."""

    array_size: int = DEFAULT_ARRAY_SIZE
    min_value: int = MIN_ARRAY_VALUE
    max_value: int = MAX_ARRAY_VALUE
    delay_ms: float = ANIMATION_SPEED_DEFAULT
    burst_threshold_ms: float = BURST_THRESHOLD_MS
    frame_budget_ms: float = FRAME_BUDGET_MS
    benchmark_size: int = BENCHMARK_SIZE_DEFAULT
    benchmark_max_value: int = BENCHMARK_VALUE_MAX
    fps: int = FPS

    @property
    def value_range(self):
        return (self.min_value, self.max_value)

    @property
    def frame_interval(self):
        return 1.0 / self.fps


def _coerce(name, kind, value):
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if kind is int:
        if isinstance(value, float) and not value.is_integer():
            raise ConfigError(f"{name} must be an integer, got {value!r}")
        return int(value)
    return float(value)


def load_settings(path: str | None = None) -> Settings:
    """Read JSON overrides on top of the defaults.

    A missing file gives the defaults. A file that is not valid JSON is
    logged and ignored. Values of the wrong type raise ConfigError.
    """
    path = path or SETTINGS_PATH
    settings = Settings()
    if not os.path.exists(path):
        return settings
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not an object", path)
        return settings

    known = {f.name: f.type for f in fields(Settings)}
    overrides = {}
    for name, value in data.items():
        if name not in known:
            logger.warning("Unknown setting %r in %s", name, path)
            continue
        kind = int if known[name] in (int, "int") else float
        overrides[name] = _coerce(name, kind, value)
    settings = replace(settings, **overrides)
    if settings.min_value < 0 or settings.min_value > settings.max_value:
        raise ConfigError(f"Invalid value range {settings.value_range}")
    if settings.fps < 1:
        raise ConfigError(f"fps must be at least 1, got {settings.fps}")
    logger.debug("Loaded settings from %s: %s", path, overrides)
    return settings
