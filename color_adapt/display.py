"""
Display-settings boundary.

Converts the raw system brightness setting (0-255) into the percentage the
engine works with. Missing or out-of-range readings are replaced by the
configured fallback percentage before anything reaches the engine.
"""

import math
from typing import Any, Dict, Optional

from .config.settings import ADAPTATION_DEFAULTS
from .processing.mapping import ScreenContext
from .utils.errors import log_fallback

# Value some platforms report when the setting cannot be read
UNAVAILABLE_SENTINEL = -1


def _params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    merged = ADAPTATION_DEFAULTS.copy()
    if params:
        merged.update(params)
    return merged


def brightness_percent_from_raw(raw_brightness, params: Optional[Dict[str, Any]] = None) -> int:
    """
    ``round(raw * 100 / raw_max)`` with halves rounded up.

    Args:
        raw_brightness: System brightness setting, or None / -1 when unavailable.
        params: Overrides for raw_brightness_max and brightness_fallback_percent.

    Returns:
        Brightness percentage in [0, 100].
    """
    p = _params(params)
    raw_max = p["raw_brightness_max"]
    fallback = int(p["brightness_fallback_percent"])

    if raw_brightness is None or raw_brightness == UNAVAILABLE_SENTINEL:
        log_fallback(f"Screen brightness unavailable; using {fallback}%")
        return fallback

    try:
        raw = float(raw_brightness)
    except (TypeError, ValueError):
        log_fallback(f"Unreadable screen brightness {raw_brightness!r}; using {fallback}%")
        return fallback

    if math.isnan(raw) or not 0 <= raw <= raw_max:
        log_fallback(f"Screen brightness {raw_brightness} outside [0, {raw_max}]; using {fallback}%")
        return fallback

    return int(math.floor(raw * 100 / raw_max + 0.5))


def screen_context_from_raw(raw_brightness, params: Optional[Dict[str, Any]] = None) -> ScreenContext:
    """ScreenContext for a raw brightness reading and the configured screen white point."""
    p = _params(params)
    return ScreenContext(
        screen_brightness_percent=brightness_percent_from_raw(raw_brightness, p),
        screen_white_point=p["screen_white_point"],
    )
