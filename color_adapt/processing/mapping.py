"""Brightness mapping from screen settings and image white point to a channel scale."""

from dataclasses import dataclass

from ..config.settings import ADAPTATION_DEFAULTS
from ..utils.errors import ConfigurationError


@dataclass(frozen=True)
class ScreenContext:
    """
    Display state the adaptation is computed for.

    Attributes:
        screen_brightness_percent: Display brightness as a percentage. Not clamped.
        screen_white_point: Assumed reference white level of the display.
    """
    screen_brightness_percent: int
    screen_white_point: int = ADAPTATION_DEFAULTS["screen_white_point"]

    def __post_init__(self):
        _check_screen_white_point(self.screen_white_point)


def _check_screen_white_point(value) -> None:
    if value is None or value <= 0:
        raise ConfigurationError(
            f"screen_white_point must be positive, got {value}",
            setting_name="screen_white_point",
        )


def scale_factor(
    screen_brightness_percent: float,
    image_white_point: float,
    screen_white_point: float = ADAPTATION_DEFAULTS["screen_white_point"],
) -> float:
    """
    Uniform R/G/B scale: ``(percent / 100) * (image_white_point / screen_white_point)``.

    The percentage is used as given; out-of-range values are left for the
    transform's clamp to bound.
    """
    _check_screen_white_point(screen_white_point)
    return (screen_brightness_percent / 100.0) * (image_white_point / screen_white_point)


def scale_for_screen(screen: ScreenContext, image_white_point: int) -> float:
    return scale_factor(screen.screen_brightness_percent, image_white_point, screen.screen_white_point)
