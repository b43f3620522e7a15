"""
End-to-end adaptation: rotate, analyze, map, transform.

Statistics are always taken from the rotated buffer so camera and gallery
sources go through the same order of operations.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .analyzer import BrightnessProfile, ImageAnalyzer
from .buffer import PixelBuffer
from .mapping import ScreenContext, scale_for_screen
from .orientation import Orientation, normalize
from .transform import PixelTransformer
from ..config.settings import ADAPTATION_DEFAULTS
from ..utils.logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]

TOTAL_STEPS = 4


@dataclass(frozen=True)
class AdaptationResult:
    """Output buffer plus the values that produced it."""
    buffer: PixelBuffer
    profile: BrightnessProfile
    scale: float
    orientation: Orientation


class AdaptationEngine:
    """Runs the four adaptation stages on one image at a time."""

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        self.params = ADAPTATION_DEFAULTS.copy()
        if params:
            self.params.update(params)
        self.analyzer = ImageAnalyzer(self.params)
        self.transformer = PixelTransformer(self.params)

    def default_screen(self, screen_brightness_percent: int) -> ScreenContext:
        """ScreenContext using the configured screen white point."""
        return ScreenContext(
            screen_brightness_percent=screen_brightness_percent,
            screen_white_point=self.params["screen_white_point"],
        )

    def process(
        self,
        buffer: PixelBuffer,
        orientation,
        screen: ScreenContext,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> AdaptationResult:
        """
        Adapt `buffer` for display on `screen`.

        Args:
            buffer: Decoded source image (not modified).
            orientation: Orientation, raw EXIF code or None.
            screen: Display brightness and reference white point.
            progress_callback: Optional callable(current_step, total_steps).

        Returns:
            AdaptationResult with the upright, adapted buffer.
        """
        def report(step):
            if progress_callback:
                progress_callback(step, TOTAL_STEPS)

        orientation = Orientation.from_exif(orientation)

        upright = normalize(buffer, orientation)
        report(1)

        profile = self.analyzer.analyze(upright)
        report(2)

        scale = scale_for_screen(screen, profile.image_white_point)
        report(3)

        adapted = self.transformer.apply(upright, scale, profile.max_pixel_brightness)
        report(4)

        logger.info(
            "Adapted %dx%d image: orientation=%s max=%d white=%d brightness=%d%% scale=%.4f",
            adapted.width, adapted.height, orientation.name,
            profile.max_pixel_brightness, profile.image_white_point,
            screen.screen_brightness_percent, scale,
        )
        return AdaptationResult(buffer=adapted, profile=profile, scale=scale, orientation=orientation)

    def adapt(self, buffer: PixelBuffer, orientation, screen: ScreenContext) -> PixelBuffer:
        return self.process(buffer, orientation, screen).buffer


def adapt_image(
    buffer: PixelBuffer,
    orientation,
    screen_brightness_percent: int,
    screen_white_point: int = ADAPTATION_DEFAULTS["screen_white_point"],
) -> PixelBuffer:
    """Convenience wrapper around AdaptationEngine with default parameters."""
    screen = ScreenContext(screen_brightness_percent, screen_white_point)
    return AdaptationEngine().adapt(buffer, orientation, screen)
