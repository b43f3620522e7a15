"""
Pixel transform: uniform channel scaling clamped to the image's peak brightness.
"""

import concurrent.futures
from typing import Any, Dict, Optional

import numpy as np

from .buffer import ALPHA, RED, PixelBuffer
from ..config.settings import ADAPTATION_DEFAULTS
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _scale_rows(argb: np.ndarray, out: np.ndarray, scale: float, upper: int) -> None:
    """Write scaled rows of `argb` into `out` (same shape)."""
    scaled = np.trunc(argb[..., RED:].astype(np.float64) * scale)
    # NaN can only come from 0 * inf; treat as black
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=float(upper), neginf=0.0)
    out[..., RED:] = np.clip(scaled, 0, upper).astype(np.uint8)
    out[..., ALPHA] = argb[..., ALPHA]


class PixelTransformer:
    """Applies a brightness scale to every pixel of a buffer."""

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        self.params = ADAPTATION_DEFAULTS.copy()
        if params:
            self.params.update(params)

    def apply(self, buffer: PixelBuffer, scale: float, max_pixel_brightness: int) -> PixelBuffer:
        """
        Scale R, G and B of every pixel and clamp to [0, max_pixel_brightness].

        Channels are truncated toward zero after scaling. Alpha is copied
        unchanged. The input buffer is not modified.

        Args:
            buffer: Source buffer.
            scale: Channel multiplier from the brightness mapping.
            max_pixel_brightness: Upper clamp bound, itself limited to [0, 255].

        Returns:
            New PixelBuffer with the same dimensions.
        """
        upper = int(min(max(max_pixel_brightness, 0), 255))
        source = buffer.pixels
        out = np.empty_like(source)
        if buffer.is_empty:
            return PixelBuffer._adopt(out)

        chunks = list(buffer.row_chunks(self.params.get("chunk_rows")))
        max_workers = int(self.params.get("max_workers") or 1)

        if max_workers <= 1 or len(chunks) <= 1:
            for start, stop in chunks:
                _scale_rows(source[start:stop], out[start:stop], scale, upper)
        else:
            # Chunks write disjoint row ranges of `out`
            with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [
                    executor.submit(_scale_rows, source[start:stop], out[start:stop], scale, upper)
                    for start, stop in chunks
                ]
                for future in futures:
                    future.result()

        logger.debug("Applied scale %.4f with clamp %d to %dx%d buffer",
                     scale, upper, buffer.width, buffer.height)
        return PixelBuffer._adopt(out)


def apply(buffer: PixelBuffer, scale: float, max_pixel_brightness: int) -> PixelBuffer:
    return PixelTransformer().apply(buffer, scale, max_pixel_brightness)
