"""
Image statistics: peak brightness and white point estimation.

Both statistics are derived from the per-pixel average brightness
``(R + G + B) // 3``. The white point is the mean of that average over
near-white pixels (every channel above ``255 - threshold``).
"""

import concurrent.futures
from dataclasses import dataclass
from typing import Any, Dict, Iterable, NamedTuple, Optional

import numpy as np

from .buffer import PixelBuffer
from ..config.settings import ADAPTATION_DEFAULTS
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BrightnessProfile:
    """Statistics of one buffer, recomputed for every image."""
    max_pixel_brightness: int
    image_white_point: int


class _ChunkStats(NamedTuple):
    max_avg: int
    white_sum: int
    white_count: int


_EMPTY_STATS = _ChunkStats(0, 0, 0)


def _average_brightness(rgb: np.ndarray) -> np.ndarray:
    # int32 so R+G+B cannot wrap
    return rgb.astype(np.int32).sum(axis=-1) // 3


def _scan_chunk(rgb: np.ndarray, threshold: int) -> _ChunkStats:
    if rgb.size == 0:
        return _EMPTY_STATS
    avg = _average_brightness(rgb)
    near_white = np.all(rgb > 255 - threshold, axis=-1)
    return _ChunkStats(
        max_avg=int(avg.max()),
        white_sum=int(avg[near_white].sum(dtype=np.int64)),
        white_count=int(np.count_nonzero(near_white)),
    )


def _combine(parts: Iterable[_ChunkStats]) -> _ChunkStats:
    """Merge partial results; max and sums are order independent."""
    max_avg, white_sum, white_count = 0, 0, 0
    for part in parts:
        max_avg = max(max_avg, part.max_avg)
        white_sum += part.white_sum
        white_count += part.white_count
    return _ChunkStats(max_avg, white_sum, white_count)


class ImageAnalyzer:
    """
    Computes brightness statistics for a PixelBuffer.

    Scans can be split into row chunks and run on a thread pool. The result
    does not depend on the chunking.
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        """
        Args:
            params: Overrides for ADAPTATION_DEFAULTS. Relevant keys:
                white_threshold, no_white_fallback, chunk_rows, max_workers.
        """
        self.params = ADAPTATION_DEFAULTS.copy()
        if params:
            self.params.update(params)

    def _scan(self, buffer: PixelBuffer) -> _ChunkStats:
        if buffer.is_empty:
            return _EMPTY_STATS

        threshold = int(self.params["white_threshold"])
        rgb = buffer.rgb
        max_workers = int(self.params.get("max_workers") or 1)
        chunks = list(buffer.row_chunks(self.params.get("chunk_rows")))

        if max_workers <= 1 or len(chunks) <= 1:
            return _combine(_scan_chunk(rgb[start:stop], threshold) for start, stop in chunks)

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_scan_chunk, rgb[start:stop], threshold)
                for start, stop in chunks
            ]
            return _combine(f.result() for f in futures)

    def _white_point_from(self, stats: _ChunkStats) -> int:
        if stats.white_count == 0:
            return int(self.params["no_white_fallback"])
        return stats.white_sum // stats.white_count

    def max_brightness(self, buffer: PixelBuffer) -> int:
        """Largest per-pixel average brightness; 0 for an empty buffer."""
        return self._scan(buffer).max_avg

    def white_point(self, buffer: PixelBuffer) -> int:
        """Mean average brightness of near-white pixels, or the fallback (255) if there are none."""
        return self._white_point_from(self._scan(buffer))

    def analyze(self, buffer: PixelBuffer) -> BrightnessProfile:
        """Both statistics from a single pass."""
        stats = self._scan(buffer)
        profile = BrightnessProfile(
            max_pixel_brightness=stats.max_avg,
            image_white_point=self._white_point_from(stats),
        )
        if buffer.is_empty:
            logger.debug("Empty buffer; using default brightness profile %s", profile)
        elif stats.white_count == 0:
            logger.debug("No near-white pixels found; white point defaults to %d",
                         profile.image_white_point)
        return profile


def max_brightness(buffer: PixelBuffer) -> int:
    return ImageAnalyzer().max_brightness(buffer)


def white_point(buffer: PixelBuffer, threshold: int = ADAPTATION_DEFAULTS["white_threshold"]) -> int:
    return ImageAnalyzer({"white_threshold": threshold}).white_point(buffer)


def analyze(buffer: PixelBuffer, params: Optional[Dict[str, Any]] = None) -> BrightnessProfile:
    return ImageAnalyzer(params).analyze(buffer)
