"""
Orientation normalization.

Rotates a buffer into upright presentation according to its EXIF
orientation tag. Mirrored orientations and unknown codes are left alone.
"""

import math
import numbers
from enum import IntEnum
from typing import Optional, Union

import cv2
import numpy as np

from .buffer import PixelBuffer
from ..utils.logger import get_logger

logger = get_logger(__name__)

EXIF_ORIENTATION_TAG = 0x0112


class Orientation(IntEnum):
    """Clockwise rotation needed to show a buffer upright. Values are EXIF codes."""
    UNDEFINED = 0
    NORMAL = 1
    ROTATE_180 = 3
    ROTATE_90 = 6
    ROTATE_270 = 8

    @classmethod
    def from_exif(cls, code: Optional[Union[int, "Orientation"]]) -> "Orientation":
        """
        Map an EXIF orientation value to an Orientation.

        Integers, integral floats (6.0) and integer strings ("6") are looked up;
        anything else, including 6.9, NaN and infinities, is UNDEFINED.
        """
        if code is None or isinstance(code, bool):
            return cls.UNDEFINED
        if isinstance(code, numbers.Integral):
            value = int(code)
        elif isinstance(code, numbers.Real):
            if not math.isfinite(code) or not float(code).is_integer():
                return cls.UNDEFINED
            value = int(code)
        elif isinstance(code, str):
            try:
                value = int(code.strip())
            except ValueError:
                return cls.UNDEFINED
        else:
            return cls.UNDEFINED
        try:
            return cls(value)
        except ValueError:
            return cls.UNDEFINED

    @property
    def degrees(self) -> int:
        return _DEGREES[self]


_DEGREES = {
    Orientation.UNDEFINED: 0,
    Orientation.NORMAL: 0,
    Orientation.ROTATE_90: 90,
    Orientation.ROTATE_180: 180,
    Orientation.ROTATE_270: 270,
}

_CV2_ROTATE = {
    Orientation.ROTATE_90: cv2.ROTATE_90_CLOCKWISE,
    Orientation.ROTATE_180: cv2.ROTATE_180,
    Orientation.ROTATE_270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}

# np.rot90 counter-clockwise turn counts, used where cv2 cannot take the array
_NP_TURNS = {
    Orientation.ROTATE_90: -1,
    Orientation.ROTATE_180: 2,
    Orientation.ROTATE_270: 1,
}


def normalize(buffer: PixelBuffer, orientation=None) -> PixelBuffer:
    """
    Rotate `buffer` into upright presentation.

    Args:
        buffer: Source buffer (not modified).
        orientation: Orientation, raw EXIF code, or None.

    Returns:
        The same buffer for UNDEFINED/NORMAL, otherwise a new rotated buffer.
        Quarter turns swap width and height.
    """
    orientation = Orientation.from_exif(orientation)
    if orientation.degrees == 0:
        return buffer

    logger.debug("Rotating %dx%d buffer by %d degrees clockwise",
                 buffer.width, buffer.height, orientation.degrees)

    if buffer.is_empty:
        # cv2 rejects zero-sized input; rot90 gives a view, so copy
        return PixelBuffer(np.rot90(buffer.pixels, k=_NP_TURNS[orientation]))

    # cv2 bindings expect a writable array
    rotated = cv2.rotate(buffer.pixels.copy(), _CV2_ROTATE[orientation])
    return PixelBuffer._adopt(np.ascontiguousarray(rotated))
