"""
Immutable ARGB pixel buffer.

Pixels are held in a single read-only NumPy array of shape (H, W, 4),
dtype uint8, channel order (alpha, red, green, blue). Every operation in the
processing package takes a PixelBuffer and returns a new one; the source
array is never written to.
"""

from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from ..utils.errors import InvalidBufferError

# Channel indices in the ARGB layout
ALPHA, RED, GREEN, BLUE = 0, 1, 2, 3


class PixelBuffer:
    """Fixed-size grid of 8-bit ARGB pixels."""

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray):
        if not isinstance(pixels, np.ndarray):
            raise InvalidBufferError(f"Expected a NumPy array, got {type(pixels).__name__}")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidBufferError(f"Pixel array must have shape (H, W, 4), got {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise InvalidBufferError(f"Pixel array must be uint8, got {pixels.dtype}")

        frozen = np.array(pixels, dtype=np.uint8, copy=True, order="C")
        frozen.setflags(write=False)
        self._pixels = frozen

    @classmethod
    def _adopt(cls, pixels: np.ndarray) -> "PixelBuffer":
        """
        Wrap a freshly allocated (H, W, 4) uint8 array without copying it.

        The caller hands over ownership: the array is frozen in place and must
        not be referenced elsewhere afterwards.
        """
        pixels.setflags(write=False)
        buffer = cls.__new__(cls)
        buffer._pixels = pixels
        return buffer

    # --- Construction ---

    @classmethod
    def empty(cls) -> "PixelBuffer":
        return cls(np.zeros((0, 0, 4), dtype=np.uint8))

    @classmethod
    def filled(cls, width: int, height: int, argb: Tuple[int, int, int, int]) -> "PixelBuffer":
        """Buffer of the given size with every pixel set to one (A, R, G, B) value."""
        if width < 0 or height < 0:
            raise InvalidBufferError(f"Negative dimensions {width}x{height}")
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = _channel_values(argb)
        return cls(pixels)

    @classmethod
    def from_argb_ints(cls, values: Sequence[int], width: int, height: int) -> "PixelBuffer":
        """
        Build a buffer from packed 0xAARRGGBB integers in row-major order.

        Args:
            values: W*H packed pixels. Signed 32-bit values are accepted.
            width: Buffer width.
            height: Buffer height.
        """
        if width < 0 or height < 0:
            raise InvalidBufferError(f"Negative dimensions {width}x{height}")
        packed = np.asarray(values, dtype=np.int64).reshape(-1) & 0xFFFFFFFF
        if packed.size != width * height:
            raise InvalidBufferError(
                f"Expected {width * height} pixels for {width}x{height}, got {packed.size}"
            )
        packed = packed.reshape(height, width)
        pixels = np.stack(
            [(packed >> 24) & 0xFF, (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF],
            axis=-1,
        ).astype(np.uint8)
        return cls(pixels)

    @classmethod
    def from_rgba(cls, rgba: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an (H, W, 4) uint8 RGBA array (Pillow layout)."""
        rgba = np.asarray(rgba)
        if rgba.ndim != 3 or rgba.shape[2] != 4:
            raise InvalidBufferError(f"RGBA array must have shape (H, W, 4), got {rgba.shape}")
        if rgba.dtype != np.uint8:
            raise InvalidBufferError(f"RGBA array must be uint8, got {rgba.dtype}")
        return cls(rgba[..., [3, 0, 1, 2]])

    @classmethod
    def from_rgb(cls, rgb: np.ndarray, alpha: int = 255) -> "PixelBuffer":
        """Build an opaque (or uniformly translucent) buffer from an (H, W, 3) uint8 RGB array."""
        rgb = np.asarray(rgb)
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise InvalidBufferError(f"RGB array must have shape (H, W, 3), got {rgb.shape}")
        if rgb.dtype != np.uint8:
            raise InvalidBufferError(f"RGB array must be uint8, got {rgb.dtype}")
        if not 0 <= alpha <= 255:
            raise InvalidBufferError(f"Alpha must be in [0, 255], got {alpha}")
        pixels = np.empty(rgb.shape[:2] + (4,), dtype=np.uint8)
        pixels[..., ALPHA] = alpha
        pixels[..., RED:] = rgb
        return cls(pixels)

    # --- Conversion ---

    def to_argb_ints(self) -> np.ndarray:
        """Flat row-major array of packed 0xAARRGGBB values (uint32)."""
        p = self._pixels.astype(np.uint32)
        packed = (p[..., ALPHA] << 24) | (p[..., RED] << 16) | (p[..., GREEN] << 8) | p[..., BLUE]
        return packed.reshape(-1)

    def to_rgba(self) -> np.ndarray:
        return np.ascontiguousarray(self._pixels[..., [1, 2, 3, 0]])

    def to_rgb(self) -> np.ndarray:
        return np.ascontiguousarray(self._pixels[..., RED:])

    # --- Accessors ---

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (H, W, 4) ARGB array."""
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height)"""
        return self.width, self.height

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def alpha(self) -> np.ndarray:
        return self._pixels[..., ALPHA]

    @property
    def rgb(self) -> np.ndarray:
        """Read-only (H, W, 3) view of the color channels."""
        return self._pixels[..., RED:]

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """(A, R, G, B) at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return tuple(int(v) for v in self._pixels[y, x])

    def rows(self) -> Iterator[np.ndarray]:
        """Yield each row as a read-only (W, 4) array, top to bottom."""
        for y in range(self.height):
            yield self._pixels[y]

    def row_chunks(self, chunk_rows: Optional[int] = None) -> Iterator[Tuple[int, int]]:
        """
        Yield (start, stop) row ranges covering the buffer.

        Args:
            chunk_rows: Rows per chunk. None or a value >= height yields one range.
        """
        if self.is_empty:
            return
        step = self.height if not chunk_rows or chunk_rows <= 0 else chunk_rows
        for start in range(0, self.height, step):
            yield start, min(start + step, self.height)

    # --- Dunder ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and np.array_equal(self._pixels, other._pixels)

    def __hash__(self) -> int:
        return hash((self._pixels.shape, self._pixels.tobytes()))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def _channel_values(argb: Tuple[int, int, int, int]) -> np.ndarray:
    values = np.asarray(argb, dtype=np.int64)
    if values.shape != (4,) or values.min() < 0 or values.max() > 255:
        raise InvalidBufferError(f"Pixel must be four channel values in [0, 255], got {argb}")
    return values.astype(np.uint8)
