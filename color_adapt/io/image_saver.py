# Export functionality using Pillow
import os

from PIL import Image

from ..config.settings import IO_DEFAULTS
from ..processing.buffer import PixelBuffer
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Formats that keep the alpha channel; everything else is written as RGB
ALPHA_EXTENSIONS = ('.png', '.tif', '.tiff', '.webp')


def save_image(
    buffer: PixelBuffer,
    file_path: str,
    quality: int = IO_DEFAULTS["default_jpeg_quality"],
    png_compression: int = IO_DEFAULTS["default_png_compression"],
) -> bool:
    """Saves a PixelBuffer to the specified file path using Pillow.

    Args:
        buffer (PixelBuffer): The image to save.
        file_path (str): Destination path including extension (e.g., .jpg, .png).
        quality (int): JPEG/WebP quality (1-100, higher is better).
        png_compression (int): PNG compression level (0-9).

    Returns:
        bool: True if saving was successful, False otherwise.
    """
    if not isinstance(buffer, PixelBuffer):
        logger.error("Cannot save %s; expected a PixelBuffer.", type(buffer).__name__)
        return False

    if buffer.is_empty:
        logger.error("Cannot save an empty image.")
        return False

    if not isinstance(file_path, str) or not file_path:
        logger.error("Invalid file path provided for saving.")
        return False

    if not isinstance(quality, int) or not isinstance(png_compression, int):
        logger.error(
            "Invalid quality/compression parameters: quality=%r, png_compression=%r",
            quality,
            png_compression,
        )
        return False

    # Create the output directory if it doesn't exist
    output_dir = os.path.dirname(file_path)
    if output_dir and not os.path.exists(output_dir):
        try:
            os.makedirs(output_dir)
            logger.info("Created output directory: %s", output_dir)
        except OSError:
            logger.exception("Could not create directory '%s'", output_dir)
            return False

    ext = os.path.splitext(file_path)[1].lower()
    save_kwargs = {}

    if ext in ['.jpg', '.jpeg']:
        save_kwargs['quality'] = max(1, min(100, quality))
        save_kwargs['optimize'] = True
    elif ext == '.png':
        save_kwargs['compress_level'] = max(0, min(9, png_compression))
    elif ext in ['.tif', '.tiff']:
        save_kwargs['compression'] = 'tiff_lzw'
    elif ext == '.webp':
        save_kwargs['quality'] = max(0, min(100, quality))

    try:
        if ext in ALPHA_EXTENSIONS:
            img = Image.fromarray(buffer.to_rgba())
        else:
            img = Image.fromarray(buffer.to_rgb())

        with img:
            img.save(file_path, **save_kwargs)
        logger.info("Successfully saved image to: '%s'", file_path)
        return True

    except (KeyError, ValueError):
        # unknown extension or mode the format cannot store
        logger.error("Pillow could not determine save format for: '%s'", file_path)
        return False
    except OSError:
        logger.exception("OS error saving image '%s'", file_path)
        return False
