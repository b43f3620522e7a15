# Image import functionality using Pillow
import os
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..processing.buffer import PixelBuffer
from ..processing.orientation import EXIF_ORIENTATION_TAG, Orientation
from ..utils.errors import ErrorCategory, handle_errors
from ..utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.tif', '.tiff', '.bmp', '.webp')


def is_supported_file(file_path) -> bool:
    """True if the extension is one Pillow is expected to decode here."""
    if not isinstance(file_path, str) or not file_path:
        return False
    return os.path.splitext(file_path)[1].lower() in SUPPORTED_EXTENSIONS


@handle_errors(fallback_value=Orientation.UNDEFINED, category=ErrorCategory.FILE_IO)
def read_orientation(source) -> Orientation:
    """
    Read the EXIF orientation tag.

    Args:
        source: An open PIL.Image or a file path.

    Returns:
        Orientation; UNDEFINED when the tag is missing or unreadable.
    """
    if isinstance(source, Image.Image):
        return Orientation.from_exif(source.getexif().get(EXIF_ORIENTATION_TAG))
    with Image.open(source) as img:
        return Orientation.from_exif(img.getexif().get(EXIF_ORIENTATION_TAG))


def load_image(file_path) -> Tuple[Optional[PixelBuffer], Optional[Orientation]]:
    """Loads an image from the specified file path using Pillow.

    The pixels are returned as stored; the EXIF orientation is read but not
    applied, since rotation is part of the adaptation pipeline.

    Args:
        file_path (str): The path to the image file.

    Returns:
        tuple: (PixelBuffer, Orientation), or (None, None) if loading fails
               or the file is not found.
    """
    if not isinstance(file_path, str) or not file_path:
        logger.error("Invalid file path provided.")
        return None, None

    if not os.path.isfile(file_path):
        logger.error("File not found at '%s'", file_path)
        return None, None

    try:
        with Image.open(file_path) as img:
            orientation = read_orientation(img)

            if img.info.get('icc_profile'):
                logger.info("Embedded ICC profile found in '%s'; it is ignored.", file_path)

            if img.mode != 'RGBA':
                logger.debug("Converting image from mode '%s' to 'RGBA'.", img.mode)
                rgba = np.array(img.convert('RGBA'))
            else:
                rgba = np.array(img)

        if rgba.size == 0:
            logger.error("Loaded image is empty: '%s'", file_path)
            return None, None

        buffer = PixelBuffer.from_rgba(rgba)
        logger.info("Loaded %dx%d image '%s' (orientation %s)",
                    buffer.width, buffer.height, file_path, orientation.name)
        return buffer, orientation

    except UnidentifiedImageError:
        logger.error("Pillow could not identify image file format or file is corrupted: '%s'", file_path)
        return None, None
    except OSError:
        logger.exception("OS error loading image '%s'", file_path)
        return None, None
    except Exception:
        # decompression-bomb limits, decoder ValueErrors and the like
        logger.exception("Unexpected error loading image '%s'", file_path)
        return None, None
