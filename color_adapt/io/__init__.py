# IO package initialization
from .image_loader import (
    load_image,
    read_orientation,
    is_supported_file,
    SUPPORTED_EXTENSIONS,
)
from .image_saver import save_image, ALPHA_EXTENSIONS

__all__ = [
    'load_image',
    'read_orientation',
    'is_supported_file',
    'SUPPORTED_EXTENSIONS',
    'save_image',
    'ALPHA_EXTENSIONS',
]
