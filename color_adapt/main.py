# Application entry point
import argparse
import sys

from color_adapt.config import settings
from color_adapt.services.adaptation_service import AdaptationService
from color_adapt.utils.errors import AppError
from color_adapt.utils.logger import get_logger, set_level

logger = get_logger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="color-adapt",
        description="Adapt a photo's brightness and white point to the current screen brightness.",
    )
    parser.add_argument("input", help="Source image file")
    parser.add_argument("output", help="Destination image file")
    parser.add_argument(
        "--brightness", type=int, default=None,
        help="Raw screen brightness setting (0-255). Omit to use the fallback of %d%%."
             % settings.ADAPTATION_DEFAULTS["brightness_fallback_percent"],
    )
    parser.add_argument(
        "--screen-white-point", type=int,
        default=settings.ADAPTATION_DEFAULTS["screen_white_point"],
        help="Reference white level of the display (default: %(default)s)",
    )
    parser.add_argument(
        "--workers", type=int, default=settings.ADAPTATION_DEFAULTS["max_workers"],
        help="Threads used for pixel scans (default: %(default)s)",
    )
    parser.add_argument(
        "--quality", type=int, default=settings.IO_DEFAULTS["default_jpeg_quality"],
        help="JPEG/WebP quality (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    """Main function to run the application."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_level("DEBUG")

    params = {
        "screen_white_point": args.screen_white_point,
        "max_workers": args.workers,
    }

    try:
        service = AdaptationService(params=params)
        result = service.adapt_file(args.input, args.output, args.brightness, quality=args.quality)
    except AppError as e:
        logger.error("%s", e)
        print(e.user_message, file=sys.stderr)
        return 1

    print(
        f"{args.output}: {result.buffer.width}x{result.buffer.height}, "
        f"scale {result.scale:.4f}, white point {result.profile.image_white_point}, "
        f"max brightness {result.profile.max_pixel_brightness}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
