# Processing package initialization
from .buffer import PixelBuffer
from .orientation import Orientation, normalize
from .analyzer import BrightnessProfile, ImageAnalyzer, analyze, max_brightness, white_point
from .mapping import ScreenContext, scale_factor, scale_for_screen
from .transform import PixelTransformer, apply
from .pipeline import AdaptationEngine, AdaptationResult, adapt_image
