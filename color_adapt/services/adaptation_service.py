from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from ..display import screen_context_from_raw
from ..io import image_loader, image_saver
from ..processing.buffer import PixelBuffer
from ..processing.mapping import ScreenContext
from ..processing.orientation import Orientation
from ..processing.pipeline import AdaptationEngine, AdaptationResult
from ..utils.errors import FileIOError
from ..utils.logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


class EngineProtocol(Protocol):
    def process(
        self,
        buffer: PixelBuffer,
        orientation: Any,
        screen: ScreenContext,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> AdaptationResult: ...


class AdaptationService:
    """Thin facade over IO + the adaptation engine."""

    def __init__(
        self,
        engine: Optional[EngineProtocol] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._params = params
        self._engine = engine if engine is not None else AdaptationEngine(params)

    def load_image(self, file_path: str) -> Tuple[Optional[PixelBuffer], Optional[Orientation]]:
        return image_loader.load_image(file_path)

    def screen_context(self, raw_brightness) -> ScreenContext:
        return screen_context_from_raw(raw_brightness, self._params)

    def adapt(
        self,
        buffer: PixelBuffer,
        orientation: Any,
        raw_brightness,
        *,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> AdaptationResult:
        return self._engine.process(
            buffer,
            orientation,
            self.screen_context(raw_brightness),
            progress_callback=progress_callback,
        )

    def save_image(self, buffer: PixelBuffer, file_path: str, **kwargs: Any) -> bool:
        return image_saver.save_image(buffer, file_path, **kwargs)

    def adapt_file(
        self,
        source_path: str,
        output_path: str,
        raw_brightness,
        **save_kwargs: Any,
    ) -> AdaptationResult:
        """
        Load, adapt and save one image.

        Raises:
            FileIOError: If the source cannot be decoded or the output cannot be written.
        """
        buffer, orientation = self.load_image(source_path)
        if buffer is None:
            raise FileIOError(
                f"Could not load image '{source_path}'",
                file_path=source_path,
                user_message=f"Could not open '{source_path}'. Is it a supported image file?",
            )

        result = self.adapt(buffer, orientation, raw_brightness)

        if not self.save_image(result.buffer, output_path, **save_kwargs):
            raise FileIOError(
                f"Could not save image '{output_path}'",
                file_path=output_path,
                user_message=f"Could not write '{output_path}'.",
            )
        return result
