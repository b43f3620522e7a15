import pytest

from color_adapt.processing.buffer import PixelBuffer
from color_adapt.processing.orientation import Orientation
from color_adapt.processing.pipeline import AdaptationEngine
from color_adapt.services.adaptation_service import AdaptationService
from color_adapt.utils.errors import ConfigurationError, FileIOError


class RecordingEngine:
    def __init__(self):
        self.calls = []
        self._engine = AdaptationEngine()

    def process(self, buffer, orientation, screen, progress_callback=None):
        self.calls.append((orientation, screen))
        return self._engine.process(buffer, orientation, screen, progress_callback=progress_callback)


def test_adapt_resolves_screen_brightness(sample_buffer):
    engine = RecordingEngine()
    service = AdaptationService(engine=engine)

    service.adapt(sample_buffer, Orientation.ROTATE_180, 255)
    service.adapt(sample_buffer, None, None)

    assert engine.calls[0][1].screen_brightness_percent == 100
    assert engine.calls[1][1].screen_brightness_percent == 50


def test_params_reach_screen_context(sample_buffer):
    service = AdaptationService(params={"screen_white_point": 200})
    result = service.adapt(sample_buffer, None, 255)
    # 1.0 * 220 / 200
    assert result.scale == pytest.approx(1.1)


def test_invalid_screen_white_point(sample_buffer):
    service = AdaptationService(params={"screen_white_point": 0})
    with pytest.raises(ConfigurationError):
        service.adapt(sample_buffer, None, 128)


def test_adapt_file_round_trip(tmp_path, bright_buffer):
    service = AdaptationService()
    source = str(tmp_path / "in.png")
    output = str(tmp_path / "out" / "adapted.png")
    assert service.save_image(bright_buffer, source)

    result = service.adapt_file(source, output, 128)

    loaded, _ = service.load_image(output)
    assert loaded == result.buffer
    assert result.buffer.shape == bright_buffer.shape


def test_adapt_file_missing_source(tmp_path):
    service = AdaptationService()
    with pytest.raises(FileIOError) as excinfo:
        service.adapt_file(str(tmp_path / "missing.png"), str(tmp_path / "out.png"), 100)
    assert excinfo.value.file_path.endswith("missing.png")


def test_adapt_file_unwritable_output(tmp_path):
    service = AdaptationService()
    source = str(tmp_path / "in.png")
    service.save_image(PixelBuffer.filled(2, 2, (255, 10, 20, 30)), source)

    with pytest.raises(FileIOError):
        service.adapt_file(source, str(tmp_path / "out.notaformat"), 100)
