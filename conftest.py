"""Shared pytest fixtures for layout engine tests."""
import pytest

from models import CanvasConfig, FitterSettings, ImageBounds, LayoutIntent, SafeZone, TextLine


@pytest.fixture
def config():
    return CanvasConfig()


@pytest.fixture
def settings():
    return FitterSettings()


@pytest.fixture
def bottom_band_image():
    """Full-width image across the bottom 440px of the canvas."""
    return ImageBounds(x=0, y=1000, width=1080, height=440)


@pytest.fixture
def top_zone():
    """The single zone left by ``bottom_band_image``."""
    return SafeZone(id='TOP', x=40, y=40, width=1000, height=880, area=880_000)


@pytest.fixture
def left_zone():
    """A narrow full-height column on the left."""
    return SafeZone(id='LEFT', x=40, y=40, width=240, height=1360, area=240 * 1360)


@pytest.fixture
def make_zone():
    """Factory fixture: make_zone(width, height, zone_id='TOP', x=40, y=40) -> SafeZone."""
    def _make(width, height, zone_id='TOP', x=40, y=40):
        return SafeZone(id=zone_id, x=x, y=y, width=width, height=height, area=width * height)
    return _make


@pytest.fixture
def make_intent():
    """Factory fixture: make_intent([(text, font_size), ...], zone_id, alignment) -> LayoutIntent."""
    def _make(lines, zone_id='TOP', alignment='start'):
        return LayoutIntent(
            selected_zone=zone_id,
            alignment=alignment,
            text_lines=tuple(TextLine(text=t, font_size=fs) for t, fs in lines),
        )
    return _make
