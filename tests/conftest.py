"""
Shared fixtures for Tonie Circle Cropper tests.

Provides Pillow-generated image payloads, geometry and session fixtures.
"""
import sys
import os
import io
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# No display needed for painting into QImages
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from PIL import Image


# ── Image helpers ─────────────────────────────────────────────────────────

def make_image_bytes(width, height, color=(255, 0, 0, 255), fmt='PNG'):
    """Encode a solid-color image"""
    mode = 'RGBA' if fmt == 'PNG' else 'RGB'
    fill = color if mode == 'RGBA' else color[:3]
    img = Image.new(mode, (width, height), fill)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def make_payload(width=400, height=300, color=(255, 0, 0, 255), name="photo.png", media_type="image/png"):
    from models.raster import ImagePayload
    return ImagePayload(data=make_image_bytes(width, height, color), media_type=media_type, name=name)


@pytest.fixture
def png_payload():
    """400x300 solid red PNG"""
    return make_payload()


@pytest.fixture
def small_payload():
    """20x20 solid red PNG"""
    return make_payload(20, 20, name="dot.png")


@pytest.fixture
def corrupt_payload():
    """Claims to be a PNG but is not"""
    from models.raster import ImagePayload
    return ImagePayload(data=b"\x89PNG\r\n\x1a\nthis is not really a png", media_type="image/png", name="broken.png")


@pytest.fixture
def text_payload():
    """Non-image payload"""
    from models.raster import ImagePayload
    return ImagePayload(data=b"hello", media_type="text/plain", name="notes.txt")


@pytest.fixture
def geometry():
    """Default geometry: 200px preview, 40mm at 96 DPI (151px)"""
    from models.geometry import GeometryConfig
    return GeometryConfig()


@pytest.fixture
def raster(qapp, png_payload):
    from services.bitmap_loader import decode_payload
    return decode_payload(png_payload, serial=1)


@pytest.fixture
def session(qapp, geometry):
    from services.crop_session import CropSession
    s = CropSession(geometry)
    yield s
    s.loader.wait()


@pytest.fixture
def loaded_session(session, png_payload):
    session.load_file_sync(png_payload)
    return session
