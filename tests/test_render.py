import base64
import struct

import pytest
from pydantic import ValidationError as PydanticValidationError

from ethqr import RenderError
from ethqr.models import RenderOptions
from ethqr.render import QRImage, QRRenderer, download_filename

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _png_size(data: bytes):
    # IHDR is always the first chunk
    return struct.unpack(">II", data[16:24])


def test_render_produces_png(address):
    image = QRRenderer().render(f"ethereum:{address}?value=1")
    assert image.png.startswith(PNG_MAGIC)
    width, height = _png_size(image.png)
    assert width == height
    assert 160 < width <= 320


def test_width_option_is_respected(address):
    image = QRRenderer(RenderOptions(width=640, margin=4)).render(f"ethereum:{address}?value=1")
    width, _ = _png_size(image.png)
    assert 320 < width <= 640


def test_tiny_width_falls_back_to_one_pixel_modules(address):
    image = QRRenderer(RenderOptions(width=1)).render(f"ethereum:{address}?value=1")
    width, _ = _png_size(image.png)
    assert width > 1


def test_data_uri_roundtrips_png(address):
    image = QRRenderer().render(f"ethereum:{address}?value=1")
    prefix = "data:image/png;base64,"
    assert image.data_uri.startswith(prefix)
    assert base64.b64decode(image.data_uri[len(prefix):]) == image.png


def test_oversized_payload_raises_render_error(address):
    uri = f"ethereum:{address}?value=1&message=" + "x" * 5000
    with pytest.raises(RenderError) as excinfo:
        QRRenderer().render(uri)
    assert "Try again" in str(excinfo.value)
    assert excinfo.value.__cause__ is not None


def test_save_writes_download_file(tmp_path):
    image = QRImage(png=PNG_MAGIC + b"data", filename="ethereum-qr-1.png")
    path = image.save(str(tmp_path / "out"))
    assert path.endswith("ethereum-qr-1.png")
    with open(path, "rb") as f:
        assert f.read() == image.png


def test_download_filename():
    assert download_filename(1700000000123) == "ethereum-qr-1700000000123.png"
    assert download_filename().startswith("ethereum-qr-")


@pytest.mark.parametrize(
    "kwargs",
    [{"width": 0}, {"margin": -1}, {"dark": "red"}, {"light": "#12345"}, {"error": "X"}],
)
def test_invalid_render_options(kwargs):
    with pytest.raises(PydanticValidationError):
        RenderOptions(**kwargs)
