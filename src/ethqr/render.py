from __future__ import annotations

import base64
import io
import os
import time
from dataclasses import dataclass, field
from typing import Optional

import segno

from . import RenderError
from .core import logger
from .models import RenderOptions

RENDER_FAILED_MESSAGE = "Unable to generate QR code. Try again."


def download_filename(now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"ethereum-qr-{now_ms}.png"


@dataclass(frozen=True)
class QRImage:
    """Rendered QR code as PNG bytes."""

    png: bytes
    filename: str = field(default_factory=download_filename)

    @property
    def data_uri(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")

    def save(self, directory: str) -> str:
        """Write the PNG into directory under its download filename.

        Returns the output path.
        """
        os.makedirs(directory, exist_ok=True)
        out_path = os.path.join(directory, self.filename)
        with open(out_path, "wb") as f:
            f.write(self.png)
        return out_path


class QRRenderer:
    """Adapter around segno producing PNG images for payment URIs."""

    def __init__(self, options: Optional[RenderOptions] = None, logger=logger):
        self.options = options or RenderOptions()
        self.logger = logger.bind(component="QRRenderer")

    def _scale_for(self, qr: "segno.QRCode") -> int:
        # segno scales by whole modules, so pick the largest scale that fits
        symbol_width, _ = qr.symbol_size(scale=1, border=self.options.margin)
        return max(1, self.options.width // symbol_width)

    def render(self, uri: str) -> QRImage:
        opts = self.options
        try:
            qr = segno.make(uri, error=opts.error.lower(), micro=False)
            buf = io.BytesIO()
            qr.save(
                buf,
                kind="png",
                scale=self._scale_for(qr),
                border=opts.margin,
                dark=opts.dark,
                light=opts.light,
            )
        except Exception as exc:
            self.logger.warning("QR render failed", error=str(exc), uri_length=len(uri))
            raise RenderError(RENDER_FAILED_MESSAGE) from exc
        image = QRImage(png=buf.getvalue())
        self.logger.debug("QR rendered", version=qr.version, bytes=len(image.png))
        return image
