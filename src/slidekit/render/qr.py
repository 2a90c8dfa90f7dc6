"""QR code renderer backed by qrcode (SVG) and Pillow (PNG)."""

from __future__ import annotations

from pathlib import Path

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathFillImage

from slidekit.errors.exceptions import RenderFailure
from slidekit.types import ArtifactKind

_ERROR_LEVELS = {
    "l": qrcode.constants.ERROR_CORRECT_L,
    "m": qrcode.constants.ERROR_CORRECT_M,
    "q": qrcode.constants.ERROR_CORRECT_Q,
    "h": qrcode.constants.ERROR_CORRECT_H,
}


class QRCodeRenderer:
    """Encodes a URL as SVG (primary) and PNG. Theme variants are ignored."""

    kind = ArtifactKind.QR_CODE
    formats = ("svg", "png")

    def __init__(self, size: int = 300, border: int = 1, error: str = "h") -> None:
        self._size = size
        self._border = border
        self._error = _ERROR_LEVELS[error.lower()]

    def render(
        self,
        content: str,
        outputs: dict[str, Path],
        variant: str | None = None,
    ) -> None:
        qr = qrcode.QRCode(error_correction=self._error, border=self._border)
        qr.add_data(content)
        try:
            qr.make(fit=True)
        except (DataOverflowError, ValueError) as e:
            raise RenderFailure(
                f"Cannot encode QR code: {e}",
                kind=self.kind.value,
                content=content,
                original=e,
            ) from e

        qr.box_size = max(1, self._size // (qr.modules_count + 2 * self._border))
        for fmt, output in outputs.items():
            if fmt == "svg":
                image = qr.make_image(image_factory=SvgPathFillImage)
            else:
                image = qr.make_image(
                    image_factory=PilImage, fill_color="#000000", back_color="#FFFFFF"
                )
            with open(output, "wb") as f:
                image.save(f)
