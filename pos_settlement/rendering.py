"""QR image rendering for payment payloads."""

import io
from typing import Protocol

import qrcode

from .errors import RenderError
from .settings import Settings

DEFAULT_SIZE_HINT = 200


class QrRenderer(Protocol):
    """Turns a payload string into image bytes. May raise RenderError."""

    def render(self, payload: str, size_hint: int = DEFAULT_SIZE_HINT) -> bytes: ...


class QRCodeRenderer:
    """PNG renderer backed by the ``qrcode`` package.

    ``size_hint`` is the wanted image width in pixels. Modules shrink from
    ``box_size`` to fit it, down to one pixel per module.
    """

    def __init__(self, box_size: int = 10, border: int = 1):
        self.box_size = box_size
        self.border = border

    def render(self, payload: str, size_hint: int = DEFAULT_SIZE_HINT) -> bytes:
        if not payload:
            raise RenderError("empty payload")
        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                box_size=self.box_size,
                border=self.border,
            )
            qr.add_data(payload)
            qr.make(fit=True)

            if size_hint:
                modules = qr.modules_count + 2 * self.border
                qr.box_size = max(1, min(self.box_size, size_hint // modules))

            img = qr.make_image(fill_color="black", back_color="white")
            buffer = io.BytesIO()
            img.save(buffer, format="PNG")
            return buffer.getvalue()
        except Exception as e:
            raise RenderError("qr render failed", e) from e

    @classmethod
    def from_settings(cls, settings: Settings) -> "QRCodeRenderer":
        return cls(box_size=settings.qr_box_size, border=settings.qr_border)
