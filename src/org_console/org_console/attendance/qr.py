from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image


def make_qr_png(data: str) -> io.BytesIO:
    """Render ``data`` as a PNG QR code; returns a rewound buffer."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def decode_qr_image(stream: BinaryIO) -> Optional[str]:
    """Return the text of the first QR code found in an uploaded image."""
    from pyzbar.pyzbar import decode as pyzbar_decode

    img = Image.open(stream).convert("RGB")
    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()


def member_code_from_payload(payload: str, prefix: str = "") -> str:
    """Strip an optional ``<prefix>:`` marker from a scanned payload."""
    code = (payload or "").strip()
    if prefix:
        marker = f"{prefix}:"
        if code.upper().startswith(marker.upper()):
            code = code[len(marker):]
    return code.strip()
