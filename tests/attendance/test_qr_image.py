from __future__ import annotations

import io

import pytest
from PIL import Image

from src.org_console.org_console.attendance.qr import decode_qr_image, make_qr_png


def test_member_qr_renders_png():
    buf = make_qr_png("YSP-001")

    assert buf.read(8) == b"\x89PNG\r\n\x1a\n"
    buf.seek(0)
    img = Image.open(buf)
    assert img.size[0] == img.size[1]


def test_uploaded_member_qr_is_decoded():
    pytest.importorskip("pyzbar.pyzbar")

    assert decode_qr_image(make_qr_png("YSP:YSP-001")) == "YSP:YSP-001"


def test_blank_image_has_no_qr():
    pytest.importorskip("pyzbar.pyzbar")

    buf = io.BytesIO()
    Image.new("RGB", (64, 64), "white").save(buf, format="PNG")
    buf.seek(0)
    assert decode_qr_image(buf) is None
