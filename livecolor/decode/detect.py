# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Format sniffing and dispatch.

PNG bytes are decoded; JPEG is recognised but deliberately not decoded;
anything else is unknown. Both non-PNG cases yield the empty sentinel
rather than raising.
"""

from __future__ import annotations

from livecolor.decode.png import decode_png, has_png_signature
from livecolor.schema import DecodedImage, ImageFormat

JPEG_SOI = b"\xff\xd8\xff"


def sniff_format(data: bytes) -> ImageFormat:
    """Identify the container format from the leading bytes."""
    if has_png_signature(data):
        return ImageFormat.PNG
    if data[:len(JPEG_SOI)] == JPEG_SOI:
        return ImageFormat.JPEG
    return ImageFormat.UNKNOWN


def decode_image(data: bytes) -> DecodedImage:
    """
    Decode image bytes into RGBA8.

    Returns:
        Decoded pixels for PNG input; the 0x0 sentinel tagged JPEG or
        UNKNOWN otherwise.

    Raises:
        FormatError: PNG signature present but the stream is malformed
    """
    fmt = sniff_format(data)
    if fmt is ImageFormat.PNG:
        return decode_png(data)
    return DecodedImage.empty(fmt)
