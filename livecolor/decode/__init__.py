# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Image decoding for Livecolor.

A minimal, dependency-light PNG decoder (inflate via zlib) and the
format sniffing that routes bytes to it.
"""

from livecolor.decode.detect import decode_image, sniff_format
from livecolor.decode.png import decode_png, paeth_predictor, unfilter_scanline
from livecolor.decode.reader import ByteReader

__all__ = [
    "decode_image",
    "decode_png",
    "sniff_format",
    "paeth_predictor",
    "unfilter_scanline",
    "ByteReader",
]
