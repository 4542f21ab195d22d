# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
PNG decoding for the subset produced by screenshot tools.

Supported: 8-bit, non-interlaced, color types 0 (gray), 2 (RGB),
4 (gray + alpha) and 6 (RGBA). Palette images, other bit depths and
Adam7 interlacing are rejected with UnsupportedImageError.

Pipeline: signature → chunk scan → IDAT concatenation → zlib inflate →
scanline defiltering → RGBA8 expansion.

Reference: https://www.w3.org/TR/png/ (sections 5, 7.3, 9)
"""

from __future__ import annotations

import logging
import zlib
from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from livecolor.decode.reader import ByteReader
from livecolor.errors import (
    FormatError,
    ImageTooLargeError,
    TruncatedDataError,
    UnsupportedImageError,
)
from livecolor.schema import DecodedImage, ImageFormat

logger = logging.getLogger(__name__)


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Resource limits, checked before inflating. Height is otherwise unbounded
# because the resizer only caps width. 16 M pixels admits 4K frames and tall
# phone screenshots.
MAX_IMAGE_PIXELS = 16_000_000
MAX_ASPECT_RATIO = 40.0

# Color type → samples per pixel (8-bit samples, so also bytes per pixel)
_BYTES_PER_PIXEL = {
    0: 1,  # grayscale
    2: 3,  # truecolor
    4: 2,  # grayscale + alpha
    6: 4,  # truecolor + alpha
}

FILTER_NONE = 0
FILTER_SUB = 1
FILTER_UP = 2
FILTER_AVERAGE = 3
FILTER_PAETH = 4


# =============================================================================
# Container
# =============================================================================


@dataclass(frozen=True, slots=True)
class PNGHeader:
    """Fields of the IHDR chunk this decoder cares about."""
    width: int
    height: int
    bit_depth: int
    color_type: int
    interlace: int

    @property
    def bytes_per_pixel(self) -> int:
        return _BYTES_PER_PIXEL[self.color_type]

    @property
    def stride(self) -> int:
        """Bytes per reconstructed scanline, excluding the filter tag."""
        return self.width * self.bytes_per_pixel


def has_png_signature(data: bytes) -> bool:
    return len(data) >= len(PNG_SIGNATURE) and data[:len(PNG_SIGNATURE)] == PNG_SIGNATURE


def iter_chunks(data: bytes) -> Iterator[tuple[str, bytes]]:
    """
    Yield (type, payload) for each chunk after the signature.

    CRCs are skipped, not validated. Iteration stops after IEND, or at
    the end of the buffer if IEND is missing.

    Raises:
        FormatError: Signature mismatch
        TruncatedDataError: A chunk extends past the end of the buffer
    """
    if not has_png_signature(data):
        raise FormatError("Invalid PNG signature")

    reader = ByteReader(data, offset=len(PNG_SIGNATURE))
    while not reader.at_end():
        length = reader.read_u32()
        chunk_type = reader.read_tag()
        payload = reader.read(length)
        reader.skip(4)  # CRC
        yield chunk_type, payload
        if chunk_type == "IEND":
            return


def parse_header(payload: bytes) -> PNGHeader:
    """Parse an IHDR payload (13 bytes, big-endian)."""
    reader = ByteReader(payload)
    try:
        width = reader.read_u32()
        height = reader.read_u32()
        bit_depth = reader.read_u8()
        color_type = reader.read_u8()
        reader.skip(2)  # compression method, filter method
        interlace = reader.read_u8()
    except TruncatedDataError as e:
        raise TruncatedDataError(f"IHDR chunk too short: {e}") from e
    return PNGHeader(width, height, bit_depth, color_type, interlace)


def _validate_header(
    header: PNGHeader,
    max_pixels: int,
    max_aspect_ratio: float,
) -> None:
    if header.interlace != 0:
        raise UnsupportedImageError("Interlaced PNGs are not supported")
    if header.bit_depth != 8:
        raise UnsupportedImageError(
            f"Only 8-bit depth PNGs are supported, got {header.bit_depth}"
        )
    if header.color_type not in _BYTES_PER_PIXEL:
        raise UnsupportedImageError(
            f"Unsupported PNG color type {header.color_type}"
        )
    if header.width == 0 or header.height == 0:
        raise UnsupportedImageError(
            f"Zero-area PNG ({header.width}x{header.height})"
        )
    if header.width * header.height > max_pixels:
        raise ImageTooLargeError(
            f"Image too large ({header.width}x{header.height}): "
            f"limit is {max_pixels} pixels"
        )
    long_side = max(header.width, header.height)
    short_side = min(header.width, header.height)
    if long_side > short_side * max_aspect_ratio:
        raise ImageTooLargeError(
            f"Aspect ratio of {header.width}x{header.height} "
            f"exceeds {max_aspect_ratio}:1"
        )


def _inflate(compressed: bytes, expected: int) -> bytes:
    """Inflate the IDAT stream, producing at most ``expected`` bytes."""
    inflater = zlib.decompressobj()
    try:
        raw = inflater.decompress(compressed, expected)
    except zlib.error as e:
        raise FormatError(f"Corrupt IDAT stream: {e}") from e
    if len(raw) < expected:
        raise TruncatedDataError(
            f"Inflated image data is {len(raw)} bytes, expected {expected}"
        )
    return raw


# =============================================================================
# Scanline filters
# =============================================================================


def paeth_predictor(a: int, b: int, c: int) -> int:
    """
    Paeth predictor: whichever of left (a), up (b), upper-left (c) is
    closest to a + b - c. Ties prefer a, then b.
    """
    p = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _unfilter_average(line: bytes, prev: bytes, bpp: int) -> NDArray[np.uint8]:
    out = bytearray(line)
    n = len(out)
    for i in range(min(bpp, n)):
        out[i] = (out[i] + (prev[i] >> 1)) & 0xFF
    for i in range(bpp, n):
        out[i] = (out[i] + ((out[i - bpp] + prev[i]) >> 1)) & 0xFF
    return np.frombuffer(out, dtype=np.uint8)


def _unfilter_paeth(line: bytes, prev: bytes, bpp: int) -> NDArray[np.uint8]:
    out = bytearray(line)
    n = len(out)
    # a = c = 0 reduces Paeth to b
    for i in range(min(bpp, n)):
        out[i] = (out[i] + prev[i]) & 0xFF
    # paeth_predictor inlined: p - a = b - c, p - b = a - c, p - c = a + b - 2c
    for i in range(bpp, n):
        a = out[i - bpp]
        b = prev[i]
        c = prev[i - bpp]
        pa = b - c
        if pa < 0:
            pa = -pa
        pb = a - c
        if pb < 0:
            pb = -pb
        pc = a + b - c - c
        if pc < 0:
            pc = -pc
        if pa <= pb and pa <= pc:
            out[i] = (out[i] + a) & 0xFF
        elif pb <= pc:
            out[i] = (out[i] + b) & 0xFF
        else:
            out[i] = (out[i] + c) & 0xFF
    return np.frombuffer(out, dtype=np.uint8)


def unfilter_scanline(
    filter_type: int,
    line: NDArray[np.uint8],
    prev: NDArray[np.uint8],
    bpp: int,
) -> NDArray[np.uint8]:
    """
    Reverse one scanline's filter.

    Args:
        filter_type: Filter tag byte (0-4)
        line: Filtered bytes of this scanline (without the tag)
        prev: Reconstructed previous scanline (zeros for the first row)
        bpp: Bytes per complete pixel

    Returns:
        Reconstructed scanline, same length as ``line``

    Raises:
        FormatError: Unknown filter tag
    """
    line = np.asarray(line, dtype=np.uint8)
    prev = np.asarray(prev, dtype=np.uint8)

    if filter_type == FILTER_NONE:
        return line.copy()
    if filter_type == FILTER_SUB:
        # Each channel is a running sum of its own left neighbours
        cumulative = np.cumsum(line.reshape(-1, bpp), axis=0, dtype=np.uint64)
        return (cumulative & 0xFF).astype(np.uint8).reshape(-1)
    if filter_type == FILTER_UP:
        return line + prev  # uint8 arithmetic wraps mod 256
    if filter_type == FILTER_AVERAGE:
        return _unfilter_average(line.tobytes(), prev.tobytes(), bpp)
    if filter_type == FILTER_PAETH:
        return _unfilter_paeth(line.tobytes(), prev.tobytes(), bpp)
    raise FormatError(f"Unsupported PNG filter type {filter_type}")


def _unfilter_image(raw: bytes, header: PNGHeader) -> NDArray[np.uint8]:
    """Reconstruct all scanlines; returns shape (height, stride)."""
    stride = header.stride
    bpp = header.bytes_per_pixel
    rows = np.frombuffer(raw, dtype=np.uint8).reshape(header.height, stride + 1)

    out = np.empty((header.height, stride), dtype=np.uint8)
    prev = np.zeros(stride, dtype=np.uint8)
    for y in range(header.height):
        prev = unfilter_scanline(int(rows[y, 0]), rows[y, 1:], prev, bpp)
        out[y] = prev
    return out


# =============================================================================
# Sample expansion
# =============================================================================


def _expand_to_rgba(samples: NDArray[np.uint8], color_type: int) -> NDArray[np.uint8]:
    """Expand (H, W, bpp) samples to (H, W, 4) RGBA8."""
    if color_type == 6:
        return samples.copy()

    height, width = samples.shape[:2]
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    if color_type == 2:
        rgba[..., :3] = samples
        rgba[..., 3] = 255
    elif color_type == 0:
        rgba[..., :3] = samples[..., :1]
        rgba[..., 3] = 255
    else:  # 4: gray + alpha
        rgba[..., :3] = samples[..., :1]
        rgba[..., 3] = samples[..., 1]
    return rgba


# =============================================================================
# Entry point
# =============================================================================


def decode_png(
    data: bytes,
    *,
    max_pixels: int = MAX_IMAGE_PIXELS,
    max_aspect_ratio: float = MAX_ASPECT_RATIO,
) -> DecodedImage:
    """
    Decode a PNG into an RGBA8 DecodedImage.

    Args:
        data: Complete PNG file contents
        max_pixels: Reject images with more pixels than this
        max_aspect_ratio: Reject images whose long side exceeds the short
            side by more than this factor

    Returns:
        DecodedImage with format PNG

    Raises:
        FormatError: Any malformed or unsupported input (see livecolor.errors)
    """
    header: PNGHeader | None = None
    idat_parts: list[bytes] = []

    for chunk_type, payload in iter_chunks(data):
        if chunk_type == "IHDR":
            header = parse_header(payload)
        elif chunk_type == "IDAT":
            idat_parts.append(payload)

    if header is None:
        raise UnsupportedImageError("PNG has no IHDR chunk")
    _validate_header(header, max_pixels, max_aspect_ratio)

    expected = header.height * (header.stride + 1)
    raw = _inflate(b"".join(idat_parts), expected)

    reconstructed = _unfilter_image(raw, header)
    samples = reconstructed.reshape(header.height, header.width, header.bytes_per_pixel)
    rgba = _expand_to_rgba(samples, header.color_type)

    logger.debug(
        "Decoded PNG %dx%d (color type %d, %d IDAT chunks)",
        header.width, header.height, header.color_type, len(idat_parts),
    )
    return DecodedImage(
        width=header.width,
        height=header.height,
        pixels=rgba,
        format=ImageFormat.PNG,
    )
