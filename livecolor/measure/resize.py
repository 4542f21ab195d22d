# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Width-bounded nearest-neighbor downsampling.

Classification cost is proportional to pixel count, so wide screenshots
are shrunk into a fixed width band before measuring. Narrow images are
never upsampled.
"""

from __future__ import annotations

import math

import numpy as np

from livecolor.schema import DecodedImage

MIN_ANALYSIS_WIDTH = 480
MAX_ANALYSIS_WIDTH = 640


def round_half_up(value: float) -> int:
    """Round to nearest integer with halves rounding up (not to even)."""
    return int(math.floor(value + 0.5))


def resize_for_analysis(
    image: DecodedImage,
    min_width: int = MIN_ANALYSIS_WIDTH,
    max_width: int = MAX_ANALYSIS_WIDTH,
) -> DecodedImage:
    """
    Downsample an image whose width exceeds the analysis band.

    Args:
        image: Source image
        min_width: Lower bound of the target width band
        max_width: Upper bound of the target width band

    Returns:
        A new DecodedImage when downsampling happened, otherwise ``image``
        itself. The format tag is carried over.
    """
    if image.is_empty:
        return image

    width, height = image.width, image.height
    desired = min(max(width, min_width), max_width)
    if width <= desired:
        return image

    scale = desired / width
    new_width = round_half_up(width * scale)
    new_height = max(1, round_half_up(height * scale))

    src_y = np.minimum(height - 1, np.floor(np.arange(new_height) / scale).astype(np.intp))
    src_x = np.minimum(width - 1, np.floor(np.arange(new_width) / scale).astype(np.intp))
    resized = image.pixels[src_y[:, None], src_x[None, :]]

    return DecodedImage(
        width=new_width,
        height=new_height,
        pixels=np.ascontiguousarray(resized),
        format=image.format,
    )
