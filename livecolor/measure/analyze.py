# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Main analysis API.

This is the single entry point callers use: raw screenshot bytes in,
ColorAnalysis out. Decode failures never escape; they degrade to the
empty analysis.
"""

from __future__ import annotations

import logging
from typing import Optional

from livecolor.decode import decode_image
from livecolor.errors import FormatError
from livecolor.measure.classify import ClassifierConfig, classify_image
from livecolor.runtime.serializers import SerializerFormat, to_summary
from livecolor.schema import ColorAnalysis

logger = logging.getLogger(__name__)


def analyze_platform_colors(
    data: bytes,
    original_width: int = 0,
    *,
    config: Optional[ClassifierConfig] = None,
) -> ColorAnalysis:
    """
    Classify screenshot bytes as a TikTok or Shopee live dashboard.

    Args:
        data: Raw image file contents (PNG is decoded; JPEG and unknown
            formats yield no decision)
        original_width: Width of the screenshot before any upstream
            resizing. 0 means unknown, in which case the decoded width
            is used.
        config: Classifier settings (uses defaults if None)

    Returns:
        ColorAnalysis. Malformed input returns ``ColorAnalysis.empty()``.

    Example:
        >>> from livecolor import analyze_platform_colors
        >>> result = analyze_platform_colors(png_bytes, 1080)
        >>> result.color_decision
        <Platform.TIKTOK: 'tiktok'>
    """
    try:
        decoded = decode_image(data)
    except FormatError as e:
        logger.warning("Color analysis failed: %s", e)
        return ColorAnalysis.empty()

    if decoded.is_empty:
        logger.debug("No pixels decoded (format=%s)", decoded.format.value)
        return classify_image(decoded, original_width, config)

    analysis = classify_image(decoded, original_width or decoded.width, config)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Color analysis %dx%d: %s",
            decoded.width, decoded.height,
            to_summary(analysis, format=SerializerFormat.NATURAL),
        )
    return analysis
