# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Livecolor -- Platform classification of live-dashboard screenshots by color.

Decodes screenshot pixels and scores regional color statistics to tell a
TikTok live dashboard from a Shopee one, without any learned model.

Quick start::

    from livecolor import analyze_platform_colors

    result = analyze_platform_colors(png_bytes, original_width=1080)
    result.color_decision   # Platform.TIKTOK, Platform.SHOPEE or None
    result.to_json()        # Full analysis as JSON
"""

from __future__ import annotations

__version__ = "1.0.0"

from livecolor.errors import FormatError
from livecolor.measure import ClassifierConfig, analyze_platform_colors
from livecolor.schema import (
    ColorAnalysis,
    ColorMetrics,
    DecodedImage,
    ImageFormat,
    Platform,
)

__all__ = [
    # Core API
    "analyze_platform_colors",
    "ClassifierConfig",
    # Types (commonly needed)
    "ColorAnalysis",
    "ColorMetrics",
    "Platform",
    "DecodedImage",
    "ImageFormat",
    "FormatError",
    # Version
    "__version__",
]
