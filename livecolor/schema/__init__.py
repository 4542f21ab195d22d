# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Schema definitions for decoded images and color analyses.

All types in this module are immutable (frozen dataclasses).
"""

from livecolor.schema.color_analysis import (
    ColorAnalysis,
    ColorMetrics,
    Platform,
)
from livecolor.schema.image import DecodedImage, ImageFormat

__all__ = [
    # Decoder output
    "ImageFormat",
    "DecodedImage",
    # Classifier output
    "Platform",
    "ColorMetrics",
    "ColorAnalysis",
]
