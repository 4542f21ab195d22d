# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Measurement core for Livecolor.

Color science, resizing, region layout and the platform classifier.
All operations are pure functions of their inputs.
"""

from livecolor.measure.analyze import analyze_platform_colors
from livecolor.measure.classify import (
    ClassifierConfig,
    classify_image,
    decide,
    measure_color_metrics,
)
from livecolor.measure.resize import resize_for_analysis

__all__ = [
    "analyze_platform_colors",
    "classify_image",
    "measure_color_metrics",
    "decide",
    "ClassifierConfig",
    "resize_for_analysis",
]
