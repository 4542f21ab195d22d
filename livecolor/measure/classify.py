# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Region-weighted platform classification.

Two signatures are measured:
- TikTok live dashboards: near-black chrome (especially the header) with
  a muted crimson accent in the central panel.
- Shopee live dashboards: saturated orange in the central panel.

Each pixel is compared against the dark and accent references in Lab
(ΔE) and against an HSV window for orange. Counts become ratios per
region, and fixed threshold rules with explicit tie-breaks turn the
ratios into a decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from livecolor.measure.colorspace import delta_e_lab, rgb_to_hsv, rgb_to_lab, srgb_uint8_to_lab
from livecolor.measure.regions import RegionLayout
from livecolor.measure.resize import (
    MAX_ANALYSIS_WIDTH,
    MIN_ANALYSIS_WIDTH,
    resize_for_analysis,
)
from livecolor.schema import (
    ColorAnalysis,
    ColorMetrics,
    DecodedImage,
    ImageFormat,
    Platform,
)


@dataclass(frozen=True)
class ClassifierConfig:
    """Tunables for color classification."""

    # Reference colors (8-bit sRGB)
    dark_rgb: tuple[int, int, int] = (32, 32, 34)
    accent_rgb: tuple[int, int, int] = (149, 48, 68)

    # Base match distances (Lab ΔE, 0-100 scale)
    dark_delta: float = 11.0
    accent_delta: float = 21.0

    # Tolerance widening for small or lossy sources
    small_image_width: int = 800
    small_image_boost: float = 1.2
    jpeg_boost: float = 1.2

    # Analysis width band
    min_width: int = MIN_ANALYSIS_WIDTH
    max_width: int = MAX_ANALYSIS_WIDTH

    # Layout fractions
    margin: float = 0.03
    header: float = 0.15
    panel_rows: tuple[float, float] = (0.30, 0.70)
    panel_cols: tuple[float, float] = (0.20, 0.80)

    # Pixels more transparent than this are ignored
    min_alpha: int = 32

    # Orange window (HSV)
    orange_min_saturation: float = 0.7
    orange_min_value: float = 0.7
    orange_hue_range: tuple[float, float] = (5.0, 35.0)

    # Panel must hold this share of counted pixels to be its own denominator
    panel_min_share: float = 0.05

    # TikTok rule thresholds
    header_dark_min: float = 0.35
    overall_dark_min: float = 0.28
    panel_accent_min: float = 0.04
    overall_accent_min: float = 0.02
    strong_header_dark: float = 0.45
    weak_overall_accent_min: float = 0.015
    header_accent_max: float = 0.08
    header_accent_dark_floor: float = 0.28

    # Shopee rule thresholds
    panel_orange_min: float = 0.18
    overall_orange_min: float = 0.08
    panel_orange_fallback_min: float = 0.12

    # Tie-break margins when both pass
    header_dark_lead: float = 0.15
    orange_over_accent_lead: float = 0.08


def tolerance_multiplier(
    original_width: int,
    source_format: ImageFormat,
    config: Optional[ClassifierConfig] = None,
) -> float:
    """
    Scale factor applied to both match distances.

    Small screenshots are widened by ``small_image_boost``. JPEG sources
    would get ``jpeg_boost`` on top, but JPEG is never decoded to pixels
    so that branch has no effect today.
    """
    cfg = config or ClassifierConfig()
    multiplier = 1.0
    if 0 < original_width < cfg.small_image_width:
        multiplier *= cfg.small_image_boost
    if source_format is ImageFormat.JPEG:
        multiplier *= cfg.jpeg_boost
    return multiplier


def measure_color_metrics(
    image: DecodedImage,
    original_width: int,
    config: Optional[ClassifierConfig] = None,
) -> ColorMetrics:
    """
    Measure region-weighted color ratios.

    Args:
        image: Decoded screenshot (resized internally if too wide)
        original_width: Width before any upstream resizing, used only to
            pick the tolerance multiplier. 0 means unknown.
        config: Classifier settings (uses defaults if None)

    Returns:
        ColorMetrics; all-zero for an empty image
    """
    cfg = config or ClassifierConfig()
    target = resize_for_analysis(image, cfg.min_width, cfg.max_width)
    if target.is_empty:
        return ColorMetrics.zero()

    multiplier = tolerance_multiplier(original_width, image.format, cfg)
    dark_delta = cfg.dark_delta * multiplier
    accent_delta = cfg.accent_delta * multiplier

    layout = RegionLayout.for_size(
        target.width,
        target.height,
        margin=cfg.margin,
        header=cfg.header,
        panel_rows=cfg.panel_rows,
        panel_cols=cfg.panel_cols,
    )
    counted, in_header, in_panel = layout.masks()

    pixels = target.pixels
    opaque = pixels[..., 3] >= cfg.min_alpha
    counted = counted & opaque
    in_header = in_header & opaque
    in_panel = in_panel & opaque

    rgb = pixels[..., :3]
    lab = srgb_uint8_to_lab(rgb)
    is_dark = delta_e_lab(lab, rgb_to_lab(*cfg.dark_rgb)) <= dark_delta
    is_accent = delta_e_lab(lab, rgb_to_lab(*cfg.accent_rgb)) <= accent_delta

    hsv = rgb_to_hsv(rgb)
    hue_lo, hue_hi = cfg.orange_hue_range
    is_orange = (
        (hsv[..., 1] >= cfg.orange_min_saturation)
        & (hsv[..., 2] >= cfg.orange_min_value)
        & (hsv[..., 0] >= hue_lo)
        & (hsv[..., 0] <= hue_hi)
    )

    total = int(np.count_nonzero(counted))
    header_count = int(np.count_nonzero(in_header))
    panel_count = int(np.count_nonzero(in_panel))

    panel_valid = panel_count >= total * cfg.panel_min_share
    total_den = max(total, 1)
    header_den = max(header_count, 1)
    panel_den = panel_count if panel_valid else total_den
    # panel_valid with zero panel pixels only happens when total is also 0
    panel_den = max(panel_den, 1)

    def ratio(mask, region, den: int) -> float:
        return int(np.count_nonzero(mask & region)) / den

    return ColorMetrics(
        header_dark=ratio(is_dark, in_header, header_den),
        overall_dark=ratio(is_dark, counted, total_den),
        panel_accent=ratio(is_accent, in_panel, panel_den),
        overall_accent=ratio(is_accent, counted, total_den),
        header_accent=ratio(is_accent, in_header, header_den),
        panel_orange=ratio(is_orange, in_panel, panel_den),
        overall_orange=ratio(is_orange, counted, total_den),
        panel_valid=bool(panel_valid),
    )


def decide(
    metrics: ColorMetrics,
    config: Optional[ClassifierConfig] = None,
) -> tuple[bool, bool, Optional[Platform]]:
    """
    Apply the threshold rules to a set of metrics.

    Returns:
        (tiktok_color_pass, shopee_color_pass, color_decision)
    """
    cfg = config or ClassifierConfig()
    m = metrics

    tiktok_pass = False
    dark_pass = m.header_dark >= cfg.header_dark_min or m.overall_dark >= cfg.overall_dark_min
    if dark_pass:
        accent_pass = (
            m.panel_accent >= cfg.panel_accent_min
            or m.overall_accent >= cfg.overall_accent_min
            or (
                m.header_dark >= cfg.strong_header_dark
                and m.overall_accent >= cfg.weak_overall_accent_min
            )
        )
        # Accent concentrated in a light header is not the TikTok layout
        if m.header_accent > cfg.header_accent_max and m.header_dark < cfg.header_accent_dark_floor:
            accent_pass = False
        tiktok_pass = accent_pass

    shopee_pass = (
        m.panel_orange >= cfg.panel_orange_min
        or m.overall_orange >= cfg.overall_orange_min
        or m.panel_orange >= cfg.panel_orange_fallback_min
    )

    if tiktok_pass and not shopee_pass:
        return tiktok_pass, shopee_pass, Platform.TIKTOK
    if shopee_pass and not tiktok_pass:
        return tiktok_pass, shopee_pass, Platform.SHOPEE
    if not tiktok_pass and not shopee_pass:
        return tiktok_pass, shopee_pass, None

    # Both passed
    if m.header_dark - m.panel_orange > cfg.header_dark_lead:
        return True, True, Platform.TIKTOK
    if (
        m.panel_orange - m.panel_accent > cfg.orange_over_accent_lead
        and m.overall_accent < cfg.overall_accent_min
    ):
        return True, True, Platform.SHOPEE

    tiktok_score = m.header_dark * 0.6 + max(m.panel_accent, m.overall_accent) * 0.4
    shopee_score = max(m.panel_orange, m.overall_orange)
    winner = Platform.TIKTOK if tiktok_score >= shopee_score else Platform.SHOPEE
    return True, True, winner


def classify_image(
    image: DecodedImage,
    original_width: int,
    config: Optional[ClassifierConfig] = None,
) -> ColorAnalysis:
    """
    Classify a decoded screenshot by its color signature.

    Args:
        image: Decoded screenshot
        original_width: Width hint for tolerance scaling (0 = unknown)
        config: Classifier settings (uses defaults if None)

    Returns:
        ColorAnalysis; the empty analysis for a zero-area image
    """
    if image.is_empty:
        return ColorAnalysis.empty()

    metrics = measure_color_metrics(image, original_width, config)
    tiktok_pass, shopee_pass, decision = decide(metrics, config)
    return ColorAnalysis(
        metrics=metrics,
        tiktok_color_pass=tiktok_pass,
        shopee_color_pass=shopee_pass,
        color_decision=decision,
    )
