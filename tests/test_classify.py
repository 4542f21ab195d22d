# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""Tests for region layout, color metrics and the decision rules."""

import numpy as np
import pytest

from livecolor.measure.classify import (
    ClassifierConfig,
    classify_image,
    decide,
    measure_color_metrics,
    tolerance_multiplier,
)
from livecolor.measure.regions import RegionLayout
from livecolor.schema import ColorAnalysis, ColorMetrics, DecodedImage, ImageFormat, Platform

from pngutil import solid_rgba

DARK = (32, 32, 34)
ACCENT = (149, 48, 68)
ORANGE = (230, 92, 23)  # HSV(20°, 0.9, 0.9)
WHITE = (255, 255, 255)
# ΔE ≈ 12.2 from DARK: outside 11, inside 11 × 1.2
NEAR_DARK = (58, 58, 60)


def _image(pixels, format=ImageFormat.PNG):
    height, width = pixels.shape[:2]
    return DecodedImage(width=width, height=height, pixels=pixels, format=format)


def _panel_image(background, panel_color, height=100, width=200):
    """Background with a block overlapping the panel region on every side.

    For 200x100 the block is rows 25-75, cols 35-165.
    """
    img = solid_rgba(background, height=height, width=width)
    top, bottom = round(height * 0.25), round(height * 0.75)
    left, right = round(width * 0.175), round(width * 0.825)
    img[top:bottom + 1, left:right + 1, :3] = panel_color
    return img


class TestRegionLayout:

    def test_layout_for_200x100(self):
        layout = RegionLayout.for_size(200, 100)
        assert (layout.margin_x, layout.margin_y) == (6, 3)
        assert layout.header_end == 15
        assert (layout.panel_top, layout.panel_bottom) == (30, 70)
        assert (layout.panel_left, layout.panel_right) == (40, 160)

    def test_margin_at_least_one(self):
        layout = RegionLayout.for_size(10, 10)
        assert layout.margin_x == 1
        assert layout.margin_y == 1

    def test_mask_counts(self):
        counted, header, panel = RegionLayout.for_size(200, 100).masks()
        assert counted.shape == (100, 200)
        assert counted.sum() == 94 * 188
        assert header.sum() == 12 * 188
        # Inclusive bounds: rows 30..70, cols 40..160
        assert panel.sum() == 41 * 121

    def test_masks_exclude_margin(self):
        counted, header, panel = RegionLayout.for_size(200, 100).masks()
        assert not counted[0].any()
        assert not counted[:, :6].any()
        assert not header[:3].any()


class TestToleranceMultiplier:

    def test_large_image(self):
        assert tolerance_multiplier(1200, ImageFormat.PNG) == 1.0

    def test_small_image(self):
        assert tolerance_multiplier(600, ImageFormat.PNG) == pytest.approx(1.2)

    def test_unknown_width(self):
        assert tolerance_multiplier(0, ImageFormat.PNG) == 1.0

    def test_jpeg_stacks(self):
        assert tolerance_multiplier(600, ImageFormat.JPEG) == pytest.approx(1.44)


class TestMetrics:

    def test_solid_dark(self):
        m = measure_color_metrics(_image(solid_rgba(DARK)), 1080)
        assert m.overall_dark == pytest.approx(1.0)
        assert m.header_dark == pytest.approx(1.0)
        assert m.panel_accent == 0.0
        assert m.overall_accent == 0.0
        assert m.panel_valid

    def test_dark_header_only(self):
        img = solid_rgba(WHITE)
        img[:15, :, :3] = DARK
        m = measure_color_metrics(_image(img), 1080)
        assert m.header_dark == pytest.approx(1.0)
        assert m.overall_dark == pytest.approx(12 / 94)

    def test_panel_orange(self):
        m = measure_color_metrics(_image(_panel_image(WHITE, ORANGE)), 1080)
        assert m.panel_orange == pytest.approx(1.0)
        assert m.overall_orange == pytest.approx(51 * 131 / (94 * 188))
        assert m.overall_dark == 0.0

    def test_small_image_leniency(self):
        img = _image(solid_rgba(NEAR_DARK))
        assert measure_color_metrics(img, 1200).overall_dark == 0.0
        assert measure_color_metrics(img, 600).overall_dark == pytest.approx(1.0)

    def test_transparent_pixels_ignored(self):
        img = solid_rgba(ORANGE, alpha=0)
        img[:, :100, 3] = 31
        m = measure_color_metrics(_image(img), 1080)
        assert m == ColorMetrics(panel_valid=True)

    @pytest.mark.parametrize("rgb,counted", [
        ((230, 42, 23), True),    # hue 5.5°
        ((230, 37, 23), False),   # hue 4.1°
        ((230, 141, 23), True),   # hue 34.2°
        ((230, 155, 23), False),  # hue 38.3°
        ((230, 123, 70), False),  # saturation 0.696
        ((178, 71, 18), False),   # value 0.698
        ((179, 72, 18), True),    # value 0.702
    ])
    def test_orange_window_edges(self, rgb, counted):
        m = measure_color_metrics(_image(solid_rgba(rgb)), 1080)
        assert m.overall_orange == (1.0 if counted else 0.0)
        assert m.panel_orange == m.overall_orange

    def test_alpha_threshold_inclusive(self):
        m = measure_color_metrics(_image(solid_rgba(ORANGE, alpha=32)), 1080)
        assert m.overall_orange == pytest.approx(1.0)

    def test_wide_image_resized_first(self):
        img = _panel_image(WHITE, ORANGE, height=500, width=1000)
        m = measure_color_metrics(_image(img), 1000)
        assert m.panel_orange == pytest.approx(1.0)

    def test_empty_image(self):
        assert measure_color_metrics(DecodedImage.empty(), 0) == ColorMetrics.zero()

    def test_custom_reference_color(self):
        config = ClassifierConfig(dark_rgb=WHITE)
        m = measure_color_metrics(_image(solid_rgba(WHITE)), 1080, config)
        assert m.overall_dark == pytest.approx(1.0)


class TestClassifyImage:

    def test_solid_dark_is_not_enough(self):
        result = classify_image(_image(solid_rgba(DARK)), 1080)
        assert result.metrics.overall_dark == pytest.approx(1.0)
        assert result.tiktok_color_pass is False
        assert result.shopee_color_pass is False
        assert result.color_decision is None

    def test_orange_panel_is_shopee(self):
        result = classify_image(_image(_panel_image(WHITE, ORANGE)), 1080)
        assert result.shopee_color_pass is True
        assert result.tiktok_color_pass is False
        assert result.color_decision is Platform.SHOPEE

    def test_dark_with_accent_panel_is_tiktok(self):
        result = classify_image(_image(_panel_image(DARK, ACCENT)), 1080)
        assert result.tiktok_color_pass is True
        assert result.shopee_color_pass is False
        assert result.color_decision is Platform.TIKTOK

    def test_empty_image(self):
        assert classify_image(DecodedImage.empty(ImageFormat.JPEG), 600) == ColorAnalysis.empty()


def _metrics(**kwargs):
    return ColorMetrics(panel_valid=True, **kwargs)


class TestDecide:

    def test_nothing_passes(self):
        assert decide(_metrics()) == (False, False, None)

    def test_dark_without_accent(self):
        assert decide(_metrics(header_dark=0.9, overall_dark=0.9)) == (False, False, None)

    def test_accent_without_dark(self):
        assert decide(_metrics(header_dark=0.1, overall_dark=0.1, panel_accent=0.9))[0] is False

    def test_overall_dark_alone_passes_dark(self):
        assert decide(_metrics(overall_dark=0.28, overall_accent=0.02))[2] is Platform.TIKTOK

    def test_weak_accent_with_strong_header(self):
        m = _metrics(header_dark=0.5, overall_accent=0.016, panel_accent=0.01)
        assert decide(m) == (True, False, Platform.TIKTOK)

    def test_weak_accent_needs_strong_header(self):
        m = _metrics(header_dark=0.4, overall_accent=0.016, panel_accent=0.01)
        assert decide(m)[0] is False

    def test_light_header_with_accent_vetoed(self):
        m = _metrics(header_dark=0.2, overall_dark=0.5, panel_accent=0.5, header_accent=0.1)
        assert decide(m) == (False, False, None)

    @pytest.mark.parametrize("kwargs", [
        {"panel_orange": 0.18},
        {"overall_orange": 0.08},
        {"panel_orange": 0.12},
    ])
    def test_shopee_thresholds(self, kwargs):
        assert decide(_metrics(**kwargs)) == (False, True, Platform.SHOPEE)

    def test_shopee_below_thresholds(self):
        assert decide(_metrics(panel_orange=0.11, overall_orange=0.07))[1] is False

    def test_both_header_dark_lead(self):
        m = _metrics(header_dark=0.9, panel_accent=0.05, panel_orange=0.2)
        assert decide(m) == (True, True, Platform.TIKTOK)

    def test_both_orange_over_accent(self):
        m = _metrics(header_dark=0.4, panel_accent=0.05, overall_accent=0.01, panel_orange=0.5)
        assert decide(m) == (True, True, Platform.SHOPEE)

    def test_both_score_tiktok(self):
        m = _metrics(header_dark=0.4, panel_accent=0.3, overall_accent=0.05, panel_orange=0.3)
        assert decide(m) == (True, True, Platform.TIKTOK)

    def test_both_score_shopee(self):
        m = _metrics(header_dark=0.4, panel_accent=0.45, overall_accent=0.05, panel_orange=0.5)
        assert decide(m) == (True, True, Platform.SHOPEE)

    def test_both_exact_tie_goes_to_tiktok(self):
        # tiktok score 0.5 * 0.6 + 0.5 * 0.4 == shopee score 0.5
        m = _metrics(header_dark=0.5, panel_accent=0.5, overall_accent=0.05, panel_orange=0.5)
        assert decide(m) == (True, True, Platform.TIKTOK)

    def test_thresholds_configurable(self):
        config = ClassifierConfig(panel_orange_min=0.5, panel_orange_fallback_min=0.5)
        assert decide(_metrics(panel_orange=0.2), config)[1] is False
