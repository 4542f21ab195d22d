# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chain: sRGB → Linear RGB → CIE XYZ (D65) → CIE L*a*b*

Plus RGB → HSV for hue-window tests.

References:
- sRGB: IEC 61966-2-1
- Lab: CIE 1976 L*a*b*, D65 reference white

All conversions are vectorized NumPy over arrays of shape (..., 3).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


# =============================================================================
# sRGB → Linear RGB
# =============================================================================


def srgb_to_linear(srgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: value/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4),
    )


# =============================================================================
# Linear RGB → XYZ → Lab
# =============================================================================

# Linear sRGB to XYZ, D65 white point
_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
], dtype=np.float64)

# D65 reference white, Y normalized to 100
REFERENCE_WHITE = np.array([95.047, 100.0, 108.883], dtype=np.float64)

_DELTA = 6.0 / 29.0


def linear_rgb_to_xyz(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert linear RGB to CIE XYZ scaled to [0, ~100].

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with XYZ values
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    return np.einsum('...j,ij->...i', rgb, _RGB_TO_XYZ) * 100.0


def _lab_pivot(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.where(
        t > _DELTA ** 3,
        np.cbrt(t),
        t / (3.0 * _DELTA * _DELTA) + 4.0 / 29.0,
    )


def xyz_to_lab(xyz: ArrayLike) -> NDArray[np.float64]:
    """
    Convert CIE XYZ (Y in [0, 100]) to CIE Lab.

    Args:
        xyz: Array of shape (..., 3)

    Returns:
        Array of shape (..., 3) with (L, a, b); L is clamped at 0
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    f = _lab_pivot(xyz / REFERENCE_WHITE)
    fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]

    L = np.maximum(0.0, 116.0 * fy - 16.0)
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)
    return np.stack([L, a, b], axis=-1)


def srgb_uint8_to_lab(pixels: ArrayLike) -> NDArray[np.float64]:
    """
    Convert uint8 sRGB pixels [0,255] to Lab.

    Full chain: sRGB → Linear RGB → XYZ → Lab

    Args:
        pixels: Array of shape (..., 3) with sRGB values [0, 255]

    Returns:
        Array of shape (..., 3) with Lab values
    """
    srgb = np.asarray(pixels, dtype=np.float64) / 255.0
    return xyz_to_lab(linear_rgb_to_xyz(srgb_to_linear(srgb)))


def rgb_to_lab(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Lab of a single 8-bit sRGB color."""
    lab = srgb_uint8_to_lab(np.array([r, g, b]))
    return float(lab[0]), float(lab[1]), float(lab[2])


# =============================================================================
# ΔE Distance
# =============================================================================


def delta_e_lab(lab1: ArrayLike, lab2: ArrayLike) -> NDArray[np.float64]:
    """
    CIE76 color difference: Euclidean distance in Lab.

    Broadcasts, so a (N, 3) array can be compared against one (3,) target.

    Reference thresholds (Lab, 0-100 scale):
    - ΔE ≈ 1: just noticeable
    - ΔE ≈ 10: clearly different shade
    - ΔE ≈ 50+: unrelated colors
    """
    delta = np.asarray(lab1, dtype=np.float64) - np.asarray(lab2, dtype=np.float64)
    return np.sqrt(np.sum(delta ** 2, axis=-1))


# =============================================================================
# RGB → HSV
# =============================================================================


def rgb_to_hsv(pixels: ArrayLike) -> NDArray[np.float64]:
    """
    Convert uint8 RGB pixels [0,255] to HSV.

    Args:
        pixels: Array of shape (..., 3)

    Returns:
        Array of shape (..., 3) with:
        - H: Hue in degrees [0, 360), 0 for grays
        - S: Saturation [0, 1], 0 for black
        - V: Value [0, 1]
    """
    rgb = np.asarray(pixels, dtype=np.float64) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    cmax = np.max(rgb, axis=-1)
    cmin = np.min(rgb, axis=-1)
    delta = cmax - cmin

    # Avoid dividing by zero for grays; their hue is forced to 0 below
    safe_delta = np.where(delta == 0, 1.0, delta)

    # Branch priority on ties: red, then green, then blue
    hue = np.where(
        cmax == r,
        np.mod((g - b) / safe_delta, 6.0),
        np.where(
            cmax == g,
            (b - r) / safe_delta + 2.0,
            (r - g) / safe_delta + 4.0,
        ),
    )
    hue = np.where(delta == 0, 0.0, np.mod(hue * 60.0, 360.0))

    safe_max = np.where(cmax == 0, 1.0, cmax)
    saturation = np.where(cmax == 0, 0.0, delta / safe_max)

    return np.stack([hue, saturation, cmax], axis=-1)
