# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Spatial regions of a live-dashboard screenshot.

Fixed fractional bands, not detected layout:

    ┌──────────────────────────────┐  ← margin (excluded everywhere)
    │ header  (y < 15% H)          │
    │                              │
    │      ┌────────────────┐      │  30% H
    │      │     panel      │      │
    │      │ 20%W .. 80%W   │      │
    │      └────────────────┘      │  70% H
    │                              │
    └──────────────────────────────┘

Boundaries are rounded half up. The panel bounds are inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from livecolor.measure.resize import round_half_up


@dataclass(frozen=True, slots=True)
class RegionLayout:
    """
    Pixel bounds of the counted area, header band and panel box.

    Attributes:
        width, height: Image size the layout was computed for
        margin_x, margin_y: Pixels excluded at each edge (at least 1)
        header_end: First row below the header band
        panel_top, panel_bottom: Inclusive panel row bounds
        panel_left, panel_right: Inclusive panel column bounds
    """
    width: int
    height: int
    margin_x: int
    margin_y: int
    header_end: int
    panel_top: int
    panel_bottom: int
    panel_left: int
    panel_right: int

    @classmethod
    def for_size(
        cls,
        width: int,
        height: int,
        *,
        margin: float = 0.03,
        header: float = 0.15,
        panel_rows: tuple[float, float] = (0.30, 0.70),
        panel_cols: tuple[float, float] = (0.20, 0.80),
    ) -> RegionLayout:
        """Compute the layout for an image of the given size."""
        return cls(
            width=width,
            height=height,
            margin_x=max(1, round_half_up(width * margin)),
            margin_y=max(1, round_half_up(height * margin)),
            header_end=round_half_up(height * header),
            panel_top=round_half_up(height * panel_rows[0]),
            panel_bottom=round_half_up(height * panel_rows[1]),
            panel_left=round_half_up(width * panel_cols[0]),
            panel_right=round_half_up(width * panel_cols[1]),
        )

    def masks(self) -> tuple[NDArray[np.bool_], NDArray[np.bool_], NDArray[np.bool_]]:
        """
        Boolean (H, W) masks for the counted area, header and panel.

        Header and panel masks are already restricted to the counted area.
        """
        ys = np.arange(self.height)[:, None]
        xs = np.arange(self.width)[None, :]

        counted = (
            (ys >= self.margin_y) & (ys < self.height - self.margin_y)
            & (xs >= self.margin_x) & (xs < self.width - self.margin_x)
        )
        header = counted & (ys < self.header_end)
        panel = (
            counted
            & (ys >= self.panel_top) & (ys <= self.panel_bottom)
            & (xs >= self.panel_left) & (xs <= self.panel_right)
        )
        return counted, header, panel
