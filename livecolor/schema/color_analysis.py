# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
ColorAnalysis — result schema for platform color classification.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same bytes and width hint → same analysis
- Ephemeral: Recomputed per request, never persisted
- Serializable: JSON-ready for the consuming OCR module

Metric names:
    header_*   ratio over non-transparent pixels in the header band
    panel_*    ratio over the central panel (or over all pixels when the
               panel is too small to trust, see ``panel_valid``)
    overall_*  ratio over all counted pixels
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional


class Platform(Enum):
    """Live dashboard platforms that can be told apart by color."""

    TIKTOK = "tiktok"
    SHOPEE = "shopee"


_RATIO_FIELDS = (
    "header_dark",
    "overall_dark",
    "panel_accent",
    "overall_accent",
    "header_accent",
    "panel_orange",
    "overall_orange",
)


@dataclass(frozen=True, slots=True)
class ColorMetrics:
    """
    Region-weighted color ratios for one screenshot.

    Attributes:
        header_dark: Share of header pixels matching the dark background
        overall_dark: Share of all pixels matching the dark background
        panel_accent: Share of panel pixels matching the accent color
        overall_accent: Share of all pixels matching the accent color
        header_accent: Share of header pixels matching the accent color
        panel_orange: Share of panel pixels in the orange HSV window
        overall_orange: Share of all pixels in the orange HSV window
        panel_valid: Panel held at least the minimum share of counted pixels
    """
    header_dark: float = 0.0
    overall_dark: float = 0.0
    panel_accent: float = 0.0
    overall_accent: float = 0.0
    header_accent: float = 0.0
    panel_orange: float = 0.0
    overall_orange: float = 0.0
    panel_valid: bool = False

    def __post_init__(self) -> None:
        """Validate ratios are within [0, 1]."""
        for name in _RATIO_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be 0-1, got {value}")

    @classmethod
    def zero(cls) -> ColorMetrics:
        """All-zero metrics with an invalid panel."""
        return cls()

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> ColorMetrics:
        """Deserialize from dictionary."""
        values = {name: float(data.get(name, 0.0)) for name in _RATIO_FIELDS}
        return cls(panel_valid=bool(data.get("panel_valid", False)), **values)


@dataclass(frozen=True, slots=True)
class ColorAnalysis:
    """
    Outcome of classifying a screenshot by color.

    ``color_decision`` is None when neither platform's color test passed,
    including when the input could not be decoded at all.

    Attributes:
        metrics: The ratios the decision was made from
        tiktok_color_pass: Dark background with accent presence
        shopee_color_pass: Enough saturated orange
        color_decision: The winning platform, or None
    """
    metrics: ColorMetrics = field(default_factory=ColorMetrics)
    tiktok_color_pass: bool = False
    shopee_color_pass: bool = False
    color_decision: Optional[Platform] = None

    @classmethod
    def empty(cls) -> ColorAnalysis:
        """Degraded result: zero metrics, both passes false, no decision."""
        return cls(metrics=ColorMetrics.zero())

    @property
    def has_decision(self) -> bool:
        return self.color_decision is not None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "metrics": self.metrics.to_dict(),
            "tiktok_color_pass": self.tiktok_color_pass,
            "shopee_color_pass": self.shopee_color_pass,
            "color_decision": (
                self.color_decision.value if self.color_decision is not None else None
            ),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> ColorAnalysis:
        """Deserialize from dictionary."""
        decision = data.get("color_decision")
        return cls(
            metrics=ColorMetrics.from_dict(data.get("metrics", {})),
            tiktok_color_pass=bool(data.get("tiktok_color_pass", False)),
            shopee_color_pass=bool(data.get("shopee_color_pass", False)),
            color_decision=Platform(decision) if decision is not None else None,
        )

    @classmethod
    def from_json(cls, json_str: str) -> ColorAnalysis:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
