# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Summary serializer for downstream consumers.

The OCR stage only needs the decision and the two pass flags to pick its
text-extraction regions; the metrics are included for diagnostics.
"""

from __future__ import annotations

import json
from enum import Enum

from livecolor.schema import ColorAnalysis


class SerializerFormat(Enum):
    """Output format for to_summary. NATURAL is the one-line form used in debug logs."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"
    NATURAL = "natural"


def to_summary(
    analysis: ColorAnalysis,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    include_metrics: bool = True,
    precision: int = 3,
) -> str:
    """Serialize a ColorAnalysis as a compact summary.

    Args:
        analysis: The ColorAnalysis to serialize.
        format: JSON, JSON_PRETTY or NATURAL (one line of text).
        include_metrics: Include the region ratios.
        precision: Decimal places for ratios.

    Returns:
        Serialized string.

    Example (NATURAL)::

        decision=tiktok (tiktok pass, shopee fail) header_dark=0.912 ...
    """
    if format == SerializerFormat.NATURAL:
        return _to_natural(analysis, include_metrics, precision)

    payload = {
        "color_decision": (
            analysis.color_decision.value if analysis.color_decision is not None else None
        ),
        "tiktok_color_pass": analysis.tiktok_color_pass,
        "shopee_color_pass": analysis.shopee_color_pass,
    }
    if include_metrics:
        payload["metrics"] = _rounded_metrics(analysis, precision)

    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(payload, indent=2)
    return json.dumps(payload, separators=(",", ":"))


def _rounded_metrics(analysis: ColorAnalysis, precision: int) -> dict:
    return {
        key: (round(value, precision) if isinstance(value, float) else value)
        for key, value in analysis.metrics.to_dict().items()
    }


def _to_natural(analysis: ColorAnalysis, include_metrics: bool, precision: int) -> str:
    decision = analysis.color_decision.value if analysis.color_decision is not None else "none"
    tiktok = "pass" if analysis.tiktok_color_pass else "fail"
    shopee = "pass" if analysis.shopee_color_pass else "fail"
    parts = [f"decision={decision} (tiktok {tiktok}, shopee {shopee})"]

    if include_metrics:
        for key, value in _rounded_metrics(analysis, precision).items():
            if isinstance(value, bool):
                parts.append(f"{key}={'yes' if value else 'no'}")
            else:
                parts.append(f"{key}={value:.{precision}f}")
    return " ".join(parts)
