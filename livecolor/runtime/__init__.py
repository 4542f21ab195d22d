# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Delivery runtime for Livecolor.

Serialization of ColorAnalysis results for the OCR stage and for logs.
"""

from livecolor.runtime.serializers import SerializerFormat, to_summary

__all__ = [
    "to_summary",
    "SerializerFormat",
]
