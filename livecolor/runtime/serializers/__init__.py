# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Serializers for ColorAnalysis delivery.

All serializers preserve the analysis exactly: no modification or inference.
"""

from livecolor.runtime.serializers.summary import SerializerFormat, to_summary

__all__ = [
    "SerializerFormat",
    "to_summary",
]
