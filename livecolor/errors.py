# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Decode errors.

Every failure the decoder can detect in its input is a FormatError.
The top-level entry point catches FormatError and degrades to an empty
analysis; anything else is a bug and propagates.
"""


class FormatError(ValueError):
    """Input bytes are not a decodable image."""


class TruncatedDataError(FormatError):
    """Input ended before a declared length was satisfied."""


class UnsupportedImageError(FormatError):
    """Valid container, but a feature outside the supported PNG subset."""


class ImageTooLargeError(FormatError):
    """Declared geometry exceeds the decoder's resource limits."""
