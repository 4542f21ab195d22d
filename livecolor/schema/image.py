# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Decoded image container.

A DecodedImage is a dense RGBA8 pixel grid plus the format it was decoded
from. The 0x0 image is the canonical "could not decode" sentinel: it is a
normal value, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class ImageFormat(Enum):
    """Container format detected from the leading bytes."""

    PNG = "png"
    JPEG = "jpeg"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class DecodedImage:
    """
    RGBA8 pixel grid.

    Attributes:
        width: Width in pixels (0 for the sentinel)
        height: Height in pixels (0 for the sentinel)
        pixels: uint8 array of shape (height, width, 4), row-major RGBA
        format: Source container format
    """
    width: int
    height: int
    pixels: NDArray[np.uint8]
    format: ImageFormat = ImageFormat.PNG

    def __post_init__(self) -> None:
        """Validate geometry against the pixel buffer."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        if self.pixels.size != self.width * self.height * 4:
            raise ValueError(
                f"Pixel buffer holds {self.pixels.size} samples, "
                f"expected {self.width * self.height * 4} for "
                f"{self.width}x{self.height} RGBA"
            )
        if self.pixels.shape != (self.height, self.width, 4):
            object.__setattr__(
                self, "pixels", self.pixels.reshape(self.height, self.width, 4)
            )
        self.pixels.flags.writeable = False

    @classmethod
    def empty(cls, format: ImageFormat = ImageFormat.UNKNOWN) -> DecodedImage:
        """The 0x0 sentinel for input that produced no pixels."""
        return cls(
            width=0,
            height=0,
            pixels=np.zeros((0, 0, 4), dtype=np.uint8),
            format=format,
        )

    @property
    def is_empty(self) -> bool:
        """True if the image has no pixels."""
        return self.width == 0 or self.height == 0

    @property
    def nbytes(self) -> int:
        """Size of the RGBA buffer in bytes (always width * height * 4)."""
        return int(self.pixels.nbytes)

    def tobytes(self) -> bytes:
        """Flat row-major RGBA8 buffer."""
        return self.pixels.tobytes()
