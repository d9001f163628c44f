"""Flat RGBA8 framebuffer partitioned into disjoint row slices.

The framebuffer is one contiguous uint8 array of width * height * 4 bytes
(row-major, R, G, B, A per pixel). row_slice() returns a writable NumPy view
of exactly one row. Views of different rows never overlap, which is what lets
render threads write pixels without any locking.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

CHANNELS = 4


class Framebuffer:
    """Preallocated RGBA8 pixel storage.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        data: Flat uint8 array of length width * height * 4.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.data: npt.NDArray[np.uint8] = np.zeros(width * height * CHANNELS, dtype=np.uint8)

    @property
    def stride(self) -> int:
        """Number of bytes in one row."""
        return self.width * CHANNELS

    def row_slice(self, row: int) -> npt.NDArray[np.uint8]:
        """Return a writable view of the bytes of one row.

        Raises:
            IndexError: If row is outside [0, height).
        """
        if not 0 <= row < self.height:
            raise IndexError(f"Row {row} out of range for height {self.height}")
        start = row * self.stride
        return self.data[start : start + self.stride]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Read one pixel as an (R, G, B, A) tuple."""
        offset = y * self.stride + x * CHANNELS
        r, g, b, a = self.data[offset : offset + CHANNELS]
        return int(r), int(g), int(b), int(a)

    def to_array(self) -> npt.NDArray[np.uint8]:
        """Return a (height, width, 4) view of the pixel data."""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def __repr__(self) -> str:
        return f"Framebuffer(width={self.width}, height={self.height})"
