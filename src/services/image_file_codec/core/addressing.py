"""
Pixel addressing for the embedding bitstream
"""

from typing import Tuple

from .errors import BoundsError


def pixel_position(pixel_index: int, width: int, height: int) -> Tuple[int, int]:
    """
    Map a pixel index to (x, y) coordinates in row-major order

    Args:
        pixel_index: 0-based index into the bitstream
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Tuple of (x, y)

    Raises:
        BoundsError: If the index does not address a pixel of the image
    """
    if width <= 0 or height <= 0 or pixel_index < 0:
        raise BoundsError(pixel_index, width, height)

    y = pixel_index // width
    x = pixel_index % width

    if x >= width or y >= height:
        raise BoundsError(pixel_index, width, height)

    return x, y


class PixelCursor:
    """
    Counts pixels consumed by the bitstream.

    Starts at 0 and only ever moves forward, one pixel at a time.
    """

    def __init__(self, position: int = 0):
        if position < 0:
            raise ValueError("Pixel cursor cannot start before 0")
        self._position = position

    @property
    def position(self) -> int:
        return self._position

    def locate(self, width: int, height: int) -> Tuple[int, int]:
        """Coordinates of the pixel the cursor currently points at."""
        return pixel_position(self._position, width, height)

    def advance(self) -> None:
        self._position += 1

    def __repr__(self) -> str:
        return f"PixelCursor(position={self._position})"
