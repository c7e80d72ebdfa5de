"""
Core LSB packing: one byte over the four channels of two pixels
"""

import numpy as np

from .addressing import PixelCursor


CHANNELS_PER_PIXEL = 4
BITS_PER_BYTE = 8
PIXELS_PER_BYTE = BITS_PER_BYTE // CHANNELS_PER_PIXEL


def with_lsb(channel: int, bit: int) -> int:
    """
    Return the channel value with its least significant bit set to `bit`

    Args:
        channel: 8-bit channel value
        bit: 0 or 1

    Returns:
        Channel value with bits 1-7 untouched
    """
    channel = int(channel)
    if bit == 1:
        return channel | 1
    return channel & ~1


def lsb(channel: int) -> int:
    return int(channel) & 1


def write_byte(pixels: np.ndarray, cursor: PixelCursor, byte: int) -> None:
    """
    Write one byte into two consecutive pixels starting at the cursor

    Bits 0-3 land in the first pixel's channels, bits 4-7 in the second's,
    channel 0 first. The cursor advances by one per pixel.

    Args:
        pixels: (height, width, 4) uint8 buffer, modified in place
        cursor: Shared pixel cursor
        byte: Value to embed (0-255)

    Raises:
        ValueError: If byte is not in 0-255
        BoundsError: If the image runs out of pixels
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Byte value out of range: {byte}")

    height, width = pixels.shape[:2]

    for first_bit in range(0, BITS_PER_BYTE, CHANNELS_PER_PIXEL):
        x, y = cursor.locate(width, height)
        pixel = pixels[y, x]

        for channel in range(CHANNELS_PER_PIXEL):
            bit = (byte >> (first_bit + channel)) & 1
            pixel[channel] = with_lsb(pixel[channel], bit)

        cursor.advance()


def read_byte(pixels: np.ndarray, cursor: PixelCursor) -> int:
    """
    Read one byte back from two consecutive pixels starting at the cursor

    Args:
        pixels: (height, width, 4) uint8 buffer
        cursor: Shared pixel cursor

    Returns:
        Reconstructed byte value

    Raises:
        BoundsError: If the image runs out of pixels
    """
    height, width = pixels.shape[:2]
    byte = 0

    for first_bit in range(0, BITS_PER_BYTE, CHANNELS_PER_PIXEL):
        x, y = cursor.locate(width, height)
        pixel = pixels[y, x]

        for channel in range(CHANNELS_PER_PIXEL):
            byte |= lsb(pixel[channel]) << (first_bit + channel)

        cursor.advance()

    return byte


def write_bytes(pixels: np.ndarray, cursor: PixelCursor, data: bytes) -> None:
    """Write a byte sequence in order, sharing one cursor."""
    for byte in data:
        write_byte(pixels, cursor, byte)


def read_bytes(pixels: np.ndarray, cursor: PixelCursor, length: int) -> bytes:
    """Read `length` bytes in order, sharing one cursor."""
    result = bytearray()
    for _ in range(length):
        result.append(read_byte(pixels, cursor))
    return bytes(result)
