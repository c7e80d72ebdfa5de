"""
Frame header codec

Layout (big-endian):
    flags        1 byte   reserved, always 0
    name_length  4 bytes
    data_length  4 bytes
    salt        16 bytes  reserved, always 0
"""

import struct

import numpy as np

from ..models.codec_models import MAX_U32, SALT_SIZE, FrameHeader
from .addressing import PixelCursor
from .bit_packing import PIXELS_PER_BYTE, read_bytes, write_bytes
from .errors import CapacityError


HEADER_FMT = f">BII{SALT_SIZE}s"
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # 25 bytes
HEADER_PIXELS = HEADER_SIZE * PIXELS_PER_BYTE
FLAGS_NONE = 0


def _check_length(field: str, value: int) -> None:
    if value < 0 or value > MAX_U32:
        raise CapacityError(value, MAX_U32, f"{field} does not fit in 32 bits: {value}")


def build_header(name_length: int, data_length: int) -> bytes:
    """
    Serialize a frame header

    Args:
        name_length: Length of the UTF-8 encoded name
        data_length: Length of the file data

    Returns:
        HEADER_SIZE bytes

    Raises:
        CapacityError: If either length does not fit in 32 bits
    """
    _check_length("name_length", name_length)
    _check_length("data_length", data_length)
    return struct.pack(HEADER_FMT, FLAGS_NONE, name_length, data_length, bytes(SALT_SIZE))


def parse_header(raw: bytes) -> FrameHeader:
    """
    Deserialize a frame header

    Raises:
        ValueError: If raw is not exactly HEADER_SIZE bytes
    """
    if len(raw) != HEADER_SIZE:
        raise ValueError(f"Frame header must be {HEADER_SIZE} bytes, got {len(raw)}")
    flags, name_length, data_length, salt = struct.unpack(HEADER_FMT, raw)
    return FrameHeader(flags=flags, name_length=name_length, data_length=data_length, salt=salt)


def write_header(pixels: np.ndarray, cursor: PixelCursor, name_length: int, data_length: int) -> None:
    write_bytes(pixels, cursor, build_header(name_length, data_length))


def read_header(pixels: np.ndarray, cursor: PixelCursor) -> FrameHeader:
    return parse_header(read_bytes(pixels, cursor, HEADER_SIZE))
