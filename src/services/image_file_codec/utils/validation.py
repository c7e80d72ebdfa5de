"""
Validation utilities for codec operations
"""

import numpy as np

from ..core.bit_packing import CHANNELS_PER_PIXEL


def validate_pixel_buffer(pixels: np.ndarray) -> None:
    """
    Validate that a buffer can carry the bitstream

    Args:
        pixels: Candidate pixel buffer

    Raises:
        ValueError: If it is not a (height, width, 4) uint8 array
    """
    if not isinstance(pixels, np.ndarray):
        raise ValueError(f"Pixel buffer must be a numpy array, got {type(pixels).__name__}")

    if pixels.ndim != 3 or pixels.shape[2] != CHANNELS_PER_PIXEL:
        raise ValueError(f"Pixel buffer must have shape (height, width, {CHANNELS_PER_PIXEL}), got {pixels.shape}")

    if pixels.dtype != np.uint8:
        raise ValueError(f"Pixel buffer must be uint8, got {pixels.dtype}")


def validate_payload_size(payload_size: int) -> None:
    """
    Raises:
        ValueError: If payload_size is negative
    """
    if payload_size < 0:
        raise ValueError(f"Payload size cannot be negative: {payload_size}")
