"""
Capacity accounting for file embedding
"""

import math
import logging
from typing import Optional

from ..models.codec_models import CapacityResult, CodecOptions
from .bit_packing import PIXELS_PER_BYTE
from .errors import CapacityError
from .header import HEADER_SIZE


logger = logging.getLogger(__name__)


def capacity_bytes(width: int, height: int, options: Optional[CodecOptions] = None) -> int:
    """
    Number of payload bytes an image can take

    Args:
        width: Image width
        height: Image height
        options: Reserve and formula selection

    Returns:
        Capacity in bytes, never negative
    """
    options = options or CodecOptions()
    usable_pixels = width * height - options.reserve_pixels
    if not options.legacy_capacity:
        usable_pixels //= PIXELS_PER_BYTE
    return max(0, usable_pixels)


def utilization_percent(payload_bytes: int, capacity: int) -> float:
    if capacity <= 0:
        return math.inf
    return payload_bytes / capacity * 100


def required_pixels(name_length: int, data_length: int) -> int:
    """Pixels consumed by a full frame: header, name and data."""
    return (HEADER_SIZE + name_length + data_length) * PIXELS_PER_BYTE


def estimate(width: int, height: int, payload_bytes: int, options: Optional[CodecOptions] = None) -> CapacityResult:
    """
    Capacity and utilization of an image for a payload

    Args:
        width: Image width
        height: Image height
        payload_bytes: Size of the file data to embed
        options: Codec options

    Returns:
        CapacityResult with `fits` set against the refusal threshold
    """
    options = options or CodecOptions()
    capacity = capacity_bytes(width, height, options)
    used = utilization_percent(payload_bytes, capacity)
    return CapacityResult(
        width=width,
        height=height,
        capacity_bytes=capacity,
        payload_bytes=payload_bytes,
        utilization_percent=used,
        fits=used <= options.max_utilization_percent,
    )


def ensure_fits(width: int, height: int, name_length: int, data_length: int, options: Optional[CodecOptions] = None) -> CapacityResult:
    """
    Refuse a payload that would not fit, before anything is written

    Raises:
        CapacityError: If utilization exceeds the threshold or the frame needs
            more pixels than the image has
    """
    result = estimate(width, height, data_length, options)
    if not result.fits:
        logger.warning(f"Refusing payload: {data_length} bytes is {result.utilization_percent:.1f}% of {result.capacity_bytes}")
        raise CapacityError(data_length, result.capacity_bytes)

    needed = required_pixels(name_length, data_length)
    if needed > width * height:
        logger.warning(f"Refusing payload: frame needs {needed} pixels, image has {width * height}")
        raise CapacityError(needed, width * height, f"Frame needs {needed} pixels, image has {width * height}")

    return result
