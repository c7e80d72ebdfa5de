"""
File encoder/decoder over an RGBA pixel buffer
"""

import logging
from typing import Callable, Optional

import numpy as np

from ..models.codec_models import CodecEvent, CodecOptions, FilePayload
from ..utils.validation import validate_pixel_buffer
from .addressing import PixelCursor
from .bit_packing import read_bytes, write_bytes
from .capacity import ensure_fits, required_pixels
from .errors import BoundsError, EncodingError
from .header import read_header, write_header


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[CodecEvent], None]


def _notify(on_progress: Optional[ProgressCallback], event: CodecEvent) -> None:
    logger.debug(f"Codec event: {event.value}")
    if on_progress is not None:
        on_progress(event)


def encode_payload(
    pixels: np.ndarray,
    payload: FilePayload,
    options: Optional[CodecOptions] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> None:
    """
    Embed a file into a pixel buffer in place

    Writes the header, then the name, then the data as one continuous
    bitstream starting at pixel 0.

    Args:
        pixels: (height, width, 4) uint8 buffer, modified in place
        payload: File name and data
        options: Capacity options
        on_progress: Optional callback receiving CodecEvent values

    Raises:
        CapacityError: If the payload does not fit. The buffer is untouched.
    """
    validate_pixel_buffer(pixels)
    height, width = pixels.shape[:2]
    name = payload.name_bytes
    data = payload.data

    ensure_fits(width, height, len(name), len(data), options)

    _notify(on_progress, CodecEvent.ENCODING_STARTED)
    cursor = PixelCursor()

    write_header(pixels, cursor, len(name), len(data))
    _notify(on_progress, CodecEvent.HEADER_ENCODED)

    write_bytes(pixels, cursor, name)
    write_bytes(pixels, cursor, data)
    _notify(on_progress, CodecEvent.DATA_ENCODED)


def decode_payload(pixels: np.ndarray, on_progress: Optional[ProgressCallback] = None) -> FilePayload:
    """
    Recover an embedded file from a pixel buffer

    The header is trusted as-is; there is no magic number or checksum.

    Args:
        pixels: (height, width, 4) uint8 buffer
        on_progress: Optional callback receiving CodecEvent values

    Returns:
        FilePayload with the recovered name and data

    Raises:
        BoundsError: If the header declares more bytes than the image holds
        EncodingError: If the recovered name is not valid UTF-8
    """
    validate_pixel_buffer(pixels)
    height, width = pixels.shape[:2]

    _notify(on_progress, CodecEvent.DECODING_STARTED)
    cursor = PixelCursor()

    header = read_header(pixels, cursor)
    _notify(on_progress, CodecEvent.HEADER_DECODED)

    needed = required_pixels(header.name_length, header.data_length)
    if needed > width * height:
        raise BoundsError(
            needed - 1,
            width,
            height,
            f"Header declares {header.name_length} name bytes and {header.data_length} data bytes, "
            f"which need {needed} pixels; image has {width * height}",
        )

    name_bytes = read_bytes(pixels, cursor, header.name_length)
    try:
        name = name_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Embedded file name is not valid UTF-8: {exc}") from exc

    data = read_bytes(pixels, cursor, header.data_length)

    _notify(on_progress, CodecEvent.DATA_DECODED)
    return FilePayload(name=name, data=data)
