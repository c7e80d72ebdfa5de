"""
Main service class for image file codec operations
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from ..models.codec_models import (
    CapacityResult,
    CodecOptions,
    FilePayload,
    HideFileResult,
    RevealFileResult,
)
from ..utils.image_utils import from_pixel_buffer, strip_directories, to_pixel_buffer
from ..utils.validation import validate_payload_size
from .capacity import estimate, required_pixels
from .codec import ProgressCallback, decode_payload, encode_payload


logger = logging.getLogger(__name__)

DEFAULT_RECOVERED_NAME = "recovered.bin"


class ImageCodecService:
    """
    Main service class for image file codec operations

    Wraps the pixel-level codec with Pillow images: capacity checks,
    hiding a file in a cover image and revealing it again.
    """

    def __init__(self, options: Optional[CodecOptions] = None):
        self.options = options or CodecOptions()

    def capacity(
        self,
        image: Image.Image,
        payload_size_bytes: int = 0,
        options: Optional[CodecOptions] = None
    ) -> CapacityResult:
        """
        Calculate capacity of an image for a payload

        Args:
            image: Input image
            payload_size_bytes: Size of the file to hide
            options: Overrides the service options

        Returns:
            CapacityResult with capacity and utilization
        """
        validate_payload_size(payload_size_bytes)
        width, height = image.size
        return estimate(width, height, payload_size_bytes, options or self.options)

    def hide_file(
        self,
        cover: Image.Image,
        filename: str,
        data: bytes,
        options: Optional[CodecOptions] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> Tuple[Image.Image, HideFileResult]:
        """
        Hide a file in an image

        Args:
            cover: Cover image, left unmodified
            filename: Name of the file to hide; directories are dropped
            data: File data to hide
            options: Overrides the service options
            on_progress: Optional progress callback

        Returns:
            Tuple of (stego_image, result_metadata)

        Raises:
            CapacityError: If the file does not fit
        """
        options = options or self.options
        name = strip_directories(filename)
        payload = FilePayload(name=name, data=data)

        pixels = to_pixel_buffer(cover)
        height, width = pixels.shape[:2]
        encode_payload(pixels, payload, options, on_progress)

        report = estimate(width, height, len(data), options)
        result = HideFileResult(
            filename=name,
            name_size_bytes=len(payload.name_bytes),
            data_size_bytes=len(data),
            used_pixels=required_pixels(len(payload.name_bytes), len(data)),
            capacity_bytes=report.capacity_bytes,
            utilization_percent=report.utilization_percent,
        )
        logger.info(f"Hid {name!r} ({len(data)} bytes) in {width}x{height} image, {result.utilization_percent:.1f}% used")

        return from_pixel_buffer(pixels), result

    def reveal_payload(
        self,
        stego_image: Image.Image,
        on_progress: Optional[ProgressCallback] = None
    ) -> FilePayload:
        """
        Recover the embedded file without writing it anywhere

        Raises:
            BoundsError: If the image does not hold the declared frame
            EncodingError: If the embedded name is not valid UTF-8
        """
        pixels = to_pixel_buffer(stego_image)
        payload = decode_payload(pixels, on_progress)
        logger.info(f"Revealed {payload.name!r} ({len(payload.data)} bytes)")
        return payload

    def reveal_file(
        self,
        stego_image: Image.Image,
        output_dir: Path,
        output_name: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None
    ) -> RevealFileResult:
        """
        Reveal the embedded file and save it

        Args:
            stego_image: Image with a hidden file
            output_dir: Directory to save the file in
            output_name: File name to use instead of the embedded one
            on_progress: Optional progress callback

        Returns:
            RevealFileResult with file information
        """
        payload = self.reveal_payload(stego_image, on_progress)

        output_dir.mkdir(parents=True, exist_ok=True)
        filename = strip_directories(output_name or payload.name)
        if filename in ("", ".", ".."):
            filename = DEFAULT_RECOVERED_NAME
        out_path = output_dir / filename
        out_path.write_bytes(payload.data)

        return RevealFileResult(
            output_path=out_path,
            filename=out_path.name,
            embedded_name=payload.name,
            size_bytes=len(payload.data),
        )
