"""
Image utility functions for codec operations
"""

import re
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Union

import httpx
import numpy as np
from PIL import Image


# Re-encoding with these formats destroys least significant bits
LOSSY_EXTENSIONS = {".jpg", ".jpeg", ".jpe", ".webp", ".gif"}


def load_image_from_input(file: Optional[Union[str, Path, BinaryIO]] = None, url: Optional[str] = None) -> Image.Image:
    """
    Load an image from either a path/file object or URL

    Args:
        file: Path or file object containing image data
        url: URL to fetch image from

    Returns:
        PIL Image object

    Raises:
        ValueError: If neither file nor url is provided
    """
    if file is not None:
        return Image.open(file)
    if url is not None:
        with httpx.Client(timeout=30) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return Image.open(BytesIO(resp.content))
    raise ValueError("Provide file or url")


def to_pixel_buffer(image: Image.Image) -> np.ndarray:
    """
    Convert an image to a writable RGBA pixel buffer

    Args:
        image: Input PIL Image in any mode

    Returns:
        (height, width, 4) uint8 array, independent of the image
    """
    rgba = image.convert("RGBA") if image.mode != "RGBA" else image
    return np.array(rgba, dtype=np.uint8)


def from_pixel_buffer(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(pixels)


def ensure_lossless_path(path: Union[str, Path]) -> Path:
    """
    Raises:
        ValueError: If the extension names a lossy or palette format
    """
    path = Path(path)
    if path.suffix.lower() in LOSSY_EXTENSIONS:
        raise ValueError(f"Refusing to save to lossy format {path.suffix!r}; use PNG, BMP or TIFF")
    return path


def save_stego_image(image: Image.Image, path: Union[str, Path]) -> Path:
    """
    Save an image in a lossless format

    Args:
        image: Image carrying embedded data
        path: Destination; the extension picks the format

    Returns:
        The destination path

    Raises:
        ValueError: If the extension names a lossy or palette format
    """
    path = ensure_lossless_path(path)
    image.save(path)
    return path


def strip_directories(name: str) -> str:
    """
    Keep only the final component of a path, for either separator style

    Args:
        name: File name, possibly with directories

    Returns:
        Base name ("" if nothing is left)
    """
    return re.split(r"[\\/]", name)[-1]
