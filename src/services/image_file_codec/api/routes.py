"""
API routes for the Image File Codec Service
"""

import logging
import traceback
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from PIL import Image, UnidentifiedImageError

from src.utility.constants_manager import ConstantsManager

from ..core.errors import CapacityError, SteganographyError
from ..core.service import ImageCodecService
from ..models.codec_models import CapacityResult, RevealFileResult
from ..utils.image_utils import load_image_from_input, save_stego_image
from .responses import CodecAPIResult, ErrorResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/codec", tags=["codec"])

constants = ConstantsManager()


def get_service() -> ImageCodecService:
    return ImageCodecService(constants.get_codec_options())


def send_response(
    status_code: int,
    message: str,
    path: Optional[str] = None,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Helper function to send consistent API responses

    Args:
        status_code: HTTP status code
        message: Response message
        path: Optional file path
        details: Optional additional details

    Returns:
        JSONResponse with consistent format
    """
    return JSONResponse(
        status_code=status_code,
        content=CodecAPIResult(
            success=status_code < 400,
            message=message,
            path=path,
            details=details
        ).model_dump(mode="json")
    )


def send_error(status_code: int, error: Exception) -> JSONResponse:
    details = None
    if isinstance(error, CapacityError):
        details = {"required": error.required, "available": error.available}
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(error), details=details).model_dump(mode="json")
    )


async def read_image(file: Optional[UploadFile], url: Optional[str]) -> Image.Image:
    """
    Load the request image from an upload or a URL

    Raises:
        HTTPException: If neither is provided
    """
    if file is None and url is None:
        raise HTTPException(status_code=400, detail="Provide either file or url")
    if file is not None:
        return load_image_from_input(file=BytesIO(await file.read()))
    return load_image_from_input(url=url)


@router.post("/capacity", response_model=CapacityResult)
async def check_capacity(
    file: Optional[UploadFile] = File(default=None),
    url: Optional[str] = Form(default=None),
    payload_size: int = Form(0),
):
    """
    Check how much of an image a payload would use

    Args:
        file: The image file to check
        url: Alternative to file - image URL
        payload_size: Size in bytes of the file to hide

    Returns:
        CapacityResult with capacity information
    """
    try:
        image = await read_image(file, url)
        return get_service().capacity(image, payload_size)
    except HTTPException:
        raise
    except (ValueError, UnidentifiedImageError) as e:
        logger.warning(f"Invalid capacity request: {str(e)}")
        return send_error(400, e)
    except Exception as e:
        logger.error(f"Error calculating capacity: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/hide-file")
async def hide_file(
    secret: UploadFile = File(...),
    cover: Optional[UploadFile] = File(default=None),
    url: Optional[str] = Form(default=None),
):
    """
    Hide a file inside a cover image

    Args:
        secret: The file to hide
        cover: The cover image
        url: Alternative to cover - image URL

    Returns:
        CodecAPIResult with the saved image path
    """
    try:
        logger.info(f"Received hide-file request: cover={cover.filename if cover else url}, secret={secret.filename}")

        cover_image = await read_image(cover, url)
        secret_bytes = await secret.read()

        stego_image, result = get_service().hide_file(
            cover_image,
            secret.filename or "secret.bin",
            secret_bytes,
        )

        output_dir = Path(constants.get_output_dir())
        output_dir.mkdir(parents=True, exist_ok=True)
        output_filename = f"stego_file_{uuid.uuid4().hex}.png"
        save_stego_image(stego_image, output_dir / output_filename)

        return send_response(
            200,
            "File hidden successfully",
            path=f"files/{output_filename}",
            details=result.model_dump(mode="json"),
        )
    except HTTPException:
        raise
    except CapacityError as e:
        logger.warning(f"Payload does not fit: {str(e)}")
        return send_error(413, e)
    except (ValueError, UnidentifiedImageError) as e:
        logger.warning(f"Invalid hide-file request: {str(e)}")
        return send_error(400, e)
    except Exception as e:
        logger.error(f"Error in hide-file: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/reveal-file", response_model=RevealFileResult)
async def reveal_file(
    file: Optional[UploadFile] = File(default=None),
    url: Optional[str] = Form(default=None),
):
    """
    Reveal a file hidden in an image

    Args:
        file: The image with a hidden file
        url: Alternative to file - image URL

    Returns:
        RevealFileResult with the recovered file path
    """
    try:
        logger.info(f"Received reveal-file request: filename={file.filename if file else url}")

        image = await read_image(file, url)

        request_id = uuid.uuid4().hex
        out_dir = Path(constants.get_recovered_dir()) / request_id
        result = get_service().reveal_file(image, output_dir=out_dir)
        result.path = f"recovered/{request_id}/{result.filename}"
        return result
    except HTTPException:
        raise
    except SteganographyError as e:
        logger.warning(f"Could not decode embedded file: {str(e)}")
        return send_error(400, e)
    except (ValueError, UnidentifiedImageError) as e:
        logger.warning(f"Invalid reveal-file request: {str(e)}")
        return send_error(400, e)
    except Exception as e:
        logger.error(f"Error in reveal-file: {str(e)}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e))
