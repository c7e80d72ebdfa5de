"""
API response models for the Image File Codec Service
"""

from pydantic import BaseModel
from typing import Any, Dict, Optional


class CodecAPIResult(BaseModel):
    """
    Standard API response model for codec endpoints
    """
    success: bool
    message: str
    path: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """
    Standard error response model
    """
    success: bool = False
    error: str
    details: Optional[Dict[str, Any]] = None
