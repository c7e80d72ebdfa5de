from __future__ import annotations

import math
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


MAX_U32 = 2**32 - 1
SALT_SIZE = 16


class CodecEvent(str, Enum):
    ENCODING_STARTED = "encoding_started"
    HEADER_ENCODED = "header_encoded"
    DATA_ENCODED = "data_encoded"
    DECODING_STARTED = "decoding_started"
    HEADER_DECODED = "header_decoded"
    DATA_DECODED = "data_decoded"


class CodecOptions(BaseModel):
    reserve_pixels: int = Field(default=1000, ge=0, description="Pixels set aside for header and small-file overhead")
    max_utilization_percent: float = Field(default=99.9, gt=0, description="Encoding is refused above this utilization")
    legacy_capacity: bool = Field(default=False, description="Report capacity as raw pixels minus reserve, without halving")


class FrameHeader(BaseModel):
    flags: int = Field(default=0, ge=0, le=0xFF)
    name_length: int = Field(ge=0, le=MAX_U32)
    data_length: int = Field(ge=0, le=MAX_U32)
    salt: bytes = Field(default=bytes(SALT_SIZE), min_length=SALT_SIZE, max_length=SALT_SIZE)


class FilePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    data: bytes

    @property
    def name_bytes(self) -> bytes:
        return self.name.encode("utf-8")


class CapacityResult(BaseModel):
    width: int
    height: int
    capacity_bytes: int
    payload_bytes: int
    utilization_percent: float
    fits: bool

    @field_serializer("utilization_percent", when_used="json")
    def _finite_utilization(self, value: float):
        # inf when the image has no capacity at all
        return value if math.isfinite(value) else None


class HideFileResult(BaseModel):
    filename: str
    name_size_bytes: int
    data_size_bytes: int
    used_pixels: int
    capacity_bytes: int
    utilization_percent: float


class RevealFileResult(BaseModel):
    output_path: Path
    filename: str
    embedded_name: str
    size_bytes: int
    path: Optional[str] = None

