from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.services.image_file_codec import __version__
from src.services.image_file_codec.main import router as codec_router
from src.utility.constants_manager import ConstantsManager

constants = ConstantsManager()

# Configure logging
logging.basicConfig(level=constants.get_log_level())
logger = logging.getLogger(__name__)


app = FastAPI(title="img-fu", version=__version__)

# Ensure output directories exist
output_dir = constants.get_output_dir()
recovered_dir = constants.get_recovered_dir()
os.makedirs(output_dir, exist_ok=True)
os.makedirs(recovered_dir, exist_ok=True)

app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.mount("/files", StaticFiles(directory=output_dir), name="stego")
app.mount("/recovered", StaticFiles(directory=recovered_dir), name="recovered")

app.include_router(codec_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}
