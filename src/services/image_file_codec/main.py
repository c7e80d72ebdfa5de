"""
Main entry point for the Image File Codec Service

This file provides the router that is included in the main FastAPI application.
"""

from .api.routes import router

# Export the router for easy inclusion in main app
__all__ = ["router"]
