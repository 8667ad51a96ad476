"""
HTTP entry point exposing the surgical edit operations.
"""

import logging

from fastapi import FastAPI

from src.api.routers import router as api_router
from src.config.settings import settings

# Create FastAPI app
app = FastAPI(title="Surgical FS API")
app.include_router(api_router)

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Get logger for this module
logger = logging.getLogger(__name__)
logger.info(f"Allowed directories: {', '.join(settings.allowed_directories)}")
