#!/usr/bin/env python3
"""
Reviews Backend Startup Script
This script starts the FastAPI server. Startup fails (non-zero exit) if
MongoDB cannot be reached after the configured retries.
"""

import logging

import uvicorn

from src.config import LOG_FORMAT, LOG_LEVEL, SERVER_CONFIG

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Starting Reviews Backend...")
    logger.info("Available endpoints:")
    logger.info("  - Health Check: GET /api/health")
    logger.info("  - Reviews: GET/POST /api/reviews")
    logger.info(f"Server running on port {SERVER_CONFIG['port']}")

    uvicorn.run(
        "src.main:app",
        host=SERVER_CONFIG["host"],
        port=SERVER_CONFIG["port"],
        log_level=LOG_LEVEL.lower(),
    )
