"""Configuration for the reviews backend, read from the environment."""

import os

from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


MONGO_CONFIG = {
    "uri": os.getenv("MONGODB_URI", "mongodb://localhost:27017/reviews"),
    "database": os.getenv("MONGO_DATABASE", "reviews"),
    "collection": os.getenv("MONGO_COLLECTION", "reviews"),
    "server_selection_timeout_ms": int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")),
}

# Startup connection retry policy
CONNECT_MAX_RETRIES = 3
CONNECT_RETRY_DELAY = 5  # seconds

SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "3000")),
}

DEFAULT_CORS_ORIGINS = [
    "https://gartinwifisolutions.com",
    "http://localhost:8080",
    "http://localhost:3000",
]
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", ",".join(DEFAULT_CORS_ORIGINS)).split(",") if origin.strip()
]
CORS_METHODS = ["GET", "POST", "PATCH"]

# Review constraints
NAME_MAX_LENGTH = 100
REVIEW_MAX_LENGTH = 1000
MIN_RATING = 1
MAX_RATING = 5

# When enabled, listing only returns reviews with approved=True
REVIEWS_ONLY_APPROVED = _get_bool("REVIEWS_ONLY_APPROVED", False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
