"""FastAPI application for the reviews backend."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import CORS_METHODS, CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL
from src.db.mongodb_client import mongo_client
from src.exceptions import PersistenceError, StoreUnavailable, ValidationError
from src.models import Review, ReviewSubmission
from src.services.review_service import review_service

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        mongo_client.connect()
    except StoreUnavailable as e:
        logger.critical(f"Fatal MongoDB connection error: {e}")
        raise
    yield
    mongo_client.close()


# Create FastAPI app
app = FastAPI(
    title="Reviews API",
    description="Public review collection service",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=CORS_METHODS,
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=SECURITY_HEADERS)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(400, "Invalid request body")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {exc}")
    return _error_response(500, "Internal server error")


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# Review Endpoints
@app.get("/api/reviews", response_model=list[Review])
def list_reviews():
    """List all reviews, newest first."""
    try:
        return review_service.list_reviews()
    except PersistenceError:
        return _error_response(500, "Error fetching reviews")


@app.post("/api/reviews", status_code=201)
def submit_review(submission: ReviewSubmission | None = None):
    """Submit a new review."""
    submission = submission or ReviewSubmission()
    try:
        return review_service.submit_review(submission.name, submission.rating, submission.review)
    except ValidationError as e:
        return _error_response(400, str(e))
    except PersistenceError:
        return _error_response(500, "Error submitting review")
