"""Review submission and listing backed by the MongoDB 'reviews' collection."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from src.config import (
    MAX_RATING,
    MIN_RATING,
    MONGO_CONFIG,
    NAME_MAX_LENGTH,
    REVIEW_MAX_LENGTH,
    REVIEWS_ONLY_APPROVED,
)
from src.db.mongodb_client import MongoDBClient, mongo_client
from src.exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required"
RATING_OUT_OF_RANGE = "Rating must be between 1 and 5"
NAME_TOO_LONG = f"Name must be at most {NAME_MAX_LENGTH} characters"
REVIEW_TOO_LONG = f"Review must be at most {REVIEW_MAX_LENGTH} characters"


def _parse_rating(value: Any) -> int | None:
    """Return the rating as an int, or None if it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_review(name: Any, rating: Any, review: Any) -> dict[str, Any]:
    """
    Check a submitted review and normalize its fields.

    Checks run in order and stop at the first failure.

    Returns:
        Dict with trimmed name/review and integer rating

    Raises:
        ValidationError: with a message suitable for the client
    """
    if not name or not rating or not review:
        raise ValidationError(ALL_FIELDS_REQUIRED)
    if not isinstance(name, str) or not isinstance(review, str):
        raise ValidationError(ALL_FIELDS_REQUIRED)

    name = name.strip()
    review = review.strip()
    if not name or not review:
        raise ValidationError(ALL_FIELDS_REQUIRED)

    parsed_rating = _parse_rating(rating)
    if parsed_rating is None or not MIN_RATING <= parsed_rating <= MAX_RATING:
        raise ValidationError(RATING_OUT_OF_RANGE)

    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(NAME_TOO_LONG)
    if len(review) > REVIEW_MAX_LENGTH:
        raise ValidationError(REVIEW_TOO_LONG)

    return {"name": name, "rating": parsed_rating, "review": review}


class ReviewService:
    def __init__(
        self,
        store: MongoDBClient,
        collection_name: str = MONGO_CONFIG["collection"],
        only_approved: bool = REVIEWS_ONLY_APPROVED,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.collection_name = collection_name
        self.only_approved = only_approved
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def collection(self):
        return self.store.get_collection(self.collection_name)

    def submit_review(self, name: Any, rating: Any, review: Any) -> dict[str, Any]:
        """
        Validate and store a new review.

        Args:
            name: Reviewer name
            rating: Rating from 1 to 5
            review: Review text

        Returns:
            Dict with a confirmation message

        Raises:
            ValidationError: if the input is rejected (nothing is written)
            PersistenceError: if the store write fails
        """
        document = validate_review(name, rating, review)
        document["date"] = self.clock()
        document["approved"] = True

        try:
            self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Error submitting review: {e}")
            raise PersistenceError("Error submitting review") from e

        return {"message": "Review submitted successfully"}

    def list_reviews(self) -> list[dict[str, Any]]:
        """Return all reviews, newest first, without version metadata."""
        query = {"approved": True} if self.only_approved else {}
        try:
            cursor = self.collection.find(query, {"__v": 0}).sort("date", DESCENDING)
            return list(cursor)
        except PyMongoError as e:
            logger.error(f"Error fetching reviews: {e}")
            raise PersistenceError("Error fetching reviews") from e


# Singleton instance
review_service = ReviewService(mongo_client)
