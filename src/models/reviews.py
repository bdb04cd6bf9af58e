"""
Pydantic models for the MongoDB 'reviews' collection.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewSubmission(BaseModel):
    """Untrusted POST body. Fields are checked by the review service, not here."""

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    rating: Any = None
    review: Any = None


class Review(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(None, alias="_id")
    name: str
    rating: int
    review: str
    date: datetime
    approved: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, value):
        return str(value) if value is not None else None
