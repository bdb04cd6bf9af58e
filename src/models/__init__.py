"""
Init file for the review models.
"""

from .reviews import Review, ReviewSubmission

__all__ = [
    "Review",
    "ReviewSubmission",
]
