"""
Append-only resource reviews in local storage
"""
import uuid
from typing import List

from pydantic import ValidationError

from ..errors import StorageError
from ..models.resources import Review, ReviewCreateRequest
from ..storage.keys import reviews_key
from ..storage.local import LocalStorage
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class ReviewService:
    """Reviews bucketed per resource; no edit or delete"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def list_reviews(self, resource_id: str) -> List[Review]:
        """
        Reviews for a resource, oldest first

        Corrupt stored data is logged and treated as no reviews.
        """
        try:
            raw = self.storage.get_json(reviews_key(resource_id), [])
            return [Review.model_validate(item) for item in raw]
        except (StorageError, ValidationError, TypeError) as e:
            logger.error(f"Failed to load reviews for resource {resource_id}: {e}")
            return []

    def add_review(self, resource_id: str, user_name: str, rating: int, comment: str) -> Review:
        """
        Append a review

        Args:
            resource_id: Reviewed resource
            user_name: Display name, non-blank
            rating: 1 to 5
            comment: Non-blank text

        Returns:
            Review: The stored review

        Raises:
            ValidationError: On invalid name, rating or comment
            StorageError: If the review could not be written
        """
        request = ReviewCreateRequest(user_name=user_name, rating=rating, comment=comment)
        review = Review(
            id=str(uuid.uuid4()),
            resource_id=resource_id,
            user_name=request.user_name,
            rating=request.rating,
            comment=request.comment,
        )

        reviews = self.list_reviews(resource_id)
        reviews.append(review)
        self.storage.set_json(
            reviews_key(resource_id),
            [r.model_dump(by_alias=True, mode="json") for r in reviews],
        )

        logger.info(f"Added review {review.id} for resource {resource_id}")
        return review
