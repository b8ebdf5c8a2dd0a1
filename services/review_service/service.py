import logging
from typing import List

from shared.exceptions import InvalidInputError, NotFoundError, OptimisticLockError
from shared.persistence import DuplicateKeyError, StaleVersionError
from shared.service_util import ServiceUtil

from .models import ReviewEntity
from .repository import ReviewRepository
from .schemas import Review

logger = logging.getLogger(__name__)


def api_to_entity(body: Review) -> ReviewEntity:
    return ReviewEntity(
        product_id=body.product_id,
        review_id=body.review_id,
        author=body.author,
        subject=body.subject,
        content=body.content,
    )


def entity_to_api(entity: ReviewEntity) -> Review:
    return Review(
        product_id=entity.product_id,
        review_id=entity.review_id,
        author=entity.author,
        subject=entity.subject,
        content=entity.content,
        version=entity.version,
    )


class ReviewService:
    """CRUD operations on reviews."""

    def __init__(self, repository: ReviewRepository, service_util: ServiceUtil):
        self.repository = repository
        self.service_util = service_util

    def create_review(self, body: Review) -> Review:
        self._validate_product_id(body.product_id)

        try:
            entity = self.repository.create(api_to_entity(body))
        except DuplicateKeyError:
            raise InvalidInputError(f"Duplicate key, Product Id: {body.product_id}, Review Id: {body.review_id}")

        logger.debug(f"createReview: created a review entity: {body.product_id}/{body.review_id}")
        return entity_to_api(entity)

    def get_reviews(self, product_id: int) -> List[Review]:
        self._validate_product_id(product_id)

        reviews = [self._set_service_address(entity_to_api(e)) for e in self.repository.find_by_product_id(product_id)]

        logger.debug(f"getReviews: response size: {len(reviews)}")
        return reviews

    def update_review(self, body: Review) -> Review:
        self._validate_product_id(body.product_id)
        if body.version is None:
            raise InvalidInputError(f"Missing version for Product Id: {body.product_id}, Review Id: {body.review_id}")

        entity = self.repository.find_by_key(body.product_id, body.review_id)
        if entity is None:
            raise NotFoundError(f"No review found for productId: {body.product_id}, reviewId: {body.review_id}")

        entity.author = body.author
        entity.subject = body.subject
        entity.content = body.content
        entity.version = body.version

        try:
            updated = self.repository.update(entity)
        except StaleVersionError:
            raise OptimisticLockError(
                f"Review {body.product_id}/{body.review_id} was modified concurrently, version {body.version} is stale"
            )

        return self._set_service_address(entity_to_api(updated))

    def delete_reviews(self, product_id: int) -> None:
        self._validate_product_id(product_id)

        logger.debug(f"deleteReviews: tries to delete reviews for the product with productId: {product_id}")
        self.repository.delete_all(self.repository.find_by_product_id(product_id))

    def _validate_product_id(self, product_id: int) -> None:
        if product_id < 1:
            raise InvalidInputError(f"Invalid productId: {product_id}")

    def _set_service_address(self, review: Review) -> Review:
        review.service_address = self.service_util.get_service_address()
        return review
