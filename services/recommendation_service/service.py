import logging
from typing import List

from shared.exceptions import InvalidInputError, NotFoundError, OptimisticLockError
from shared.persistence import DuplicateKeyError, StaleVersionError
from shared.service_util import ServiceUtil

from .models import RecommendationEntity
from .repository import RecommendationRepository
from .schemas import Recommendation

logger = logging.getLogger(__name__)


def api_to_entity(body: Recommendation) -> RecommendationEntity:
    return RecommendationEntity(
        product_id=body.product_id,
        recommendation_id=body.recommendation_id,
        author=body.author,
        rating=body.rating,
        content=body.content,
    )


def entity_to_api(entity: RecommendationEntity) -> Recommendation:
    return Recommendation(
        product_id=entity.product_id,
        recommendation_id=entity.recommendation_id,
        author=entity.author,
        rating=entity.rating,
        content=entity.content,
        version=entity.version,
    )


class RecommendationService:
    """CRUD operations on recommendations."""

    def __init__(self, repository: RecommendationRepository, service_util: ServiceUtil):
        self.repository = repository
        self.service_util = service_util

    def create_recommendation(self, body: Recommendation) -> Recommendation:
        self._validate_product_id(body.product_id)

        try:
            entity = self.repository.create(api_to_entity(body))
        except DuplicateKeyError:
            raise InvalidInputError(
                f"Duplicate key, Product Id: {body.product_id}, Recommendation Id: {body.recommendation_id}"
            )

        logger.debug(f"createRecommendation: created a recommendation entity: {body.product_id}/{body.recommendation_id}")
        return entity_to_api(entity)

    def get_recommendations(self, product_id: int) -> List[Recommendation]:
        """All recommendations of a product; an empty list is a valid answer."""
        self._validate_product_id(product_id)

        logger.info(f"Will get recommendations for product with id={product_id}", extra={"product_id": product_id})

        recommendations = [
            self._set_service_address(entity_to_api(entity))
            for entity in self.repository.find_by_product_id(product_id)
        ]

        logger.debug(f"getRecommendations: response size: {len(recommendations)}")
        return recommendations

    def update_recommendation(self, body: Recommendation) -> Recommendation:
        self._validate_product_id(body.product_id)
        if body.version is None:
            raise InvalidInputError(
                f"Missing version for Product Id: {body.product_id}, Recommendation Id: {body.recommendation_id}"
            )

        entity = self.repository.find_by_key(body.product_id, body.recommendation_id)
        if entity is None:
            raise NotFoundError(
                f"No recommendation found for productId: {body.product_id}, recommendationId: {body.recommendation_id}"
            )

        entity.author = body.author
        entity.rating = body.rating
        entity.content = body.content
        entity.version = body.version

        try:
            updated = self.repository.update(entity)
        except StaleVersionError:
            raise OptimisticLockError(
                f"Recommendation {body.product_id}/{body.recommendation_id} was modified concurrently, "
                f"version {body.version} is stale"
            )

        return self._set_service_address(entity_to_api(updated))

    def delete_recommendations(self, product_id: int) -> None:
        """Delete every recommendation of a product; nothing to delete is not an error."""
        self._validate_product_id(product_id)

        logger.debug(
            f"deleteRecommendations: tries to delete recommendations for the product with productId: {product_id}"
        )
        self.repository.delete_all(self.repository.find_by_product_id(product_id))

    def _validate_product_id(self, product_id: int) -> None:
        if product_id < 1:
            raise InvalidInputError(f"Invalid productId: {product_id}")

    def _set_service_address(self, recommendation: Recommendation) -> Recommendation:
        recommendation.service_address = self.service_util.get_service_address()
        return recommendation
