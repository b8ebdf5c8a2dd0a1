from typing import Iterable, Optional

from sqlalchemy import and_

from shared.persistence import VersionedRepository

from .models import RecommendationEntity


class RecommendationRepository(VersionedRepository):
    """Repository for recommendations keyed by (productId, recommendationId)."""

    model = RecommendationEntity
    mutable_fields = ("author", "rating", "content")

    def find_by_product_id(self, product_id: int) -> Iterable[RecommendationEntity]:
        """All recommendations of a product; the query runs each time it is iterated."""
        return self.db.query(RecommendationEntity).filter(RecommendationEntity.product_id == product_id)

    def find_by_key(self, product_id: int, recommendation_id: int) -> Optional[RecommendationEntity]:
        return self._first(
            and_(
                RecommendationEntity.product_id == product_id,
                RecommendationEntity.recommendation_id == recommendation_id,
            )
        )
