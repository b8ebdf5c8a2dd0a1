from typing import Iterable, Optional

from sqlalchemy import and_

from shared.persistence import VersionedRepository

from .models import ReviewEntity


class ReviewRepository(VersionedRepository):
    """Repository for reviews keyed by (productId, reviewId)."""

    model = ReviewEntity
    mutable_fields = ("author", "subject", "content")

    def find_by_product_id(self, product_id: int) -> Iterable[ReviewEntity]:
        """All reviews of a product; the query runs each time it is iterated."""
        return self.db.query(ReviewEntity).filter(ReviewEntity.product_id == product_id)

    def find_by_key(self, product_id: int, review_id: int) -> Optional[ReviewEntity]:
        return self._first(and_(ReviewEntity.product_id == product_id, ReviewEntity.review_id == review_id))
