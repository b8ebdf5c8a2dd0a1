from typing import List, Optional, Tuple

from shared.persistence import VersionedRepository

from .models import ProductEntity


class ProductRepository(VersionedRepository):
    """Repository for products, one row per productId."""

    model = ProductEntity
    mutable_fields = ("name", "weight")

    def find_by_product_id(self, product_id: int) -> Optional[ProductEntity]:
        """Get product by productId."""
        return self._first(ProductEntity.product_id == product_id)

    def find_page(self, page: int, size: int) -> Tuple[List[ProductEntity], bool]:
        """
        Return one page of products ordered by productId and whether another
        page follows it.
        """
        rows = (
            self.db.query(ProductEntity)
            .order_by(ProductEntity.product_id)
            .offset(page * size)
            .limit(size + 1)
            .all()
        )
        return rows[:size], len(rows) > size
