import asyncio
import logging
from typing import Optional

from shared.exceptions import InvalidInputError, NotFoundError, OptimisticLockError
from shared.fault_injection import FaultInjector
from shared.persistence import DuplicateKeyError, StaleVersionError
from shared.service_util import ServiceUtil

from .models import ProductEntity
from .repository import ProductRepository
from .schemas import Product, ProductPage

logger = logging.getLogger(__name__)


def api_to_entity(body: Product) -> ProductEntity:
    """Map an API product to a new entity; id, version and serviceAddress are not copied."""
    return ProductEntity(product_id=body.product_id, name=body.name, weight=body.weight)


def entity_to_api(entity: ProductEntity) -> Product:
    return Product(
        product_id=entity.product_id,
        name=entity.name,
        weight=entity.weight,
        version=entity.version,
    )


class ProductService:
    """CRUD operations on products."""

    def __init__(
        self,
        repository: ProductRepository,
        service_util: ServiceUtil,
        fault_injector: Optional[FaultInjector] = None,
    ):
        self.repository = repository
        self.service_util = service_util
        self.fault_injector = fault_injector or FaultInjector()

    def create_product(self, body: Product) -> Product:
        """Create a product; a taken productId is reported as invalid input."""
        self._validate_product_id(body.product_id)

        try:
            entity = self.repository.create(api_to_entity(body))
        except DuplicateKeyError:
            raise InvalidInputError(f"Duplicate key, Product Id: {body.product_id}")

        logger.debug(f"createProduct: created a product entity: {body.product_id}")
        return entity_to_api(entity)

    async def get_product(self, product_id: int, delay: int = 0, fault_percent: int = 0) -> Product:
        """
        Get a product, optionally failing or stalling on purpose.

        Order: lookup, fault check (found products only), delay (found
        products only), not-found check, mapping. The store session is
        released before the delay so a slow read holds no connection.
        Store and address lookups block, so they run in a worker thread
        and other requests keep being served meanwhile.
        """
        self._validate_product_id(product_id)

        logger.info(f"Will get product info for id={product_id}", extra={"product_id": product_id})

        entity = await asyncio.to_thread(self._find_and_release, product_id)

        if entity is not None:
            entity = self.fault_injector.apply(entity, fault_percent)
            if delay > 0:
                logger.debug(f"Sleeping for {delay} seconds...")
                await asyncio.sleep(delay)

        if entity is None:
            raise NotFoundError(f"No product found for productId: {product_id}")

        return await asyncio.to_thread(self._set_service_address, entity_to_api(entity))

    def list_products(self, page: int = 0, size: int = 20) -> ProductPage:
        """Get one page of products ordered by productId."""
        entities, has_next = self.repository.find_page(page, size)
        items = [self._set_service_address(entity_to_api(e)) for e in entities]
        return ProductPage(items=items, page=page, size=size, has_next=has_next)

    def update_product(self, body: Product) -> Product:
        """Update name and weight if body.version is still the stored version."""
        self._validate_product_id(body.product_id)
        if body.version is None:
            raise InvalidInputError(f"Missing version for productId: {body.product_id}")

        entity = self.repository.find_by_product_id(body.product_id)
        if entity is None:
            raise NotFoundError(f"No product found for productId: {body.product_id}")

        entity.name = body.name
        entity.weight = body.weight
        entity.version = body.version

        try:
            updated = self.repository.update(entity)
        except StaleVersionError:
            raise OptimisticLockError(
                f"Product {body.product_id} was modified concurrently, version {body.version} is stale"
            )

        logger.debug(f"updateProduct: product {body.product_id} now at version {updated.version}")
        return self._set_service_address(entity_to_api(updated))

    def delete_product(self, product_id: int) -> None:
        """Delete a product; deleting a missing product succeeds."""
        self._validate_product_id(product_id)

        logger.debug(f"deleteProduct: tries to delete an entity with productId: {product_id}")
        entity = self.repository.find_by_product_id(product_id)
        if entity is not None:
            self.repository.delete(entity)

    def _find_and_release(self, product_id: int) -> Optional[ProductEntity]:
        entity = self.repository.find_by_product_id(product_id)
        self.repository.release()
        return entity

    def _validate_product_id(self, product_id: int) -> None:
        if product_id < 1:
            raise InvalidInputError(f"Invalid productId: {product_id}")

    def _set_service_address(self, product: Product) -> Product:
        product.service_address = self.service_util.get_service_address()
        return product
