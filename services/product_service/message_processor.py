"""
Event handling for the product store.

process_message is the entry point for an external consumer: it takes an
already-decoded Event from the products topic and applies it through the
service, so events and HTTP calls share validation and error translation.
"""

import logging

from shared.events import Event, EventType
from shared.exceptions import EventProcessingError

from .schemas import Product
from .service import ProductService

logger = logging.getLogger(__name__)


def process_message(service: ProductService, event: Event) -> None:
    """Apply a CREATE or DELETE event to the product store."""
    logger.info(f"Process message created at {event.event_created_at}...")

    if event.event_type == EventType.CREATE:
        product = Product.model_validate(event.data or {})
        logger.info(f"Create product with ID: {product.product_id}")
        service.create_product(product)

    elif event.event_type == EventType.DELETE:
        logger.info(f"Delete product with ProductID: {event.key}")
        service.delete_product(event.key)

    else:
        error_message = f"Incorrect event type: {event.event_type}, expected a CREATE or DELETE event"
        logger.warning(error_message)
        raise EventProcessingError(error_message)

    logger.info("Message processing done!")
