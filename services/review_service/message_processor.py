"""
Event handling for the review store.

process_message is the entry point for an external consumer: it takes an
already-decoded Event from the reviews topic and applies it through the
service, so events and HTTP calls share validation and error translation.
"""

import logging

from shared.events import Event, EventType
from shared.exceptions import EventProcessingError

from .schemas import Review
from .service import ReviewService

logger = logging.getLogger(__name__)


def process_message(service: ReviewService, event: Event) -> None:
    """Apply a CREATE or DELETE event to the review store."""
    logger.info(f"Process message created at {event.event_created_at}...")

    if event.event_type == EventType.CREATE:
        review = Review.model_validate(event.data or {})
        logger.info(f"Create review with ID: {review.product_id}/{review.review_id}")
        service.create_review(review)

    elif event.event_type == EventType.DELETE:
        logger.info(f"Delete reviews with ProductID: {event.key}")
        service.delete_reviews(event.key)

    else:
        error_message = f"Incorrect event type: {event.event_type}, expected a CREATE or DELETE event"
        logger.warning(error_message)
        raise EventProcessingError(error_message)

    logger.info("Message processing done!")
