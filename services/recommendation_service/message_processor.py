"""
Event handling for the recommendation store.

process_message is the entry point for an external consumer: it takes an
already-decoded Event from the recommendations topic and applies it through the
service, so events and HTTP calls share validation and error translation.
"""

import logging

from shared.events import Event, EventType
from shared.exceptions import EventProcessingError

from .schemas import Recommendation
from .service import RecommendationService

logger = logging.getLogger(__name__)


def process_message(service: RecommendationService, event: Event) -> None:
    """Apply a CREATE or DELETE event to the recommendation store."""
    logger.info(f"Process message created at {event.event_created_at}...")

    if event.event_type == EventType.CREATE:
        recommendation = Recommendation.model_validate(event.data or {})
        logger.info(
            f"Create recommendation with ID: {recommendation.product_id}/{recommendation.recommendation_id}"
        )
        service.create_recommendation(recommendation)

    elif event.event_type == EventType.DELETE:
        logger.info(f"Delete recommendations with ProductID: {event.key}")
        service.delete_recommendations(event.key)

    else:
        error_message = f"Incorrect event type: {event.event_type}, expected a CREATE or DELETE event"
        logger.warning(error_message)
        raise EventProcessingError(error_message)

    logger.info("Message processing done!")
