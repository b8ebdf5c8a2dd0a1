"""
events.py - Entity Event Schema Definitions

PURPOSE:
    Defines the event envelope the core services accept from whatever message
    consumer the surrounding infrastructure runs. Uses Pydantic for data
    validation and serialization.

EVENT TYPES:
    - CREATE: data holds the full entity body (camelCase API fields)
    - DELETE: key holds the productId whose entities are removed

COMMON FIELDS:
    - event_id: Unique identifier (UUID)
    - event_type: CREATE or DELETE
    - key: productId the event refers to
    - data: Entity body for CREATE, absent for DELETE
    - event_created_at: UTC timestamp of event creation

USAGE:
    Creating an event:
        event = Event(
            event_type=EventType.CREATE,
            key=1,
            data={"productId": 1, "name": "n", "weight": 1},
        )

    Deserializing from JSON (from raw JSON string):
        event = Event.model_validate_json(json_string)
"""

from datetime import datetime, timezone  # For event timestamps with timezone
from typing import Any, Dict, Optional  # Type hints
from uuid import uuid4  # For unique event IDs

from pydantic import BaseModel, Field  # Data validation and serialization


class EventType:
    """Supported values of Event.event_type."""

    CREATE = "CREATE"
    DELETE = "DELETE"


class Event(BaseModel):
    """Event carrying a create or delete request for one entity kind."""

    event_id: str = Field(default_factory=lambda: str(uuid4()))  # Auto-generated unique ID
    event_type: str  # CREATE or DELETE; other values are rejected by the processors
    key: int  # productId
    data: Optional[Dict[str, Any]] = None  # Entity body for CREATE
    event_created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
