from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Review(BaseModel):
    """Review as exchanged with API callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: int
    review_id: int
    author: str
    subject: str
    content: str
    version: Optional[int] = None
    service_address: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
