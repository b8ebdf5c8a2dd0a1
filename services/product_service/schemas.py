from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Product(BaseModel):
    """Product as exchanged with API callers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: int
    name: str
    weight: int
    version: Optional[int] = None
    service_address: Optional[str] = None


class ProductPage(BaseModel):
    """One page of products."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[Product]
    page: int
    size: int
    has_next: bool


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
