from uuid import uuid4

from sqlalchemy import Column, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ProductEntity(Base):
    """Product model with optimistic locking on version."""

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid4)
    product_id = Column(Integer, unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    weight = Column(Integer, nullable=False)
    version = Column(Integer, default=0, nullable=False)  # Optimistic lock
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
