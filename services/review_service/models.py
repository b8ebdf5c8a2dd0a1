from uuid import uuid4

from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ReviewEntity(Base):
    """Review model, many per product, with optimistic locking on version."""

    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("product_id", "review_id", name="uq_reviews_product_review"),)

    id = Column(Uuid, primary_key=True, default=uuid4)
    product_id = Column(Integer, nullable=False, index=True)
    review_id = Column(Integer, nullable=False)
    author = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    version = Column(Integer, default=0, nullable=False)  # Optimistic lock
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
