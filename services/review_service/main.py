"""
review_service/main.py - Review Microservice

PURPOSE:
    Owns the review store. A product has any number of reviews, each
    identified by (productId, reviewId).

API ENDPOINTS:
    POST   /review                - Create review (422 on bad id or duplicate)
    GET    /review/{product_id}   - All reviews of a product (possibly empty)
    PUT    /review                - Update with last-read version (409 if stale)
    DELETE /review/{product_id}   - Delete all reviews of a product (always 200)
    GET    /health                - Health check

DATABASE:
    - Table: reviews
      Columns: id, product_id, review_id, author, subject, content,
               version, created_at, updated_at
      Unique: (product_id, review_id)

USAGE:
    Runs on port 7003 (REVIEW_SERVICE_PORT)
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI
from sqlalchemy.orm import Session

from shared.config import ServiceSettings
from shared.database import build_engine, build_session_factory, session_dependency
from shared.exception_handlers import register_exception_handlers
from shared.logging_config import setup_logging
from shared.service_util import ServiceUtil

from .repository import ReviewRepository
from .schemas import HealthResponse, Review
from .service import ReviewService

SERVICE_NAME = "review-service"
SERVICE_VERSION = "1.0.0"


class Settings(ServiceSettings):
    """Application settings."""

    review_service_port: int = int(os.getenv("REVIEW_SERVICE_PORT", "7003"))


settings = Settings()

setup_logging(SERVICE_NAME, level=settings.log_level)
logger = logging.getLogger(__name__)

engine = build_engine(settings.get_database_url())
SessionLocal = build_session_factory(engine)
get_db = session_dependency(SessionLocal)

service_util = ServiceUtil(settings.review_service_port)


def init_db():
    """Initialize database tables."""
    from .models import Base

    logger.info(f"Initializing database at {engine.url.render_as_string(hide_password=True)}...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized")


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(ReviewRepository(db), service_util)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Review Service...")

    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    yield

    logger.info("Shutting down Review Service...")
    engine.dispose()


app = FastAPI(title="Review Service", version=SERVICE_VERSION, lifespan=lifespan)
register_exception_handlers(app)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@app.post("/review", response_model=Review)
def create_review(body: Review, service: ReviewService = Depends(get_review_service)):
    return service.create_review(body)


@app.get("/review/{product_id}", response_model=List[Review])
def get_reviews(product_id: int, service: ReviewService = Depends(get_review_service)):
    return service.get_reviews(product_id)


@app.put("/review", response_model=Review)
def update_review(body: Review, service: ReviewService = Depends(get_review_service)):
    return service.update_review(body)


@app.delete("/review/{product_id}")
def delete_reviews(product_id: int, service: ReviewService = Depends(get_review_service)):
    service.delete_reviews(product_id)
    return {"message": f"Reviews of product {product_id} deleted"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.review_service_port)
