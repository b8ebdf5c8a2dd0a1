"""
recommendation_service/main.py - Recommendation Microservice

PURPOSE:
    Owns the recommendation store. A product has any number of
    recommendations, each identified by (productId, recommendationId).

API ENDPOINTS:
    POST   /recommendation                - Create recommendation (422 on bad id or duplicate)
    GET    /recommendation/{product_id}   - All recommendations of a product (possibly empty)
    PUT    /recommendation                - Update with last-read version (409 if stale)
    DELETE /recommendation/{product_id}   - Delete all recommendations of a product (always 200)
    GET    /health                        - Health check

DATABASE:
    - Table: recommendations
      Columns: id, product_id, recommendation_id, author, rating, content,
               version, created_at, updated_at
      Unique: (product_id, recommendation_id)

USAGE:
    Runs on port 7002 (RECOMMENDATION_SERVICE_PORT)
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

from .repository import RecommendationRepository
from .schemas import HealthResponse, Recommendation
from .service import RecommendationService

SERVICE_NAME = "recommendation-service"
SERVICE_VERSION = "1.0.0"


class Settings(ServiceSettings):
    """Application settings."""

    recommendation_service_port: int = int(os.getenv("RECOMMENDATION_SERVICE_PORT", "7002"))


settings = Settings()

setup_logging(SERVICE_NAME, level=settings.log_level)
logger = logging.getLogger(__name__)

engine = build_engine(settings.get_database_url())
SessionLocal = build_session_factory(engine)
get_db = session_dependency(SessionLocal)

service_util = ServiceUtil(settings.recommendation_service_port)


def init_db():
    """Initialize database tables."""
    from .models import Base

    logger.info("Initializing database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized")


def get_recommendation_service(db: Session = Depends(get_db)) -> RecommendationService:
    return RecommendationService(RecommendationRepository(db), service_util)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Recommendation Service...")

    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    yield

    logger.info("Shutting down Recommendation Service...")
    engine.dispose()


app = FastAPI(title="Recommendation Service", version=SERVICE_VERSION, lifespan=lifespan)
register_exception_handlers(app)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@app.post("/recommendation", response_model=Recommendation)
def create_recommendation(
    body: Recommendation, service: RecommendationService = Depends(get_recommendation_service)
):
    return service.create_recommendation(body)


@app.get("/recommendation/{product_id}", response_model=List[Recommendation])
def get_recommendations(product_id: int, service: RecommendationService = Depends(get_recommendation_service)):
    return service.get_recommendations(product_id)


@app.put("/recommendation", response_model=Recommendation)
def update_recommendation(
    body: Recommendation, service: RecommendationService = Depends(get_recommendation_service)
):
    return service.update_recommendation(body)


@app.delete("/recommendation/{product_id}")
def delete_recommendations(product_id: int, service: RecommendationService = Depends(get_recommendation_service)):
    service.delete_recommendations(product_id)
    return {"message": f"Recommendations of product {product_id} deleted"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.recommendation_service_port)
