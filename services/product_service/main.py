"""
product_service/main.py - Product Microservice

PURPOSE:
    Owns the product store. Exposes create/read/update/delete for products
    keyed by productId, with optimistic locking on updates and a synthetic
    fault/latency hook on reads so upstream callers can test their timeouts
    and retries.

API ENDPOINTS:
    POST   /product                  - Create product (200, 422 on bad id or duplicate)
    GET    /product                  - Page through products (?page=0&size=20)
    GET    /product/{product_id}     - Get product (?delay=<seconds>&faultPercent=<0-100>)
    PUT    /product                  - Update product with its last-read version (409 if stale)
    DELETE /product/{product_id}     - Delete product (always 200)
    GET    /health                   - Health check

FAULT INJECTION:
    faultPercent=N makes a read of an existing product fail with 500 when a
    random draw r in [1, 100] satisfies N >= r. delay=S suspends the read of an
    existing product for S seconds without holding a database connection.

DATABASE:
    - Table: products
      Columns: id, product_id (unique), name, weight, version, created_at, updated_at

USAGE:
    Runs on port 7001 (PRODUCT_SERVICE_PORT)
    Access: http://localhost:7001/product/...
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query  # Web framework
from sqlalchemy.orm import Session  # Database session management

from shared.config import ServiceSettings  # Configuration management
from shared.database import build_engine, build_session_factory, session_dependency
from shared.exception_handlers import register_exception_handlers
from shared.fault_injection import FaultInjector
from shared.logging_config import setup_logging  # Centralized logging
from shared.service_util import ServiceUtil

from .repository import ProductRepository
from .schemas import HealthResponse, Product, ProductPage
from .service import ProductService

SERVICE_NAME = "product-service"
SERVICE_VERSION = "1.0.0"


class Settings(ServiceSettings):
    """Application settings."""

    product_service_port: int = int(os.getenv("PRODUCT_SERVICE_PORT", "7001"))


settings = Settings()

# Setup logging
setup_logging(SERVICE_NAME, level=settings.log_level)
logger = logging.getLogger(__name__)

# Database setup
engine = build_engine(settings.get_database_url())
SessionLocal = build_session_factory(engine)
get_db = session_dependency(SessionLocal)

# Global instances
service_util = ServiceUtil(settings.product_service_port)
fault_injector = FaultInjector()


def init_db():
    """Initialize database tables."""
    from .models import Base

    logger.info("Initializing database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized")


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Build the CRUD service for one request."""
    return ProductService(ProductRepository(db), service_util, fault_injector)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Product Service...")

    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    yield

    logger.info("Shutting down Product Service...")
    engine.dispose()


app = FastAPI(title="Product Service", version=SERVICE_VERSION, lifespan=lifespan)
register_exception_handlers(app)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@app.post("/product", response_model=Product)
def create_product(body: Product, service: ProductService = Depends(get_product_service)):
    """Create a new product."""
    return service.create_product(body)


@app.get("/product", response_model=ProductPage)
def list_products(
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=100),
    service: ProductService = Depends(get_product_service),
):
    """List products ordered by productId."""
    return service.list_products(page, size)


@app.get("/product/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    delay: int = Query(0, ge=0),
    fault_percent: int = Query(0, ge=0, le=100, alias="faultPercent"),
    service: ProductService = Depends(get_product_service),
):
    """Get product details."""
    return await service.get_product(product_id, delay, fault_percent)


@app.put("/product", response_model=Product)
def update_product(body: Product, service: ProductService = Depends(get_product_service)):
    """Update a product; body.version must be the last version read."""
    return service.update_product(body)


@app.delete("/product/{product_id}")
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Delete a product, succeeds whether or not it exists."""
    service.delete_product(product_id)
    return {"message": f"Product {product_id} deleted"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.product_service_port)
