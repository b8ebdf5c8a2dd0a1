"""
Shared pytest fixtures for all tests.

Every test gets fresh in-memory SQLite stores, a service address provider
that does not depend on the machine's DNS, and TestClients whose database
dependency is overridden with the test session.
"""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from shared.database import build_engine, build_session_factory
from shared.fault_injection import FaultInjector
from shared.service_util import ServiceUtil


class FixedRandom:
    """Random source whose draws are always the same value."""

    def __init__(self, value: int):
        self.value = value
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        self.calls += 1
        assert a <= self.value <= b
        return self.value


class StubServiceUtil(ServiceUtil):
    def __init__(self, port: int = 7000):
        super().__init__(port, hostname="test-host")

    def _find_my_ip(self) -> str:
        return "127.0.0.1"


def _session_for(base) -> Iterator[Session]:
    engine = build_engine("sqlite://")
    base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _override_db(session: Session):
    def get_test_db() -> Iterator[Session]:
        yield session

    return get_test_db


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def product_db() -> Iterator[Session]:
    from services.product_service.models import Base

    yield from _session_for(Base)


@pytest.fixture
def recommendation_db() -> Iterator[Session]:
    from services.recommendation_service.models import Base

    yield from _session_for(Base)


@pytest.fixture
def review_db() -> Iterator[Session]:
    from services.review_service.models import Base

    yield from _session_for(Base)


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def service_util() -> ServiceUtil:
    return StubServiceUtil()


@pytest.fixture
def product_service(product_db, service_util):
    from services.product_service.repository import ProductRepository
    from services.product_service.service import ProductService

    return ProductService(ProductRepository(product_db), service_util, FaultInjector(FixedRandom(50)))


@pytest.fixture
def recommendation_service(recommendation_db, service_util):
    from services.recommendation_service.repository import RecommendationRepository
    from services.recommendation_service.service import RecommendationService

    return RecommendationService(RecommendationRepository(recommendation_db), service_util)


@pytest.fixture
def review_service(review_db, service_util):
    from services.review_service.repository import ReviewRepository
    from services.review_service.service import ReviewService

    return ReviewService(ReviewRepository(review_db), service_util)


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================


@pytest.fixture
def product_client(product_db, monkeypatch) -> Iterator[TestClient]:
    from services.product_service import main

    monkeypatch.setattr(main, "service_util", StubServiceUtil(7001))
    main.app.dependency_overrides[main.get_db] = _override_db(product_db)
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def recommendation_client(recommendation_db, monkeypatch) -> Iterator[TestClient]:
    from services.recommendation_service import main

    monkeypatch.setattr(main, "service_util", StubServiceUtil(7002))
    main.app.dependency_overrides[main.get_db] = _override_db(recommendation_db)
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def review_client(review_db, monkeypatch) -> Iterator[TestClient]:
    from services.review_service import main

    monkeypatch.setattr(main, "service_util", StubServiceUtil(7003))
    main.app.dependency_overrides[main.get_db] = _override_db(review_db)
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def fixed_random():
    """Factory for random sources that always draw the given value."""
    return FixedRandom
