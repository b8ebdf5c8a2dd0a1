"""Persistence and service tests for recommendations."""

import pytest

from shared.database import build_session_factory
from shared.exceptions import InvalidInputError, NotFoundError, OptimisticLockError
from shared.persistence import DuplicateKeyError, StaleVersionError
from services.recommendation_service.models import RecommendationEntity
from services.recommendation_service.repository import RecommendationRepository
from services.recommendation_service.schemas import Recommendation


@pytest.fixture
def repository(recommendation_db):
    return RecommendationRepository(recommendation_db)


@pytest.fixture
def saved_entity(repository):
    return repository.create(
        RecommendationEntity(product_id=1, recommendation_id=2, author="a", rating=3, content="c")
    )


def make_recommendation(product_id: int = 1, recommendation_id: int = 2, **fields) -> Recommendation:
    values = {"author": "a", "rating": 3, "content": "c"}
    values.update(fields)
    return Recommendation(product_id=product_id, recommendation_id=recommendation_id, **values)


class TestRecommendationRepository:
    def test_create(self, repository, saved_entity):
        new_entity = repository.create(
            RecommendationEntity(product_id=1, recommendation_id=3, author="a", rating=3, content="c")
        )

        found = repository.find_by_id(new_entity.id)
        assert found.recommendation_id == 3
        assert found.version == 0
        assert repository.count() == 2

    def test_update(self, repository, saved_entity):
        saved_entity.author = "a2"
        repository.update(saved_entity)

        found = repository.find_by_id(saved_entity.id)
        assert found.author == "a2"
        assert found.version == 1

    def test_delete(self, repository, saved_entity):
        repository.delete(saved_entity)
        assert repository.find_by_id(saved_entity.id) is None

    def test_get_by_product_id(self, repository, saved_entity):
        entities = repository.find_by_product_id(saved_entity.product_id)

        assert len(list(entities)) == 1
        # The result can be iterated again
        assert [e.recommendation_id for e in entities] == [2]

    def test_duplicate_error(self, repository, saved_entity):
        with pytest.raises(DuplicateKeyError):
            repository.create(
                RecommendationEntity(product_id=1, recommendation_id=2, author="a", rating=3, content="c")
            )

    def test_optimistic_lock_error(self, recommendation_db, saved_entity):
        other_session = build_session_factory(recommendation_db.get_bind())()
        repository1 = RecommendationRepository(recommendation_db)
        repository2 = RecommendationRepository(other_session)

        entity1 = repository1.find_by_id(saved_entity.id)
        entity2 = repository2.find_by_id(saved_entity.id)

        entity1.author = "a1"
        repository1.update(entity1)

        entity2.author = "a2"
        with pytest.raises(StaleVersionError):
            repository2.update(entity2)

        updated = repository1.find_by_id(saved_entity.id)
        assert updated.version == 1
        assert updated.author == "a1"
        other_session.close()


class TestRecommendationService:
    def test_create_two_and_get_both(self, recommendation_service):
        recommendation_service.create_recommendation(make_recommendation(recommendation_id=2))
        recommendation_service.create_recommendation(make_recommendation(recommendation_id=3))

        recommendations = recommendation_service.get_recommendations(1)

        assert sorted(r.recommendation_id for r in recommendations) == [2, 3]
        assert all(r.service_address == "test-host/127.0.0.1:7000" for r in recommendations)
        assert len(list(recommendation_service.repository.find_by_product_id(1))) == 2

    def test_get_without_recommendations_is_empty(self, recommendation_service):
        assert recommendation_service.get_recommendations(42) == []

    def test_duplicate_names_both_keys(self, recommendation_service):
        recommendation_service.create_recommendation(make_recommendation(author="first"))

        with pytest.raises(InvalidInputError) as exc_info:
            recommendation_service.create_recommendation(make_recommendation(author="second"))

        assert exc_info.value.message == "Duplicate key, Product Id: 1, Recommendation Id: 2"
        assert [r.author for r in recommendation_service.get_recommendations(1)] == ["first"]

    @pytest.mark.parametrize("product_id", [0, -1])
    def test_invalid_product_id(self, recommendation_service, product_id):
        with pytest.raises(InvalidInputError, match=f"Invalid productId: {product_id}"):
            recommendation_service.create_recommendation(make_recommendation(product_id=product_id))
        with pytest.raises(InvalidInputError):
            recommendation_service.get_recommendations(product_id)
        with pytest.raises(InvalidInputError):
            recommendation_service.delete_recommendations(product_id)

        assert recommendation_service.repository.count() == 0

    def test_delete_removes_all_of_product_and_is_idempotent(self, recommendation_service):
        for recommendation_id in (1, 2, 3):
            recommendation_service.create_recommendation(make_recommendation(recommendation_id=recommendation_id))
        recommendation_service.create_recommendation(make_recommendation(product_id=2, recommendation_id=1))

        recommendation_service.delete_recommendations(1)
        recommendation_service.delete_recommendations(1)

        assert recommendation_service.get_recommendations(1) == []
        assert len(recommendation_service.get_recommendations(2)) == 1

    def test_update_and_stale_update(self, recommendation_service):
        recommendation_service.create_recommendation(make_recommendation())

        updated = recommendation_service.update_recommendation(make_recommendation(rating=5, version=0))
        assert updated.version == 1
        assert updated.rating == 5

        with pytest.raises(OptimisticLockError):
            recommendation_service.update_recommendation(make_recommendation(rating=1, version=0))

        stored = recommendation_service.get_recommendations(1)[0]
        assert stored.rating == 5
        assert stored.version == 1

    def test_update_missing_recommendation(self, recommendation_service):
        with pytest.raises(NotFoundError):
            recommendation_service.update_recommendation(make_recommendation(version=0))
