"""
persistence.py - Versioned entity store base

Common create / update / delete / count operations for the per-service
repositories. Each stored row has a store-generated UUID ``id`` and an integer
``version`` starting at 0. Updates use a version-guarded UPDATE:

    UPDATE <table> SET <fields>, version = :v + 1 WHERE id = :id AND version = :v

so concurrent writers are detected, never blocked. Errors raised here are
store vocabulary; the CRUD services translate them before they reach a caller.
"""

import logging
from typing import ClassVar, Iterable, Optional, Tuple, Type

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class DuplicateKeyError(Exception):
    """A create collided with the natural-key unique index."""


class StaleVersionError(Exception):
    """An update carried a version other than the stored one."""


class VersionedRepository:
    """Repository base with optimistic locking on the ``version`` column."""

    model: ClassVar[Type]
    # Columns copied by update(); the natural key is never among them
    mutable_fields: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create(self, entity):
        """Insert a new entity with version 0."""
        entity.version = 0
        self.db.add(entity)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateKeyError(str(e.orig)) from e
        self.db.refresh(entity)
        return entity

    def find_by_id(self, entity_id):
        """Get entity by store identity."""
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def update(self, entity):
        """
        Persist the entity's mutable fields if its version is still current.
        Returns the stored entity with the incremented version.
        """
        entity_id = entity.id
        current_version = entity.version
        values = {getattr(self.model, field): getattr(entity, field) for field in self.mutable_fields}
        values[self.model.version] = current_version + 1

        # Detach so pending attribute changes are never flushed without the version guard
        if entity in self.db:
            self.db.expunge(entity)

        updated = (
            self.db.query(self.model)
            .filter(and_(self.model.id == entity_id, self.model.version == current_version))
            .update(values, synchronize_session=False)
        )

        if updated == 0:
            self.db.rollback()
            logger.warning(f"Stale version {current_version} for {self.model.__name__} {entity_id}")
            raise StaleVersionError(f"{self.model.__name__} {entity_id} is not at version {current_version}")

        self.db.commit()
        logger.debug(f"Updated {self.model.__name__} {entity_id} to version {current_version + 1}")
        return self.find_by_id(entity_id)

    def delete(self, entity) -> None:
        """Delete the entity, no-op if it is already gone."""
        entity_id = entity.id
        if entity in self.db:
            self.db.expunge(entity)
        self.db.query(self.model).filter(self.model.id == entity_id).delete(synchronize_session=False)
        self.db.commit()

    def delete_all(self, entities: Iterable) -> int:
        """Delete the given entities, returns the number of rows removed."""
        ids = [entity.id for entity in entities]
        if not ids:
            return 0
        deleted = self.db.query(self.model).filter(self.model.id.in_(ids)).delete()
        self.db.commit()
        return deleted

    def count(self) -> int:
        """Total number of stored entities."""
        return self.db.query(self.model).count()

    def release(self) -> None:
        """Return the session's connection to the pool; loaded entities stay readable."""
        self.db.close()

    def _first(self, *criteria) -> Optional[object]:
        return self.db.query(self.model).filter(*criteria).first()
