"""
exceptions.py - Domain error kinds raised by the CRUD services

Every error carries the HTTP status the exception handlers answer with, so a
service only decides *what* went wrong and the API layer decides nothing.

    InvalidInputError     422  caller precondition violated (bad id, duplicate key)
    NotFoundError         404  singular resource absent
    OptimisticLockError   409  update carried a stale version
    InjectedFaultError    500  synthetic failure from the fault injector
    EventProcessingError  422  event of an unsupported type
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ServiceError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class OptimisticLockError(ServiceError):
    """Concurrent modification detected; the caller must re-read and retry."""

    status_code = status.HTTP_409_CONFLICT


class InjectedFaultError(ServiceError):
    """Deliberate failure used to exercise caller timeouts and retries."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class EventProcessingError(ServiceError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
