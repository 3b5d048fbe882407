"""Exception hierarchy for resourcekit."""

from __future__ import annotations


class ResourceKitError(Exception):
    """Root exception for the entire resourcekit package."""


class InvalidInputError(ResourceKitError, ValueError):
    """Raised for structural/programmer errors.

    Examples: an unknown predicate conjunction, or a spec of the wrong type
    passed to ``Resource.create`` / ``Resource.update``.
    """


class NotFoundError(ResourceKitError):
    """Raised when a record or entity targeted by an operation is absent."""

    def __init__(self, entity_id: object, message: str | None = None) -> None:
        self.entity_id = entity_id
        super().__init__(message or f"Record with id={entity_id!r} does not exist")


class AlreadyExistsError(ResourceKitError):
    """Raised when creating a record whose identity is already stored."""

    def __init__(self, entity_id: object) -> None:
        self.entity_id = entity_id
        super().__init__(f"Record with id={entity_id!r} already exists")


class PersistenceError(ResourceKitError):
    """Base class for all storage-driver related errors."""


class MongoPersistenceError(PersistenceError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails."""


class MongoQueryError(MongoPersistenceError):
    """Raised when a query cannot be compiled or executed."""
