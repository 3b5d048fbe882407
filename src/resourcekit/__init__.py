"""resourcekit — storage-agnostic queries and resource orchestration.

``QuerySpec`` describes what to fetch without naming a store; data sources
(in-memory, MongoDB) execute it; ``Resource`` wraps a data source with
validation and extension points around create/read/update/delete.
"""

from __future__ import annotations

# ── Adapters ─────────────────────────────────────────────────────
from .adapters.memory import InMemoryDataSource

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    Entity,
    Timestamp,
    Timezone,
    ValidationResult,
    normalize_timestamp,
    validate_timezone,
)

# ── Events ───────────────────────────────────────────────────────
from .events import EmitResult, Event, EventManager

# ── Exceptions ───────────────────────────────────────────────────
from .exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    MongoConnectionError,
    MongoPersistenceError,
    MongoQueryError,
    NotFoundError,
    PersistenceError,
    ResourceKitError,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IDataSource, IEntity, IEventManager

# ── Query ────────────────────────────────────────────────────────
from .query import (
    Conjunction,
    Pagination,
    Predicate,
    QuerySpec,
    SortDirection,
    SortOrder,
)

# ── Resource ─────────────────────────────────────────────────────
from .resource import (
    Created,
    CreateResult,
    Resource,
    ResultCollection,
    Updated,
    UpdateResult,
    ValidationFailed,
)

__all__ = [
    # Query
    "QuerySpec",
    "Predicate",
    "Conjunction",
    "Pagination",
    "SortDirection",
    "SortOrder",
    # Resource
    "Resource",
    "ResultCollection",
    "Created",
    "Updated",
    "ValidationFailed",
    "CreateResult",
    "UpdateResult",
    # Domain
    "Entity",
    "ValidationResult",
    "Timestamp",
    "Timezone",
    "normalize_timestamp",
    "validate_timezone",
    # Events
    "EventManager",
    "Event",
    "EmitResult",
    # Ports
    "IDataSource",
    "IEntity",
    "IEventManager",
    # Adapters
    "InMemoryDataSource",
    # Exceptions
    "ResourceKitError",
    "InvalidInputError",
    "NotFoundError",
    "AlreadyExistsError",
    "PersistenceError",
    "MongoPersistenceError",
    "MongoConnectionError",
    "MongoQueryError",
]
