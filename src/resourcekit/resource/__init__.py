from .collection import ResultCollection
from .orchestrator import Resource, default_entity_factory
from .result import CreateResult, Created, UpdateResult, Updated, ValidationFailed

__all__ = [
    "Resource",
    "ResultCollection",
    "default_entity_factory",
    "Created",
    "Updated",
    "ValidationFailed",
    "CreateResult",
    "UpdateResult",
]
