from .entity import Entity
from .fields import Timestamp, Timezone, normalize_timestamp, validate_timezone
from .validation import ValidationResult

__all__ = [
    "Entity",
    "ValidationResult",
    "Timestamp",
    "Timezone",
    "normalize_timestamp",
    "validate_timezone",
]
