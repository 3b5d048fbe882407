"""ValidationResult — structured field errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import ValidationError as PydanticValidationError


def default_errors_factory() -> dict[str, list[str]]:
    return {}


@dataclass
class ValidationResult:
    """Collects field-level validation errors.

    Usage::

        result = ValidationResult.success()
        result = ValidationResult.failure({"title": ["is required"]})
    """

    errors: dict[str, list[str]] = field(default_factory=default_errors_factory)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @classmethod
    def success(cls) -> ValidationResult:
        return cls()

    @classmethod
    def failure(cls, errors: dict[str, list[str]]) -> ValidationResult:
        return cls(errors=errors)

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> ValidationResult:
        """Group pydantic error messages by dotted field location."""
        result = cls()
        for error in exc.errors():
            loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
            result.add_error(loc, error.get("msg", "validation error"))
        return result

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)

    def __bool__(self) -> bool:
        return self.is_valid
