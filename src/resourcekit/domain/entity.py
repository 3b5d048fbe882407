"""Entity base class backed by pydantic."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .validation import ValidationResult

TEntity = TypeVar("TEntity", bound="Entity")


class Entity(BaseModel):
    """Base class for resource entities.

    Unlike a regular pydantic model, an ``Entity`` is populated *without*
    validation: ``from_record`` and ``from_dict`` accept partial or invalid
    data, and validation happens only when ``validate_state()`` or
    ``is_valid()`` is called.  This lets a ``Resource`` merge an update into
    an entity first and report field errors afterwards.

    Usage::

        class Article(Entity):
            title: str = Field(..., min_length=1)
            tags: list[str] = []

        article = Article.from_record({"id": "a-1", "title": ""})
        article.is_valid()               # False
        article.get_validation_errors()  # {"title": [...]}
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    id: Any = None

    @classmethod
    def from_record(cls: type[TEntity], record: dict[str, Any]) -> TEntity:
        """Build an entity from a raw record without validating it."""
        return cls.model_construct(**dict(record))

    def to_dict(self) -> dict[str, Any]:
        data = {
            name: value
            for name, value in self.__dict__.items()
            if name in type(self).model_fields
        }
        data.update(self.__pydantic_extra__ or {})
        return data

    def from_dict(self, record: dict[str, Any]) -> None:
        """Overlay ``record`` onto this entity, key by key."""
        for key, value in record.items():
            setattr(self, key, value)

    def validate_state(self) -> ValidationResult:
        """Validate current state; on success apply the coerced values."""
        try:
            validated = type(self).model_validate(self.to_dict())
        except PydanticValidationError as exc:
            return ValidationResult.from_pydantic(exc)
        self.from_dict(validated.to_dict())
        return ValidationResult.success()

    def is_valid(self) -> bool:
        return self.validate_state().is_valid

    def get_validation_errors(self) -> dict[str, list[str]]:
        return self.validate_state().errors
