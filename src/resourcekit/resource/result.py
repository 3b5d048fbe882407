"""Tagged results returned by ``Resource.create`` and ``Resource.update``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeAlias, TypeVar

E = TypeVar("E")


def default_errors_factory() -> dict[str, list[str]]:
    return {}


@dataclass(frozen=True)
class Created(Generic[E]):
    """The entity was validated and stored."""

    entity: E
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Updated(Generic[E]):
    """The entity was validated and its changes stored."""

    entity: E
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ValidationFailed:
    """Validation rejected the entity; nothing was written.

    ``errors`` maps field names to messages so callers (e.g. web
    controllers) can render field-level feedback.
    """

    errors: dict[str, list[str]] = field(default_factory=default_errors_factory)
    ok: bool = field(default=False, init=False)


CreateResult: TypeAlias = "Created[E] | ValidationFailed"
UpdateResult: TypeAlias = "Updated[E] | ValidationFailed"
