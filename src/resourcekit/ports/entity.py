from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IEntity(Protocol):
    """
    Protocol for entities managed by a ``Resource``.

    The identity lives under ``"id"`` in the ``to_dict()`` form.
    """

    def to_dict(self) -> dict[str, Any]: ...

    def from_dict(self, record: dict[str, Any]) -> None: ...

    def is_valid(self) -> bool: ...

    def get_validation_errors(self) -> dict[str, list[str]]: ...
