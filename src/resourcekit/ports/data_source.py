"""IDataSource — storage access protocol consumed by ``Resource``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..query.spec import QuerySpec


@runtime_checkable
class IDataSource(Protocol):
    """
    Storage access capability.

    Records are flat mappings.  At this boundary the identity key is always
    ``id``; implementations translate it to whatever native key their store
    uses.
    """

    def query(self, spec: QuerySpec) -> list[dict[str, Any]]:
        """Execute ``spec``; an empty list when nothing matches."""
        ...

    def get(self, entity_id: Any) -> dict[str, Any] | None:
        """Point lookup; ``None`` when absent."""
        ...

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        """Store ``record`` and return it with its identity under ``id``.

        Raises ``AlreadyExistsError`` when the identity is taken.
        """
        ...

    def update(self, entity_id: Any, fields: dict[str, Any]) -> dict[str, Any]:
        """Merge ``fields`` into the stored record and return the result.

        Raises ``NotFoundError`` when no record has ``entity_id``.
        """
        ...

    def delete(self, entity_id: Any) -> bool:
        """Remove the record. Idempotent; always ``True``."""
        ...
