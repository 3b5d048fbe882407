"""ResultCollection — lazy, memoizing view over raw records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

E = TypeVar("E")


class ResultCollection(Sequence[E], Generic[E]):
    """
    Read-only sequence of entities built from raw records on demand.

    Nothing is materialized at construction time.  The entity for a position
    is built by ``entity_factory`` the first time that position is read and
    then cached for the lifetime of the collection.  The collection never
    goes back to storage.
    """

    __slots__ = ("_entities", "_factory", "_records")

    def __init__(
        self,
        records: Iterable[dict[str, Any]],
        entity_factory: Callable[[dict[str, Any]], E],
    ) -> None:
        self._records = tuple(records)
        self._factory = entity_factory
        self._entities: dict[int, E] = {}

    @property
    def records(self) -> tuple[dict[str, Any], ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    @overload
    def __getitem__(self, index: int) -> E: ...

    @overload
    def __getitem__(self, index: slice) -> list[E]: ...

    def __getitem__(self, index: int | slice) -> E | list[E]:
        if isinstance(index, slice):
            return [self._materialize(i) for i in range(*index.indices(len(self)))]
        position = index + len(self) if index < 0 else index
        if not 0 <= position < len(self):
            raise IndexError("ResultCollection index out of range")
        return self._materialize(position)

    def _materialize(self, position: int) -> E:
        entity = self._entities.get(position)
        if entity is None:
            entity = self._factory(dict(self._records[position]))
            self._entities[position] = entity
        return entity

    def to_list(self) -> list[dict[str, Any]]:
        """Return every entity in its ``to_dict()`` form."""
        return [entity.to_dict() for entity in self]  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self)}, "
            f"materialized={len(self._entities)})"
        )
