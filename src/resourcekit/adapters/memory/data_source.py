"""InMemoryDataSource — dict-backed fake for unit tests and prototyping."""

from __future__ import annotations

import copy
import uuid
from typing import TYPE_CHECKING, Any

from ...exceptions import AlreadyExistsError, NotFoundError

if TYPE_CHECKING:
    from ...query.spec import QuerySpec


class InMemoryDataSource:
    """In-memory implementation of ``IDataSource``.

    Records are stored in a plain dict keyed by their ``id``.  Queries are
    not evaluated: results are canned with :meth:`when` and matched by
    ``QuerySpec`` equality.  Every executed query is appended to
    :attr:`queries`.
    """

    def __init__(self) -> None:
        self._store: dict[Any, dict[str, Any]] = {}
        self._canned: list[tuple[QuerySpec, list[dict[str, Any]]]] = []
        self.queries: list[QuerySpec] = []

    def when(self, spec: QuerySpec, records: list[dict[str, Any]]) -> None:
        """Make ``query(spec)`` return ``records``; later registrations win."""
        self._canned.insert(0, (copy.deepcopy(spec), copy.deepcopy(records)))

    def query(self, spec: QuerySpec) -> list[dict[str, Any]]:
        self.queries.append(spec)
        for canned_spec, records in self._canned:
            if canned_spec == spec:
                return copy.deepcopy(records)
        return []

    def get(self, entity_id: Any) -> dict[str, Any] | None:
        record = self._store.get(entity_id)
        return copy.deepcopy(record) if record is not None else None

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(dict(record))
        entity_id = stored.get("id")
        if entity_id is None:
            entity_id = uuid.uuid4().hex
            stored["id"] = entity_id
        elif entity_id in self._store:
            raise AlreadyExistsError(entity_id)
        self._store[entity_id] = stored
        return copy.deepcopy(stored)

    def update(self, entity_id: Any, fields: dict[str, Any]) -> dict[str, Any]:
        stored = self._store.get(entity_id)
        if stored is None:
            raise NotFoundError(
                entity_id, f"Cannot update; record {entity_id!r} does not yet exist"
            )
        changes = {k: v for k, v in fields.items() if k != "id"}
        stored.update(copy.deepcopy(changes))
        return copy.deepcopy(stored)

    def delete(self, entity_id: Any) -> bool:
        self._store.pop(entity_id, None)
        return True

    # ── Test helpers ─────────────────────────────────────────────

    def clear(self) -> None:
        self._store.clear()
        self._canned.clear()
        self.queries.clear()

    def __len__(self) -> int:
        return len(self._store)
