"""
QuerySpec — storage-agnostic query definition.

A ``QuerySpec`` accumulates an ordered list of predicates, at most one sort
statement and a limit/offset pair.  It knows nothing about any backing store;
data sources translate it into their own criteria.

Usage::

    spec = (
        QuerySpec()
        .where("author", "=", "matthew")
        .or_where("is_draft", "=", False)
        .sort("created", "desc")
        .limit(10, 20)
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .predicate import Conjunction, Predicate


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def coerce(cls, value: Any) -> SortDirection:
        """Uppercase ``value``; anything but ``ASC``/``DESC`` becomes ``ASC``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.ASC


@dataclass(frozen=True)
class SortOrder:
    field: str
    direction: SortDirection = SortDirection.ASC

    def __str__(self) -> str:
        return f"{self.field} {self.direction.value}"


@dataclass(frozen=True)
class Pagination:
    limit: int | None = None
    offset: int = 0


class QuerySpec:
    """Ordered predicates plus sort and pagination."""

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []
        self._sort: SortOrder | None = None
        self._pagination = Pagination()

    # ── Building ─────────────────────────────────────────────────

    def where(self, field: str, operator: str, value: Any = None) -> QuerySpec:
        """Append an AND predicate."""
        self._predicates.append(Predicate(Conjunction.AND, field, operator, value))
        return self

    def or_where(self, field: str, operator: str, value: Any = None) -> QuerySpec:
        """Append an OR predicate."""
        self._predicates.append(Predicate(Conjunction.OR, field, operator, value))
        return self

    def limit(self, count: int, offset: int = 0) -> QuerySpec:
        """Set limit and offset, replacing any previous values."""
        self._pagination = Pagination(limit=count, offset=offset)
        return self

    def sort(self, field: str, direction: str = "ASC") -> QuerySpec:
        """Set the sort statement, replacing any previous one."""
        self._sort = SortOrder(field, SortDirection.coerce(direction))
        return self

    # ── Accessors ────────────────────────────────────────────────

    @property
    def predicates(self) -> tuple[Predicate, ...]:
        return tuple(self._predicates)

    @property
    def pagination(self) -> Pagination:
        return self._pagination

    @property
    def sort_order(self) -> SortOrder | None:
        return self._sort

    # ── Serialisation ────────────────────────────────────────────

    def to_structured(self) -> dict[str, Any]:
        """Serialise to ``{"where", "limit", "offset", "sort"}``."""
        return {
            "where": [predicate.to_dict() for predicate in self._predicates],
            "limit": self._pagination.limit,
            "offset": self._pagination.offset,
            "sort": str(self._sort) if self._sort else None,
        }

    @classmethod
    def from_structured(cls, data: Mapping[str, Any]) -> QuerySpec:
        """Build a QuerySpec from its structured form.

        Tolerant of partial input: unknown keys and malformed ``where``
        entries are skipped, a missing predicate ``type`` means AND, and an
        offset is only applied together with a limit.
        """
        spec = cls()
        limit: Any = None
        offset: Any = 0
        for key, value in data.items():
            name = str(key).lower()
            if name == "offset":
                offset = value
            elif name == "limit":
                limit = value
            elif name == "sort":
                spec._load_sort(value)
            elif name == "where":
                spec._load_where(value)
        if limit is not None and limit is not False:
            spec.limit(limit, offset or 0)
        return spec

    def _load_sort(self, value: Any) -> None:
        if not value:
            self._sort = None
            return
        text = str(value).strip()
        if not text:
            self._sort = None
            return
        # Direction is the trailing token; field names may contain spaces.
        parts = text.rsplit(None, 1)
        direction = parts[1] if len(parts) > 1 else SortDirection.ASC
        self.sort(parts[0], direction)

    def _load_where(self, entries: Any) -> None:
        if not isinstance(entries, list):
            return
        for entry in entries:
            if isinstance(entry, Predicate):
                self._predicates.append(entry)
                continue
            if not isinstance(entry, Mapping):
                continue
            if not isinstance(entry.get("key"), str) or not entry["key"]:
                continue
            conjunction = str(entry.get("type") or "and").lower()
            add = self.or_where if conjunction == "or" else self.where
            add(entry.get("key"), entry.get("comparison"), entry.get("value"))

    # ── Comparison ───────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuerySpec):
            return NotImplemented
        return (
            self._predicates == other._predicates
            and self._pagination == other._pagination
            and self._sort == other._sort
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"QuerySpec({self.to_structured()!r})"
