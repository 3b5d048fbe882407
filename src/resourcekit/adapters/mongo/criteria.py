"""Mongo criteria translator — compiles a ``QuerySpec`` into ``find()`` arguments."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ...exceptions import MongoQueryError
from ...query.predicate import Conjunction
from ...query.spec import SortDirection

if TYPE_CHECKING:
    from ...query.predicate import Predicate
    from ...query.spec import Pagination, QuerySpec, SortOrder

logger = logging.getLogger("resourcekit.mongo.criteria")

EQUALITY = "="

COMPARISON_OPERATORS: dict[str, str] = {
    "<": "$lt",
    "<=": "$lte",
    ">": "$gt",
    ">=": "$gte",
    "!=": "$ne",
}

IN_OPERATOR = "$in"
OR_OPERATOR = "$or"


@dataclass(frozen=True)
class CriteriaOutput:
    """Arguments for ``collection.find(filter).sort(...).skip(...).limit(...)``.

    ``sort``, ``skip`` and ``limit`` are ``None`` when not applicable.
    """

    filter: dict[str, Any]
    sort: dict[str, int] | None = None
    skip: int | None = None
    limit: int | None = None

    @property
    def sort_list(self) -> list[tuple[str, int]]:
        """Sort as the ``[(field, direction)]`` list pymongo expects."""
        return list(self.sort.items()) if self.sort else []


def _merge_equality(existing: Any, value: Any) -> dict[str, Any]:
    """Fold another equality on the same field into an ``$in`` accumulator."""
    if isinstance(existing, Mapping):
        merged = dict(existing)
        merged[IN_OPERATOR] = [*merged.get(IN_OPERATOR, []), value]
        return merged
    return {IN_OPERATOR: [existing, value]}


def _merge_comparison(existing: Any, operator: str, value: Any) -> dict[str, Any]:
    """Add ``operator`` to a field; last write per operator wins."""
    if isinstance(existing, Mapping):
        merged = dict(existing)
        merged[operator] = value
        return merged
    return {IN_OPERATOR: [existing], operator: value}


class MongoCriteriaTranslator:
    """Translate a :class:`~resourcekit.query.QuerySpec` into MongoDB criteria.

    AND predicates form the top-level filter document; OR predicates are
    collected separately and placed under ``$or`` as a list of one-field
    documents.  Within each group, repeated predicates on the same field are
    merged::

        where("foo", "=", 1).where("foo", "=", 2)
            -> {"foo": {"$in": [1, 2]}}
        where("foo", "=", 1).where("foo", ">", 0)
            -> {"foo": {"$in": [1], "$gt": 0}}
        where("foo", ">", 0).where("foo", ">", 5)
            -> {"foo": {"$gt": 5}}

    Unknown comparison tokens are treated as equality and logged; pass
    ``strict=True`` to raise :class:`~resourcekit.exceptions.MongoQueryError`
    instead.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict

    def translate(self, spec: QuerySpec) -> CriteriaOutput:
        pagination = spec.pagination
        return CriteriaOutput(
            filter=self.build_filter(spec.predicates),
            sort=self.build_sort(spec.sort_order),
            skip=self._build_skip(pagination),
            limit=pagination.limit,
        )

    def build_filter(self, predicates: tuple[Predicate, ...]) -> dict[str, Any]:
        and_criteria = self._build_group(
            p for p in predicates if p.conjunction is Conjunction.AND
        )
        or_criteria = self._build_group(
            p for p in predicates if p.conjunction is Conjunction.OR
        )
        if not or_criteria:
            return and_criteria
        and_criteria[OR_OPERATOR] = [
            {field: condition} for field, condition in or_criteria.items()
        ]
        return and_criteria

    def build_sort(self, sort: SortOrder | None) -> dict[str, int] | None:
        if sort is None:
            return None
        return {sort.field: -1 if sort.direction is SortDirection.DESC else 1}

    def _build_skip(self, pagination: Pagination) -> int | None:
        # Offset is only meaningful together with a limit.
        if pagination.limit is None:
            return None
        return pagination.offset

    def _build_group(self, predicates: Any) -> dict[str, Any]:
        criteria: dict[str, Any] = {}
        for predicate in predicates:
            field = predicate.field
            operator = self._map_operator(predicate.operator)
            if field not in criteria:
                criteria[field] = (
                    predicate.value
                    if operator is None
                    else {operator: predicate.value}
                )
            elif operator is None:
                criteria[field] = _merge_equality(criteria[field], predicate.value)
            else:
                criteria[field] = _merge_comparison(
                    criteria[field], operator, predicate.value
                )
        return criteria

    def _map_operator(self, comparison: Any) -> str | None:
        """Mongo operator for ``comparison``; ``None`` means equality."""
        if isinstance(comparison, str) and comparison in COMPARISON_OPERATORS:
            return COMPARISON_OPERATORS[comparison]
        if comparison != EQUALITY:
            if self._strict:
                raise MongoQueryError(
                    f"Unsupported comparison {comparison!r}; expected one of "
                    f"{[EQUALITY, *COMPARISON_OPERATORS]}"
                )
            logger.warning("Unknown comparison %r treated as equality", comparison)
        return None


def translate(spec: QuerySpec, *, strict: bool = False) -> CriteriaOutput:
    """Shortcut for ``MongoCriteriaTranslator(strict=strict).translate(spec)``."""
    return MongoCriteriaTranslator(strict=strict).translate(spec)
