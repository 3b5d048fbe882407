"""Tests for QuerySpec and Predicate."""

from __future__ import annotations

import dataclasses

import pytest

from resourcekit.exceptions import InvalidInputError
from resourcekit.query import (
    Conjunction,
    Pagination,
    Predicate,
    QuerySpec,
    SortDirection,
    SortOrder,
)

# -- Predicate ---------------------------------------------------------------


def test_predicate_normalizes_conjunction_case():
    predicate = Predicate("or", "foo", "=", "bar")
    assert predicate.conjunction is Conjunction.OR


def test_predicate_accepts_enum_conjunction():
    predicate = Predicate(Conjunction.AND, "foo", "=", "bar")
    assert predicate.conjunction is Conjunction.AND


@pytest.mark.parametrize("conjunction", ["xor", "", "NOT"])
def test_predicate_rejects_unknown_conjunction(conjunction):
    with pytest.raises(InvalidInputError, match="AND"):
        Predicate(conjunction, "foo", "=", "bar")


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        Predicate("nand", "foo", "=", "bar")


def test_predicate_is_immutable():
    predicate = Predicate("and", "foo", "=", "bar")
    with pytest.raises(dataclasses.FrozenInstanceError):
        predicate.value = "baz"  # type: ignore[misc]


# -- Building ----------------------------------------------------------------


def test_aggregates_where_clauses_as_a_queue():
    spec = (
        QuerySpec()
        .where("foo", "=", "bar")
        .or_where("bar", "IS NOT NULL")
        .where("baz", "!=", "bat")
    )
    assert spec.predicates == (
        Predicate("and", "foo", "=", "bar"),
        Predicate("or", "bar", "IS NOT NULL", None),
        Predicate("and", "baz", "!=", "bat"),
    )


def test_malformed_operator_is_stored_verbatim():
    spec = QuerySpec().where("foo", "~~nonsense~~", 1)
    assert spec.predicates[0].operator == "~~nonsense~~"


def test_predicates_accessor_returns_a_copy():
    spec = QuerySpec().where("foo", "=", 1)
    predicates = spec.predicates
    spec.where("bar", "=", 2)
    assert len(predicates) == 1
    assert len(spec.predicates) == 2


def test_default_pagination_and_sort():
    spec = QuerySpec()
    assert spec.pagination == Pagination(limit=None, offset=0)
    assert spec.sort_order is None


def test_aggregates_limit_and_offset():
    spec = QuerySpec().limit(10, 15)
    assert spec.pagination.limit == 10
    assert spec.pagination.offset == 15


def test_repeated_calls_to_limit_overwrite_limit_and_offset():
    spec = QuerySpec().limit(10, 15).limit(20, 30)
    assert spec.pagination == Pagination(limit=20, offset=30)


def test_limit_without_offset_resets_offset():
    spec = QuerySpec().limit(10, 15).limit(5)
    assert spec.pagination == Pagination(limit=5, offset=0)


@pytest.mark.parametrize(
    ("direction", "expected"),
    [
        ("asc", SortDirection.ASC),
        ("desc", SortDirection.DESC),
        ("DESC", SortDirection.DESC),
        ("sideways", SortDirection.ASC),
        ("", SortDirection.ASC),
    ],
)
def test_sort_normalizes_direction(direction, expected):
    spec = QuerySpec().sort("created", direction)
    assert spec.sort_order == SortOrder("created", expected)


def test_sort_replaces_previous_sort():
    spec = QuerySpec().sort("created", "DESC").sort("title")
    assert spec.sort_order == SortOrder("title", SortDirection.ASC)


# -- Serialisation -----------------------------------------------------------


def test_to_structured():
    spec = (
        QuerySpec()
        .where("foo", "=", "bar")
        .or_where("baz", ">", 1)
        .sort("created", "desc")
        .limit(10, 20)
    )
    assert spec.to_structured() == {
        "where": [
            {"type": "and", "key": "foo", "comparison": "=", "value": "bar"},
            {"type": "or", "key": "baz", "comparison": ">", "value": 1},
        ],
        "limit": 10,
        "offset": 20,
        "sort": "created DESC",
    }


def test_empty_spec_to_structured():
    assert QuerySpec().to_structured() == {
        "where": [],
        "limit": None,
        "offset": 0,
        "sort": None,
    }


def test_structured_round_trip():
    spec = (
        QuerySpec()
        .where("foo", "=", "bar")
        .or_where("bar", "!=", "baz")
        .where("baz", ">", 1)
        .sort("title", "DESC")
        .limit(10, 10)
    )
    restored = QuerySpec.from_structured(spec.to_structured())
    assert restored == spec
    assert restored.predicates == spec.predicates
    assert restored.pagination == spec.pagination
    assert restored.sort_order == spec.sort_order


def test_from_structured_defaults_missing_type_to_and():
    spec = QuerySpec.from_structured(
        {"where": [{"key": "foo", "comparison": "=", "value": 1}]}
    )
    assert spec.predicates == (Predicate("and", "foo", "=", 1),)


def test_from_structured_accepts_uppercase_keys_and_types():
    spec = QuerySpec.from_structured(
        {
            "WHERE": [{"type": "OR", "key": "foo", "comparison": "=", "value": 1}],
            "Limit": 5,
        }
    )
    assert spec.predicates == (Predicate("or", "foo", "=", 1),)
    assert spec.pagination == Pagination(limit=5, offset=0)


def test_from_structured_skips_malformed_where_entries():
    predicate = Predicate("or", "bar", "<", 3)
    spec = QuerySpec.from_structured(
        {"where": ["garbage", 42, None, predicate, {"key": "foo", "value": 1}]}
    )
    assert spec.predicates == (predicate, Predicate("and", "foo", None, 1))


def test_from_structured_ignores_non_list_where():
    spec = QuerySpec.from_structured({"where": "foo = 1"})
    assert spec.predicates == ()


@pytest.mark.parametrize("sort", [None, False, ""])
def test_from_structured_falsy_sort_means_no_sort(sort):
    assert QuerySpec.from_structured({"sort": sort}).sort_order is None


def test_from_structured_invalid_direction_defaults_to_asc():
    spec = QuerySpec.from_structured({"sort": "title UPWARDS"})
    assert spec.sort_order == SortOrder("title", SortDirection.ASC)


def test_from_structured_sort_without_direction_is_asc():
    spec = QuerySpec.from_structured({"sort": "title"})
    assert spec.sort_order == SortOrder("title", SortDirection.ASC)


def test_structured_round_trip_keeps_field_names_with_spaces():
    spec = QuerySpec().sort("created at", "DESC")

    restored = QuerySpec.from_structured(spec.to_structured())

    assert restored.sort_order == SortOrder("created at", SortDirection.DESC)
    assert restored == spec


@pytest.mark.parametrize("key", [None, "", 3, ["foo"]])
def test_from_structured_skips_entries_without_a_field_name(key):
    entries = [{"comparison": "=", "value": 1}, {"key": key, "value": 2}]

    spec = QuerySpec.from_structured({"where": entries})

    assert spec.predicates == ()


@pytest.mark.parametrize("limit", [None, False])
def test_from_structured_offset_requires_limit(limit):
    spec = QuerySpec.from_structured({"limit": limit, "offset": 30})
    assert spec.pagination == Pagination(limit=None, offset=0)


def test_from_structured_tolerates_empty_mapping():
    assert QuerySpec.from_structured({}) == QuerySpec()


# -- Comparison --------------------------------------------------------------


def test_specs_with_different_pagination_differ():
    assert QuerySpec().limit(10) != QuerySpec().limit(10, 5)


def test_spec_is_not_equal_to_other_types():
    assert QuerySpec() != {"where": []}
