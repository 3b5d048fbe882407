"""Predicate — one conjunction-tagged field comparison."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import InvalidInputError


class Conjunction(str, Enum):
    """How a predicate joins the predicates before it."""

    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Predicate:
    """Immutable comparison: ``field operator value`` joined by ``conjunction``.

    ``conjunction`` accepts a :class:`Conjunction` or a case-insensitive
    string; anything else raises :class:`InvalidInputError`.  The operator is
    stored verbatim.
    """

    conjunction: Conjunction
    field: str
    operator: str
    value: Any = None

    def __post_init__(self) -> None:
        raw = self.conjunction
        token = raw.value if isinstance(raw, Conjunction) else str(raw).upper()
        try:
            conjunction = Conjunction(token)
        except ValueError:
            raise InvalidInputError(
                f'Expected "AND" or "OR" for predicate conjunction; received "{raw}"'
            ) from None
        object.__setattr__(self, "conjunction", conjunction)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the structured ``where`` entry format."""
        return {
            "type": self.conjunction.value.lower(),
            "key": self.field,
            "comparison": self.operator,
            "value": self.value,
        }
