from .predicate import Conjunction, Predicate
from .spec import Pagination, QuerySpec, SortDirection, SortOrder

__all__ = [
    "Conjunction",
    "Predicate",
    "QuerySpec",
    "Pagination",
    "SortDirection",
    "SortOrder",
]
