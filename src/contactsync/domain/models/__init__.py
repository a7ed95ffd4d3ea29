from .core import MutationOutcome, Record
from .query import FilterKind, QuerySignature, SortField, SortOrder

__all__ = [
    "FilterKind",
    "MutationOutcome",
    "QuerySignature",
    "Record",
    "SortField",
    "SortOrder",
]
