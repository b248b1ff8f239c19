"""ghquery - build GitHub search query strings from typed fragments."""

from .builders import (
    author,
    closed,
    closed_between,
    closed_between_timezoned,
    closed_timezoned,
    created,
    created_between,
    created_between_timezoned,
    created_timezoned,
    label,
    organization,
    repository,
    text,
)
from .query import FragmentErrors, QueryResult, assemble, assemble_all
from .types import (
    ORD_EQ,
    ORD_GEQ,
    ORD_GT,
    ORD_LEQ,
    ORD_LT,
    DateFormat,
    Exclusion,
    Fragment,
    FragmentKind,
    InvalidTimePeriod,
    Ord,
    QueryError,
    Tag,
    Text,
    TimeRange,
    TimeSingle,
)

__all__ = [
    # Fragments
    "Fragment",
    "FragmentKind",
    "Text",
    "Tag",
    "TimeSingle",
    "TimeRange",
    "Exclusion",
    "DateFormat",
    "Ord",
    "ORD_EQ",
    "ORD_LT",
    "ORD_LEQ",
    "ORD_GEQ",
    "ORD_GT",
    # Builders
    "text",
    "repository",
    "organization",
    "label",
    "author",
    "created",
    "closed",
    "created_timezoned",
    "closed_timezoned",
    "created_between",
    "closed_between",
    "created_between_timezoned",
    "closed_between_timezoned",
    # Assembly
    "assemble",
    "assemble_all",
    "QueryResult",
    "FragmentErrors",
    "QueryError",
    "InvalidTimePeriod",
]
