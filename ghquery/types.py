"""Query fragment types and their renderings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum, Flag
from typing import ClassVar, Protocol, Union, runtime_checkable

Timestamp = Union[date, datetime]


class QueryError(ValueError):
    """Base class for fragments that cannot be rendered."""


class InvalidTimePeriod(QueryError):
    """A time range whose start falls after its end."""

    def __init__(self, tag: str, start: Timestamp, end: Timestamp) -> None:
        super().__init__(tag, start, end)
        self.tag = tag
        self.start = start
        self.end = end

    def __str__(self) -> str:
        return (
            f"invalid time period for '{self.tag}': "
            f"{self.start.isoformat()} is after {self.end.isoformat()}"
        )


class Ord(Flag):
    """Comparison operator applied to a single timestamp."""

    EQ = 1
    LT = 2
    GT = 4
    GEQ = EQ | LT
    LEQ = EQ | GT

    def render(self) -> str:
        try:
            return _ORD_SYMBOLS[self]
        except KeyError:
            raise ValueError(f"{self!r} is not a comparison operator") from None

    def __str__(self) -> str:
        if self in _ORD_SYMBOLS:
            return _ORD_SYMBOLS[self]
        return Flag.__str__(self)

    @classmethod
    def parse(cls, symbol: str) -> "Ord":
        """Return the operator rendered as ``symbol`` (``"="`` means EQ)."""
        symbol = symbol.strip()
        if symbol == "=":
            return cls.EQ
        for member, rendered in _ORD_SYMBOLS.items():
            if rendered == symbol:
                return member
        raise ValueError(f"Unknown comparison operator: {symbol!r}")


_ORD_SYMBOLS = {
    Ord.EQ: "",
    Ord.LT: "<",
    Ord.LEQ: "<=",
    Ord.GEQ: ">=",
    Ord.GT: ">",
}

ORD_EQ = Ord.EQ
ORD_LT = Ord.LT
ORD_LEQ = Ord.LEQ
ORD_GEQ = Ord.GEQ
ORD_GT = Ord.GT


class FragmentKind(Enum):
    TEXT = "text"
    TAG = "tag"
    TIME_SINGLE = "time_single"
    TIME_RANGE = "time_range"


class DateFormat(Enum):
    """How a timestamp is written into a query."""

    DATE = "date"
    TIMEZONED = "timezoned"

    def format(self, value: Timestamp) -> str:
        if self is DateFormat.DATE:
            return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        moment = as_datetime(value)
        text = moment.isoformat(timespec="seconds")
        if moment.utcoffset() == timedelta(0):
            text = text[: -len("+00:00")] + "Z"
        return text


def as_datetime(value: Timestamp) -> datetime:
    """Normalize ``value`` to an aware datetime; naive values are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


@dataclass(slots=True)
class Exclusion:
    """Negation prefix carried by every fragment."""

    excluded: bool = False

    def exclude(self) -> None:
        self.excluded = True

    def render(self) -> str:
        return "-" if self.excluded else ""

    def __str__(self) -> str:
        return self.render()


@runtime_checkable
class Fragment(Protocol):
    """Anything that renders to one token of a search query."""

    @property
    def kind(self) -> FragmentKind: ...

    def render(self) -> str: ...

    def exclude(self) -> "Fragment": ...


@dataclass(slots=True)
class Text:
    """Free text, wrapped in double quotes."""

    kind: ClassVar[FragmentKind] = FragmentKind.TEXT

    value: str
    exclusion: Exclusion = field(default_factory=Exclusion, kw_only=True)

    @property
    def excluded(self) -> bool:
        return self.exclusion.excluded

    def exclude(self) -> "Text":
        self.exclusion.exclude()
        return self

    def render(self) -> str:
        return f'{self.exclusion}"{self.value}"'


@dataclass(slots=True)
class Tag:
    """A ``tag:value`` qualifier."""

    kind: ClassVar[FragmentKind] = FragmentKind.TAG

    tag: str
    value: str
    exclusion: Exclusion = field(default_factory=Exclusion, kw_only=True)

    @property
    def excluded(self) -> bool:
        return self.exclusion.excluded

    def exclude(self) -> "Tag":
        self.exclusion.exclude()
        return self

    def render(self) -> str:
        return f"{self.exclusion}{self.tag}:{self.value}"


@dataclass(slots=True)
class TimeSingle:
    """A timestamp qualifier such as ``created:>=2024-06-01``."""

    kind: ClassVar[FragmentKind] = FragmentKind.TIME_SINGLE

    tag: str
    date_format: DateFormat
    value: Timestamp
    ord: Ord = Ord.EQ
    exclusion: Exclusion = field(default_factory=Exclusion, kw_only=True)

    @property
    def excluded(self) -> bool:
        return self.exclusion.excluded

    def exclude(self) -> "TimeSingle":
        self.exclusion.exclude()
        return self

    def render(self) -> str:
        return (
            f"{self.exclusion}{self.tag}:{self.ord.render()}"
            f"{self.date_format.format(self.value)}"
        )


@dataclass(slots=True)
class TimeRange:
    """An inclusive ``start..end`` qualifier.

    The range is only checked when rendered, so an inverted range can be
    built and excluded freely but never turned into query text.
    """

    kind: ClassVar[FragmentKind] = FragmentKind.TIME_RANGE

    tag: str
    date_format: DateFormat
    start: Timestamp
    end: Timestamp
    exclusion: Exclusion = field(default_factory=Exclusion, kw_only=True)

    @property
    def excluded(self) -> bool:
        return self.exclusion.excluded

    def exclude(self) -> "TimeRange":
        self.exclusion.exclude()
        return self

    def render(self) -> str:
        if as_datetime(self.start) > as_datetime(self.end):
            raise InvalidTimePeriod(self.tag, self.start, self.end)
        return (
            f"{self.exclusion}{self.tag}:"
            f"{self.date_format.format(self.start)}..{self.date_format.format(self.end)}"
        )
