"""Builders for the qualifiers GitHub search understands."""

from __future__ import annotations

from .types import DateFormat, Ord, Tag, Text, TimeRange, TimeSingle, Timestamp

TAG_REPOSITORY = "repo"
TAG_ORGANIZATION = "org"
TAG_LABEL = "label"
TAG_AUTHOR = "author"
TAG_CREATED = "created"
TAG_CLOSED = "closed"

MULTI_VALUE_SEPARATOR = ","


def text(value: str) -> Text:
    return Text(value)


def repository(name: str) -> Tag:
    return Tag(TAG_REPOSITORY, name)


def organization(name: str) -> Tag:
    return Tag(TAG_ORGANIZATION, name)


def label(*labels: str) -> Tag:
    """Match any of ``labels``; values are joined as given."""
    return Tag(TAG_LABEL, MULTI_VALUE_SEPARATOR.join(labels))


def author(*authors: str) -> Tag:
    return Tag(TAG_AUTHOR, MULTI_VALUE_SEPARATOR.join(authors))


def created(value: Timestamp, ord: Ord = Ord.EQ) -> TimeSingle:
    return TimeSingle(TAG_CREATED, DateFormat.DATE, value, ord)


def closed(value: Timestamp, ord: Ord = Ord.EQ) -> TimeSingle:
    return TimeSingle(TAG_CLOSED, DateFormat.DATE, value, ord)


def created_timezoned(value: Timestamp, ord: Ord = Ord.EQ) -> TimeSingle:
    return TimeSingle(TAG_CREATED, DateFormat.TIMEZONED, value, ord)


def closed_timezoned(value: Timestamp, ord: Ord = Ord.EQ) -> TimeSingle:
    return TimeSingle(TAG_CLOSED, DateFormat.TIMEZONED, value, ord)


def created_between(start: Timestamp, end: Timestamp) -> TimeRange:
    return TimeRange(TAG_CREATED, DateFormat.DATE, start, end)


def closed_between(start: Timestamp, end: Timestamp) -> TimeRange:
    return TimeRange(TAG_CLOSED, DateFormat.DATE, start, end)


def created_between_timezoned(start: Timestamp, end: Timestamp) -> TimeRange:
    return TimeRange(TAG_CREATED, DateFormat.TIMEZONED, start, end)


def closed_between_timezoned(start: Timestamp, end: Timestamp) -> TimeRange:
    return TimeRange(TAG_CLOSED, DateFormat.TIMEZONED, start, end)
