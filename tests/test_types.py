# tests/test_types.py
from datetime import date, datetime, timedelta, timezone

import pytest

from ghquery.types import (
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

ALL_ORDS = [Ord.EQ, Ord.LT, Ord.LEQ, Ord.GEQ, Ord.GT]
UTC_MOMENT = datetime(2024, 6, 1, 12, 30, 45, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("ord", "expected"),
    [
        (Ord.EQ, ""),
        (Ord.LT, "<"),
        (Ord.LEQ, "<="),
        (Ord.GEQ, ">="),
        (Ord.GT, ">"),
    ],
)
def test_ord_renders_canonical_symbol(ord, expected):
    assert ord.render() == expected
    assert str(ord) == expected


def test_ord_renderings_are_distinct():
    renderings = [o.render() for o in ALL_ORDS]
    assert len(set(renderings)) == len(ALL_ORDS)


def test_ord_composites_use_flag_encoding():
    assert Ord.GEQ == Ord.EQ | Ord.LT
    assert Ord.LEQ == Ord.EQ | Ord.GT


def test_ord_module_aliases():
    assert [ORD_EQ, ORD_LT, ORD_LEQ, ORD_GEQ, ORD_GT] == ALL_ORDS


def test_ord_non_operator_combination_does_not_render():
    with pytest.raises(ValueError):
        (Ord.LT | Ord.GT).render()


@pytest.mark.parametrize("ord", ALL_ORDS)
def test_ord_parse_inverts_render(ord):
    assert Ord.parse(ord.render()) is ord


def test_ord_parse_accepts_equals_sign():
    assert Ord.parse("=") is Ord.EQ


def test_ord_parse_rejects_unknown_symbol():
    with pytest.raises(ValueError):
        Ord.parse("=>")


def test_exclusion_defaults_to_empty():
    exclusion = Exclusion()
    assert not exclusion.excluded
    assert exclusion.render() == ""


def test_exclusion_is_idempotent():
    exclusion = Exclusion()
    exclusion.exclude()
    exclusion.exclude()
    assert exclusion.excluded
    assert str(exclusion) == "-"


def test_date_format_date_only():
    assert DateFormat.DATE.format(UTC_MOMENT) == "2024-06-01"
    assert DateFormat.DATE.format(date(2024, 6, 1)) == "2024-06-01"


def test_date_format_date_only_keeps_local_day():
    late = datetime(2024, 6, 1, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert DateFormat.DATE.format(late) == "2024-06-01"


def test_date_format_timezoned_utc_uses_z_suffix():
    assert DateFormat.TIMEZONED.format(UTC_MOMENT) == "2024-06-01T12:30:45Z"


def test_date_format_timezoned_keeps_offset():
    moment = datetime(2024, 6, 1, 12, 30, 45, tzinfo=timezone(timedelta(hours=2)))
    assert DateFormat.TIMEZONED.format(moment) == "2024-06-01T12:30:45+02:00"


def test_date_format_timezoned_drops_microseconds():
    moment = UTC_MOMENT.replace(microsecond=123456)
    assert DateFormat.TIMEZONED.format(moment) == "2024-06-01T12:30:45Z"


def test_date_format_timezoned_treats_naive_as_utc():
    assert DateFormat.TIMEZONED.format(datetime(2024, 6, 1, 12, 0)) == "2024-06-01T12:00:00Z"
    assert DateFormat.TIMEZONED.format(date(2024, 6, 1)) == "2024-06-01T00:00:00Z"


def test_text_is_quoted():
    assert Text("foo").render() == '"foo"'


def test_tag_renders_tag_and_value():
    assert Tag("repo", "octo/cat").render() == "repo:octo/cat"


@pytest.mark.parametrize("ord", ALL_ORDS)
def test_time_single_renders_operator_before_date(ord):
    fragment = TimeSingle("created", DateFormat.DATE, UTC_MOMENT, ord)
    assert fragment.render() == f"created:{ord.render()}2024-06-01"


def test_time_range_renders_both_ends():
    fragment = TimeRange("closed", DateFormat.DATE, date(2025, 1, 11), date(2025, 1, 13))
    assert fragment.render() == "closed:2025-01-11..2025-01-13"


def test_time_range_accepts_equal_ends():
    fragment = TimeRange("closed", DateFormat.DATE, date(2025, 1, 11), date(2025, 1, 11))
    assert fragment.render() == "closed:2025-01-11..2025-01-11"


def test_time_range_inverted_fails_at_render_time():
    fragment = TimeRange("closed", DateFormat.DATE, date(2025, 1, 13), date(2025, 1, 11))
    with pytest.raises(InvalidTimePeriod) as excinfo:
        fragment.render()
    assert excinfo.value.tag == "closed"
    assert excinfo.value.start == date(2025, 1, 13)
    assert isinstance(excinfo.value, QueryError)


def test_time_range_excluded_still_validates():
    fragment = TimeRange("closed", DateFormat.DATE, date(2025, 1, 13), date(2025, 1, 11)).exclude()
    with pytest.raises(InvalidTimePeriod):
        fragment.render()


def test_time_range_compares_instants_across_zones():
    start = datetime(2024, 6, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    end = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
    fragment = TimeRange("created", DateFormat.TIMEZONED, start, end)
    assert fragment.render() == "created:2024-06-01T10:00:00+02:00..2024-06-01T09:00:00Z"


def test_time_range_mixes_dates_and_datetimes():
    fragment = TimeRange(
        "created",
        DateFormat.DATE,
        date(2024, 6, 1),
        datetime(2024, 5, 31, 23, 0, tzinfo=timezone.utc),
    )
    with pytest.raises(InvalidTimePeriod):
        fragment.render()


def _fragments():
    return [
        Text("foo"),
        Tag("org", "acme"),
        TimeSingle("created", DateFormat.TIMEZONED, UTC_MOMENT, Ord.GT),
        TimeRange("closed", DateFormat.DATE, date(2025, 1, 11), date(2025, 1, 13)),
    ]


@pytest.mark.parametrize("index", range(4))
def test_exclude_prepends_single_dash(index):
    plain = _fragments()[index].render()
    once = _fragments()[index].exclude()
    twice = _fragments()[index].exclude().exclude()
    assert once.render() == "-" + plain
    assert twice.render() == once.render()


def test_exclude_returns_same_fragment():
    fragment = Tag("repo", "x")
    assert fragment.exclude() is fragment
    assert fragment.excluded


def test_fragments_do_not_share_exclusion():
    first, second = Tag("repo", "a"), Tag("repo", "b")
    first.exclude()
    assert not second.excluded


def test_fragment_kinds():
    kinds = [fragment.kind for fragment in _fragments()]
    assert kinds == [
        FragmentKind.TEXT,
        FragmentKind.TAG,
        FragmentKind.TIME_SINGLE,
        FragmentKind.TIME_RANGE,
    ]
    assert all(isinstance(fragment, Fragment) for fragment in _fragments())
