"""Command-line interface for ghquery."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

from . import builders
from .config import clear_defaults, load_settings, store_defaults
from .query import assemble_all
from .types import Fragment, Ord, Timestamp

# (key, value, excluded)
QualifierArg = Tuple[str, str, bool]

_OPERATOR_RE = re.compile(r"^(<=|>=|<|>|=)?(.*)$", re.DOTALL)

_TIME_SINGLE_BUILDERS: Dict[Tuple[str, bool], Callable[[Timestamp, Ord], Fragment]] = {
    ("created", False): builders.created,
    ("created", True): builders.created_timezoned,
    ("closed", False): builders.closed,
    ("closed", True): builders.closed_timezoned,
}

_TIME_RANGE_BUILDERS: Dict[Tuple[str, bool], Callable[[Timestamp, Timestamp], Fragment]] = {
    ("created", False): builders.created_between,
    ("created", True): builders.created_between_timezoned,
    ("closed", False): builders.closed_between,
    ("closed", True): builders.closed_between_timezoned,
}

QUALIFIER_KEYS = ("repo", "org", "label", "author", "text", "created", "closed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ghquery", description="GitHub search query builder")
    parser.add_argument("--config", type=Path, help="Path to the config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    _add_build_parser(subparsers)
    _add_defaults_parser(subparsers)

    return parser


def _add_build_parser(subparsers: argparse._SubParsersAction) -> None:
    build = subparsers.add_parser("build", help="Print a search query")
    build.add_argument(
        "-t",
        "--text",
        dest="qualifiers",
        action="append",
        default=[],
        type=lambda raw: ("text", raw, False),
        help="Add a quoted text term (may be repeated)",
    )
    build.add_argument(
        "-Q",
        "--qualifier",
        dest="qualifiers",
        action="append",
        default=[],
        type=_included,
        metavar="key=value",
        help="Add a search qualifier (may be repeated)",
    )
    build.add_argument(
        "-X",
        "--exclude",
        dest="qualifiers",
        action="append",
        default=[],
        type=_excluded,
        metavar="key=value",
        help="Add a negated search qualifier (may be repeated)",
    )
    build.add_argument(
        "--timezoned",
        action="store_true",
        help="Render dates with time and UTC offset",
    )
    build.add_argument(
        "--no-defaults",
        action="store_true",
        help="Ignore default qualifiers from the config file",
    )
    build.set_defaults(func=_handle_build)


def _add_defaults_parser(subparsers: argparse._SubParsersAction) -> None:
    defaults = subparsers.add_parser("defaults", help="Manage default qualifiers")
    defaults_sub = defaults.add_subparsers(dest="subcommand", required=True)

    set_cmd = defaults_sub.add_parser("set", help="Store default qualifiers")
    set_cmd.add_argument("pairs", nargs="+", type=_included, metavar="key=value")
    set_cmd.set_defaults(func=_handle_defaults_set)

    clear_cmd = defaults_sub.add_parser("clear", help="Remove stored default qualifiers")
    clear_cmd.set_defaults(func=_handle_defaults_clear)

    show_cmd = defaults_sub.add_parser("show", help="Show stored settings")
    show_cmd.set_defaults(func=_handle_defaults_show)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _handle_build(args: argparse.Namespace) -> int:
    settings = load_settings(config_path=args.config)
    timezoned = args.timezoned or settings.timezoned

    qualifiers: List[QualifierArg] = []
    if not args.no_defaults:
        qualifiers.extend((key, value, False) for key, value in settings.defaults.items())
    qualifiers.extend(args.qualifiers)
    if not qualifiers:
        raise RuntimeError("No qualifiers given")

    fragments = [
        build_fragment(key, value, excluded=excluded, timezoned=timezoned)
        for key, value, excluded in qualifiers
    ]
    result = assemble_all(fragments)
    sys.stdout.write(f"{result.query}\n")
    if result.error is None:
        return 0
    for _, error in result.error.failures:
        print(f"Error: {error}", file=sys.stderr)
    return 1


def _handle_defaults_set(args: argparse.Namespace) -> int:
    pairs = {}
    for key, value, _ in args.pairs:
        _check_key(key)
        pairs[key] = value
    path = store_defaults(pairs, config_path=args.config)
    print(f"Defaults stored at {path}")
    return 0


def _handle_defaults_clear(args: argparse.Namespace) -> int:
    clear_defaults(config_path=args.config)
    print("Stored defaults cleared.")
    return 0


def _handle_defaults_show(args: argparse.Namespace) -> int:
    settings = load_settings(config_path=args.config)
    if not settings.defaults:
        print("No default qualifiers.")
    for key, value in settings.defaults.items():
        print(f"{key}={value}")
    print(f"timezoned={'yes' if settings.timezoned else 'no'}")
    return 0


def build_fragment(key: str, value: str, *, excluded: bool = False, timezoned: bool = False) -> Fragment:
    """Turn one ``key=value`` command-line qualifier into a fragment."""
    _check_key(key)
    fragment: Fragment
    if key == "text":
        fragment = builders.text(value)
    elif key == "repo":
        fragment = builders.repository(_single_value(key, value))
    elif key == "org":
        fragment = builders.organization(_single_value(key, value))
    elif key == "label":
        fragment = builders.label(*_split_values(key, value))
    elif key == "author":
        fragment = builders.author(*_split_values(key, value))
    elif ".." in value:
        start, end = value.split("..", 1)
        fragment = _TIME_RANGE_BUILDERS[key, timezoned](
            parse_timestamp(start), parse_timestamp(end)
        )
    else:
        match = _OPERATOR_RE.match(value.strip())
        ord = Ord.parse(match.group(1) or "")
        fragment = _TIME_SINGLE_BUILDERS[key, timezoned](parse_timestamp(match.group(2)), ord)
    if excluded:
        fragment.exclude()
    return fragment


def parse_timestamp(raw: str) -> Timestamp:
    """Parse an ISO 8601 date or datetime."""
    raw = raw.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid date {raw!r}: expected ISO 8601") from exc


def _check_key(key: str) -> None:
    if key not in QUALIFIER_KEYS:
        raise RuntimeError(
            f"Unknown qualifier {key!r} (expected one of: {', '.join(QUALIFIER_KEYS)})"
        )


def _single_value(key: str, value: str) -> str:
    value = value.strip()
    if not value:
        raise RuntimeError(f"No value given for qualifier {key!r}")
    return value


def _split_values(key: str, value: str) -> List[str]:
    values = [item.strip() for item in value.split(",") if item.strip()]
    if not values:
        raise RuntimeError(f"No value given for qualifier {key!r}")
    return values


def _parse_qualifier(raw: str, excluded: bool) -> QualifierArg:
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    key, value = raw.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError(f"missing qualifier name in {raw!r}")
    return key, value.strip(), excluded


def _included(raw: str) -> QualifierArg:
    return _parse_qualifier(raw, False)


def _excluded(raw: str) -> QualifierArg:
    return _parse_qualifier(raw, True)


if __name__ == "__main__":
    sys.exit(main())
