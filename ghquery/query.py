"""Assemble fragments into a single search query string."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple, Type, Union

from .types import Fragment, QueryError

logger = logging.getLogger(__name__)

SEPARATOR = " "

Failure = Tuple[int, QueryError]


class FragmentErrors(ExceptionGroup):
    """Every fragment that failed to render during one assembly.

    ``failures`` pairs each error with the position of its fragment in the
    input sequence.
    """

    def __new__(cls, failures: Sequence[Failure]) -> "FragmentErrors":
        failures = tuple(failures)
        self = super().__new__(
            cls,
            f"{len(failures)} query fragment(s) failed to render",
            [error for _, error in failures],
        )
        self.failures = failures
        return self

    def contains(
        self,
        match: Union[BaseException, Type[BaseException], Tuple[Type[BaseException], ...]],
    ) -> bool:
        """Return True if ``match`` (an error or an error type) is in the group."""
        if isinstance(match, BaseException):
            return any(error is match for error in self.exceptions)
        return self.subgroup(match) is not None


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Assembled query text plus the errors collected while building it."""

    query: str
    error: FragmentErrors | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> str:
        if self.error is not None:
            raise self.error
        return self.query

    def __iter__(self) -> Iterator:
        return iter((self.query, self.error))


def assemble(*fragments: Fragment) -> QueryResult:
    """Render ``fragments`` in order, separating each token with a space.

    A fragment that fails is skipped and its error kept; the rest are still
    rendered. The returned text keeps the separator after the last token.
    """
    return assemble_all(fragments)


def assemble_all(fragments: Iterable[Fragment]) -> QueryResult:
    parts: List[str] = []
    failures: List[Failure] = []
    for index, fragment in enumerate(fragments):
        try:
            rendered = fragment.render()
        except QueryError as exc:
            logger.debug("Skipping %s fragment %d: %s", fragment.kind.value, index, exc)
            failures.append((index, exc))
            continue
        parts.append(rendered)
        parts.append(SEPARATOR)
    error = FragmentErrors(failures) if failures else None
    return QueryResult("".join(parts), error)
