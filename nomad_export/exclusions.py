"""Validated set of data categories to leave out of an export."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, List, Optional

from .config.constants import EXCLUDABLE_DATA_TYPES
from .exceptions import InvalidExclusionError


class ExclusionSet:
    """Immutable set of exclusion categories drawn from a fixed vocabulary.

    Unknown names are rejected when the set is built, before any request is
    made. Iteration and str() are sorted so output is stable.
    """

    def __init__(
        self,
        values: Optional[Iterable[str]] = None,
        *,
        allowed: Iterable[str] = EXCLUDABLE_DATA_TYPES,
    ) -> None:
        self._allowed: FrozenSet[str] = frozenset(allowed)
        accepted = set()
        for value in values or ():
            if value not in self._allowed:
                raise InvalidExclusionError(value, self._allowed)
            accepted.add(value)
        self._values: FrozenSet[str] = frozenset(accepted)

    @classmethod
    def from_values(cls, values: Optional[Iterable[str]]) -> "ExclusionSet":
        return cls(values)

    def allowed(self) -> List[str]:
        return sorted(self._allowed)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExclusionSet):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._values)

    def __str__(self) -> str:
        return ", ".join(self)

    def __repr__(self) -> str:
        return f"ExclusionSet({sorted(self._values)!r})"
