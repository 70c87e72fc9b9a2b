"""Directional kinds and the side-table that tracks them per type token."""

from enum import Enum

from schema_stats.config import TYPE_PREFIX


class PropKind(str, Enum):
    """How a type is used by the properties that reference it."""

    UNKNOWN = ""
    INPUT = "input"
    OUTPUT = "output"
    INPUT_OUTPUT = "input&output"


def join(a: PropKind, b: PropKind) -> PropKind:
    """Least upper bound of two kinds: unknown < input, output < input&output."""
    if a == PropKind.UNKNOWN:
        return b
    if b == PropKind.UNKNOWN or a == b:
        return a
    return PropKind.INPUT_OUTPUT


def strip_prefix(token: str) -> str:
    if token.startswith(TYPE_PREFIX):
        return token[len(TYPE_PREFIX):]
    return token


class KindTracker:
    """Records, for every referenced type token, whether it is an input, output or both.

    Tokens may be passed with or without the ``#/types/`` prefix. Kinds only
    ever move up the lattice, so repeated or reordered declarations give the
    same result.
    """

    def __init__(self):
        self._kinds: dict[str, PropKind] = {}

    def declare_input(self, token: str) -> None:
        self._declare(token, PropKind.INPUT)

    def declare_output(self, token: str) -> None:
        self._declare(token, PropKind.OUTPUT)

    def declare(self, token: str, kind: PropKind) -> None:
        """Declare ``token`` with an arbitrary kind; ``unknown`` is a no-op."""
        if kind != PropKind.UNKNOWN:
            self._declare(token, kind)

    def kind_of(self, token: str) -> PropKind:
        return self._kinds.get(strip_prefix(token), PropKind.UNKNOWN)

    def merge(self, other: "KindTracker") -> None:
        """Fold another tracker (e.g. from a separate partition) into this one."""
        for token, kind in other._kinds.items():
            self._declare(token, kind)

    def as_dict(self) -> dict[str, PropKind]:
        return {token: self._kinds[token] for token in sorted(self._kinds)}

    def _declare(self, token: str, kind: PropKind) -> None:
        token = strip_prefix(token)
        self._kinds[token] = join(self._kinds.get(token, PropKind.UNKNOWN), kind)

    def __contains__(self, token: str) -> bool:
        return strip_prefix(token) in self._kinds

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:
        return f"KindTracker({self.as_dict()!r})"
