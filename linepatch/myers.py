"""Myers' O(ND) difference algorithm over arbitrary sequences."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Sequence


class DiffKind(enum.Enum):
    """The kind of an edit range."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


@dataclass
class DiffRange:
    """A run of equal, deleted or inserted items.

    ``old[old_start:old_end]`` is the part of the original sequence the range
    covers and ``new[new_start:new_end]`` the part of the modified one. An
    insertion covers nothing of the original and a deletion nothing of the
    modified sequence.
    """

    kind: DiffKind
    old: Sequence[Any]
    old_start: int
    old_end: int
    new: Sequence[Any]
    new_start: int
    new_end: int

    def old_slice(self) -> Sequence[Any]:
        """The items of the original sequence covered by this range."""
        return self.old[self.old_start:self.old_end]

    def new_slice(self) -> Sequence[Any]:
        """The items of the modified sequence covered by this range."""
        return self.new[self.new_start:self.new_end]

    def __len__(self) -> int:
        if self.kind is DiffKind.INSERT:
            return self.new_end - self.new_start
        return self.old_end - self.old_start

    def is_empty(self) -> bool:
        """Whether the range covers no items."""
        return len(self) == 0


def _max_d(len1: int, len2: int) -> int:
    return (len1 + len2 + 1) // 2 + 1


def _common_prefix(a: Sequence[Any], a_lo: int, a_hi: int,
                   b: Sequence[Any], b_lo: int, b_hi: int) -> int:
    count = 0
    while a_lo + count < a_hi and b_lo + count < b_hi and a[a_lo + count] == b[b_lo + count]:
        count += 1
    return count


def _common_suffix(a: Sequence[Any], a_lo: int, a_hi: int,
                   b: Sequence[Any], b_lo: int, b_hi: int) -> int:
    count = 0
    while (a_hi - count > a_lo and b_hi - count > b_lo
           and a[a_hi - count - 1] == b[b_hi - count - 1]):
        count += 1
    return count


class _Solver:
    """Divide-and-conquer driver sharing the furthest-reaching path arrays."""

    def __init__(self, old: Sequence[Any], new: Sequence[Any]) -> None:
        self.old = old
        self.new = new
        self.offset = _max_d(len(old), len(new))
        # vf: furthest x values searching forward, vb: searching backward
        self.vf = [0] * (2 * self.offset)
        self.vb = [0] * (2 * self.offset)
        self.solution: list[DiffRange] = []

    def _range(self, kind: DiffKind, olo: int, ohi: int, nlo: int, nhi: int) -> DiffRange:
        return DiffRange(kind, self.old, olo, ohi, self.new, nlo, nhi)

    def middle_snake(self, olo: int, ohi: int, nlo: int, nhi: int) -> tuple[int, int]:
        """Return the start of the middle snake, relative to the given ranges."""
        old, new = self.old, self.new
        vf, vb, off = self.vf, self.vb, self.offset
        n = ohi - olo
        m = nhi - nlo
        delta = n - m
        odd = delta & 1 == 1

        vf[off + 1] = 0
        vb[off + 1] = 0

        for d in range(_max_d(n, m)):
            for k in range(d, -d - 1, -2):
                if k == -d or (k != d and vf[off + k - 1] < vf[off + k + 1]):
                    x = vf[off + k + 1]
                else:
                    x = vf[off + k - 1] + 1
                y = x - k
                x0, y0 = x, y
                if x <= n and 0 <= y <= m:
                    advance = _common_prefix(old, olo + x, ohi, new, nlo + y, nhi)
                    x += advance
                    y += advance
                vf[off + k] = x
                if odd and abs(k - delta) <= d - 1:
                    if vf[off + k] + vb[off - (k - delta)] >= n:
                        return x0, y0

            for k in range(d, -d - 1, -2):
                if k == -d or (k != d and vb[off + k - 1] < vb[off + k + 1]):
                    x = vb[off + k + 1]
                else:
                    x = vb[off + k - 1] + 1
                y = x - k
                if x < n and 0 <= y < m:
                    advance = _common_suffix(old, olo, olo + n - x, new, nlo, nlo + m - y)
                    x += advance
                    y += advance
                vb[off + k] = x
                if not odd and abs(k - delta) <= d:
                    if vb[off + k] + vf[off - (k - delta)] >= n:
                        return n - x, m - y

        raise RuntimeError("unable to find a middle snake")

    def conquer(self, olo: int, ohi: int, nlo: int, nhi: int) -> None:
        prefix = _common_prefix(self.old, olo, ohi, self.new, nlo, nhi)
        if prefix:
            self.solution.append(
                self._range(DiffKind.EQUAL, olo, olo + prefix, nlo, nlo + prefix))
        olo += prefix
        nlo += prefix

        suffix = _common_suffix(self.old, olo, ohi, self.new, nlo, nhi)
        suffix_range = self._range(DiffKind.EQUAL, ohi - suffix, ohi, nhi - suffix, nhi)
        ohi -= suffix
        nhi -= suffix

        old_empty = olo == ohi
        new_empty = nlo == nhi
        if old_empty and new_empty:
            pass
        elif old_empty:
            self.solution.append(self._range(DiffKind.INSERT, olo, olo, nlo, nhi))
        elif new_empty:
            self.solution.append(self._range(DiffKind.DELETE, olo, ohi, nlo, nlo))
        else:
            x, y = self.middle_snake(olo, ohi, nlo, nhi)
            self.conquer(olo, olo + x, nlo, nlo + y)
            self.conquer(olo + x, ohi, nlo + y, nhi)

        if suffix:
            self.solution.append(suffix_range)


def diff(old: Sequence[Any], new: Sequence[Any]) -> list[DiffRange]:
    """Compute a shortest edit script turning ``old`` into ``new``."""
    solver = _Solver(old, new)
    solver.conquer(0, len(old), 0, len(new))
    return solver.solution