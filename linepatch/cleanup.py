"""Post-processing that slides and merges edits into fewer blocks."""

from __future__ import annotations

from typing import Any, Iterable

from linepatch.myers import DiffKind, DiffRange


def _prefix_len(a: Iterable[Any], b: Iterable[Any]) -> int:
    count = 0
    for x, y in zip(a, b):
        if x != y:
            break
        count += 1
    return count


def _suffix_len(a: Any, b: Any) -> int:
    return _prefix_len(reversed(a), reversed(b))


def _move(rng: DiffRange, start_delta: int, end_delta: int) -> None:
    if rng.kind is not DiffKind.INSERT:
        rng.old_start += start_delta
        rng.old_end += end_delta
    if rng.kind is not DiffKind.DELETE:
        rng.new_start += start_delta
        rng.new_end += end_delta


def _shift_up(rng: DiffRange, n: int) -> None:
    _move(rng, -n, -n)


def _shift_down(rng: DiffRange, n: int) -> None:
    _move(rng, n, n)


def _grow_up(rng: DiffRange, n: int) -> None:
    _move(rng, -n, 0)


def _grow_down(rng: DiffRange, n: int) -> None:
    _move(rng, 0, n)


def _shrink_front(rng: DiffRange, n: int) -> None:
    _move(rng, n, 0)


def _shrink_back(rng: DiffRange, n: int) -> None:
    _move(rng, 0, -n)


def _is_edit_pair(a: DiffRange, b: DiffRange) -> bool:
    return {a.kind, b.kind} == {DiffKind.INSERT, DiffKind.DELETE}


def _equal_range(old: Any, old_start: int, new: Any, new_start: int, n: int) -> DiffRange:
    return DiffRange(DiffKind.EQUAL, old, old_start, old_start + n, new, new_start, new_start + n)


def _shift_diff_up(diffs: list[DiffRange], pointer: int) -> int:
    while pointer >= 1:
        this = diffs[pointer]
        prev = diffs[pointer - 1]

        if prev.kind is DiffKind.EQUAL and this.kind in (DiffKind.INSERT, DiffKind.DELETE):
            if this.kind is DiffKind.INSERT:
                suffix = _suffix_len(this.new_slice(), prev.old_slice())
                new_equal = _equal_range(prev.old, prev.old_end - suffix,
                                         this.new, this.new_end - suffix, suffix)
            else:
                suffix = _suffix_len(this.old_slice(), prev.new_slice())
                new_equal = _equal_range(this.old, this.old_end - suffix,
                                         prev.new, prev.new_end - suffix, suffix)

            if suffix:
                following = diffs[pointer + 1] if pointer + 1 < len(diffs) else None
                if following is not None and following.kind is DiffKind.EQUAL:
                    _grow_up(following, suffix)
                else:
                    diffs.insert(pointer + 1, new_equal)
                _shift_up(diffs[pointer], suffix)
                _shrink_back(diffs[pointer - 1], suffix)
                if diffs[pointer - 1].is_empty():
                    del diffs[pointer - 1]
                    pointer -= 1
            elif prev.is_empty():
                del diffs[pointer - 1]
                pointer -= 1
            else:
                break
        elif _is_edit_pair(this, prev):
            diffs[pointer - 1], diffs[pointer] = this, prev
            pointer -= 1
        elif this.kind is prev.kind and this.kind is not DiffKind.EQUAL:
            _grow_down(prev, len(this))
            del diffs[pointer]
            pointer -= 1
        else:
            raise ValueError("range to shift must be either Insert or Delete")

    return pointer


def _shift_diff_down(diffs: list[DiffRange], pointer: int) -> int:
    while pointer + 1 < len(diffs):
        this = diffs[pointer]
        following = diffs[pointer + 1]

        if following.kind is DiffKind.EQUAL and this.kind in (DiffKind.INSERT, DiffKind.DELETE):
            if this.kind is DiffKind.INSERT:
                prefix = _prefix_len(this.new_slice(), following.old_slice())
                new_equal = _equal_range(following.old, following.old_start,
                                         this.new, this.new_start, prefix)
            else:
                prefix = _prefix_len(this.old_slice(), following.new_slice())
                new_equal = _equal_range(this.old, this.old_start,
                                         following.new, following.new_start, prefix)

            if prefix:
                if pointer >= 1 and diffs[pointer - 1].kind is DiffKind.EQUAL:
                    _grow_down(diffs[pointer - 1], prefix)
                else:
                    diffs.insert(pointer, new_equal)
                    pointer += 1
                _shift_down(diffs[pointer], prefix)
                _shrink_front(diffs[pointer + 1], prefix)
                if diffs[pointer + 1].is_empty():
                    del diffs[pointer + 1]
            elif following.is_empty():
                del diffs[pointer + 1]
            else:
                break
        elif _is_edit_pair(this, following):
            diffs[pointer], diffs[pointer + 1] = following, this
            pointer += 1
        elif this.kind is following.kind and this.kind is not DiffKind.EQUAL:
            _grow_down(this, len(following))
            del diffs[pointer + 1]
        else:
            raise ValueError("range to shift must be either Insert or Delete")

    return pointer


def _compact_kind(diffs: list[DiffRange], kind: DiffKind) -> None:
    pointer = 0
    while pointer < len(diffs):
        if diffs[pointer].kind is kind:
            pointer = _shift_diff_up(diffs, pointer)
            pointer = _shift_diff_down(diffs, pointer)
        pointer += 1


def compact(diffs: list[DiffRange]) -> None:
    """Shift and merge edits in place so the diff has as few edit blocks as possible."""
    _compact_kind(diffs, DiffKind.DELETE)
    _compact_kind(diffs, DiffKind.INSERT)