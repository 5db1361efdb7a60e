"""Line-oriented diffs and the unified-format patches built from them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence, Union

from linepatch.cleanup import compact as _compact
from linepatch.myers import DiffKind, DiffRange
from linepatch.myers import diff as _myers_diff

Text = Union[str, bytes]

_NO_NEWLINE = "\\ No newline at end of file\n"


def split_lines(text: Text) -> list[Text]:
    """Split ``text`` into lines, each keeping its trailing ``\\n``.

    Only ``\\n`` ends a line; a final line without one is kept as it is.
    """
    if isinstance(text, bytearray):
        text = bytes(text)
    newline = b"\n" if isinstance(text, bytes) else "\n"
    lines: list[Text] = []
    start = 0
    while start < len(text):
        end = text.find(newline, start)
        if end == -1:
            lines.append(text[start:])
            break
        lines.append(text[start:end + 1])
        start = end + 1
    return lines


def _as(value: Text, kind: type) -> Text:
    """Convert ``value`` to ``kind`` (``str`` or ``bytes``)."""
    if kind is bytes:
        return value if isinstance(value, bytes) else value.encode("utf-8")
    return value if isinstance(value, str) else value.decode("utf-8", "replace")


class LineKind(enum.Enum):
    """The role of a line in a hunk; the value is its unified-format prefix."""

    CONTEXT = " "
    DELETE = "-"
    INSERT = "+"


_REVERSED_KIND = {
    LineKind.CONTEXT: LineKind.CONTEXT,
    LineKind.DELETE: LineKind.INSERT,
    LineKind.INSERT: LineKind.DELETE,
}


@dataclass(frozen=True)
class Line:
    """One line of a hunk together with its role."""

    kind: LineKind
    content: Text

    def _render(self, kind: type) -> Iterator[Text]:
        content = _as(self.content, kind)
        newline = _as("\n", kind)
        if self.kind is LineKind.CONTEXT and content == newline:
            yield newline
            return
        yield _as(self.kind.value, kind) + content
        if not content.endswith(newline):
            yield newline + _as(_NO_NEWLINE, kind)


@dataclass(frozen=True)
class HunkRange:
    """The span of lines a hunk covers in one of the two texts (1-based)."""

    start: int
    length: int

    def __str__(self) -> str:
        if self.length == 1:
            return str(self.start)
        return f"{self.start},{self.length}"


@dataclass
class Hunk:
    """A group of nearby changes together with their surrounding context."""

    old_range: HunkRange
    new_range: HunkRange
    function_context: Optional[Text] = None
    lines: list[Line] = field(default_factory=list)

    def _render(self, kind: type) -> Iterator[Text]:
        header = f"@@ -{self.old_range} +{self.new_range} @@"
        yield _as(header, kind)
        if self.function_context is not None:
            yield _as(" ", kind) + _as(self.function_context, kind)
        yield _as("\n", kind)
        for line in self.lines:
            yield from line._render(kind)

    def __str__(self) -> str:
        return "".join(self._render(str))


@dataclass
class Patch:
    """A set of hunks describing how to turn one text into another."""

    original: Optional[Text]
    modified: Optional[Text]
    hunks: list[Hunk] = field(default_factory=list)

    def _render(self, kind: type) -> Iterator[Text]:
        newline = _as("\n", kind)
        if self.original is not None:
            yield _as("--- ", kind) + _as(self.original, kind) + newline
        if self.modified is not None:
            yield _as("+++ ", kind) + _as(self.modified, kind) + newline
        for hunk in self.hunks:
            yield from hunk._render(kind)

    def __str__(self) -> str:
        return "".join(self._render(str))

    def to_bytes(self) -> bytes:
        """Render the patch in unified format as bytes."""
        return b"".join(self._render(bytes))

    def reverse(self) -> Patch:
        """Return the patch that undoes this one."""
        hunks = [
            Hunk(
                hunk.new_range,
                hunk.old_range,
                hunk.function_context,
                [Line(_REVERSED_KIND[line.kind], line.content) for line in hunk.lines],
            )
            for hunk in self.hunks
        ]
        return Patch(self.modified, self.original, hunks)


@dataclass
class _Edit:
    old_start: int
    old_end: int
    new_start: int
    new_end: int


def _edit_script(solution: Sequence[DiffRange]) -> list[_Edit]:
    idx_a = idx_b = 0
    script: list[_Edit] = []
    current: Optional[_Edit] = None
    for rng in solution:
        if rng.kind is DiffKind.EQUAL:
            idx_a += rng.old_end - rng.old_start
            idx_b += rng.new_end - rng.new_start
            if current is not None:
                script.append(current)
                current = None
        elif rng.kind is DiffKind.DELETE:
            size = len(rng)
            if current is None:
                current = _Edit(idx_a, idx_a + size, idx_b, idx_b)
            else:
                current.old_end += size
            idx_a += size
        else:
            size = len(rng)
            if current is None:
                current = _Edit(idx_a, idx_a, idx_b, idx_b + size)
            else:
                current.new_end += size
            idx_b += size
    if current is not None:
        script.append(current)
    return script


def _get(seq: Sequence[Any], lo: int, hi: int) -> Sequence[Any]:
    if 0 <= lo <= hi <= len(seq):
        return seq[lo:hi]
    return []


def _calc_end(context_len: int, len1: int, len2: int,
              end1: int, end2: int) -> tuple[int, int]:
    post = min(context_len, max(len1 - end1, 0), max(len2 - end2, 0))
    return end1 + post, end2 + post


def _to_hunks(lines1: Sequence[Text], lines2: Sequence[Text],
              solution: Sequence[DiffRange], context_len: int) -> list[Hunk]:
    script = _edit_script(solution)
    hunks: list[Hunk] = []
    idx = 0
    while idx < len(script):
        edit = script[idx]
        start1 = max(edit.old_start - context_len, 0)
        start2 = max(edit.new_start - context_len, 0)
        end1, end2 = _calc_end(context_len, len(lines1), len(lines2),
                               edit.old_end, edit.new_end)

        lines = [Line(LineKind.CONTEXT, text)
                 for text in _get(lines2, start2, edit.new_start)]

        while True:
            lines.extend(Line(LineKind.DELETE, text)
                         for text in _get(lines1, edit.old_start, edit.old_end))
            lines.extend(Line(LineKind.INSERT, text)
                         for text in _get(lines2, edit.new_start, edit.new_end))

            if idx + 1 < len(script):
                following = script[idx + 1]
                start1_next = max(min(following.old_start, len(lines1) - 1) - context_len, 0)
                if start1_next < end1:
                    between = zip(range(edit.old_end, following.old_start),
                                  range(edit.new_end, following.new_start))
                    lines.extend(Line(LineKind.CONTEXT, lines2[i2])
                                 for _, i2 in between if i2 < len(lines2))
                    end1, end2 = _calc_end(context_len, len(lines1), len(lines2),
                                           following.old_end, following.new_end)
                    edit = following
                    idx += 1
                    continue
            break

        lines.extend(Line(LineKind.CONTEXT, text)
                     for text in _get(lines2, edit.new_end, end2))

        len1 = end1 - start1
        len2 = end2 - start2
        old_range = HunkRange(start1 + 1 if len1 > 0 else start1, len1)
        new_range = HunkRange(start2 + 1 if len2 > 0 else start2, len2)
        hunks.append(Hunk(old_range, new_range, None, lines))
        idx += 1
    return hunks


def _range_text(rng: DiffRange) -> Sequence[Any]:
    return rng.new_slice() if rng.kind is DiffKind.INSERT else rng.old_slice()


@dataclass
class DiffOptions:
    """Settings controlling how a diff or patch is produced."""

    compact: bool = True
    context_len: int = 3
    original_filename: Optional[str] = "original"
    modified_filename: Optional[str] = "modified"

    def diff_slice(self, old: Sequence[Any], new: Sequence[Any]) -> list[DiffRange]:
        """Diff two sequences item by item."""
        solution = _myers_diff(old, new)
        if self.compact:
            _compact(solution)
        return solution

    def diff(self, original: Sequence[Any], modified: Sequence[Any]) -> list[tuple[DiffKind, Any]]:
        """Diff two sequences, returning ``(kind, items)`` pairs."""
        return [(rng.kind, _range_text(rng)) for rng in self.diff_slice(original, modified)]

    def _build(self, original: Text, modified: Text, kind: type) -> Patch:
        ids: dict[Text, int] = {}
        old_lines = split_lines(original)
        old_ids = [ids.setdefault(line, len(ids)) for line in old_lines]
        new_lines = split_lines(modified)
        new_ids = [ids.setdefault(line, len(ids)) for line in new_lines]

        solution = self.diff_slice(old_ids, new_ids)
        hunks = _to_hunks(old_lines, new_lines, solution, self.context_len)

        def name(value: Optional[str]) -> Optional[Text]:
            return None if value is None else _as(value, kind)

        return Patch(name(self.original_filename), name(self.modified_filename), hunks)

    def create_patch(self, original: str, modified: str) -> Patch:
        """Produce a patch between two texts."""
        if not isinstance(original, str) or not isinstance(modified, str):
            raise TypeError("create_patch expects two str texts")
        return self._build(original, modified, str)

    def create_patch_bytes(self, original: bytes, modified: bytes) -> Patch:
        """Produce a patch between two byte strings, which need not be UTF-8."""
        if not isinstance(original, (bytes, bytearray)) or not isinstance(
                modified, (bytes, bytearray)):
            raise TypeError("create_patch_bytes expects two bytes texts")
        return self._build(bytes(original), bytes(modified), bytes)


def diff(original: Sequence[Any], modified: Sequence[Any]) -> list[tuple[DiffKind, Any]]:
    """Diff two sequences with default options."""
    return DiffOptions().diff(original, modified)


def create_patch(original: str, modified: str) -> Patch:
    """Create a patch between two texts with default options."""
    return DiffOptions().create_patch(original, modified)


def create_patch_bytes(original: bytes, modified: bytes) -> Patch:
    """Create a patch between two byte strings with default options."""
    return DiffOptions().create_patch_bytes(original, modified)