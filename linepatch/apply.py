"""Applying patches to texts, with fuzzy matching of context lines."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union

from linepatch.diff import Hunk, Line, LineKind, Patch, split_lines

Text = Union[str, bytes]

_THRESHOLD = 0.8


class ApplyError(Exception):
    """Raised when a hunk of a patch cannot be applied."""

    def __init__(self, hunk_index: int, detail: str) -> None:
        super().__init__(hunk_index, detail)
        self.hunk_index = hunk_index
        self.detail = detail

    def __str__(self) -> str:
        return f"error applying hunk #{self.hunk_index}: {self.detail}"


@dataclass
class FuzzyConfig:
    """How loosely context lines may match the text being patched."""

    max_fuzz: int = 2
    ignore_whitespace: bool = False
    ignore_case: bool = False


def levenshtein(a: Sequence, b: Sequence) -> int:
    """Edit distance between two sequences (characters of a string, say)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, item_a in enumerate(a, start=1):
        current = [i]
        for j, item_b in enumerate(b, start=1):
            cost = 0 if item_a == item_b else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def _str_similarity(s1: str, s2: str, config: FuzzyConfig) -> float:
    if config.ignore_case:
        s1, s2 = s1.lower(), s2.lower()
    if config.ignore_whitespace:
        s1 = "".join(c for c in s1 if not c.isspace())
        s2 = "".join(c for c in s2 if not c.isspace())
    if s1 == s2:
        return 1.0
    max_len = max(len(s1.encode("utf-8")), len(s2.encode("utf-8")))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein(s1, s2) / max_len


def similarity(a: Text, b: Text, config: Optional[FuzzyConfig] = None) -> float:
    """A score in [0, 1] of how alike two lines are; 1.0 means equal.

    Byte strings are compared as UTF-8 text when both decode, and exactly
    otherwise.
    """
    config = config if config is not None else FuzzyConfig()
    if isinstance(a, (bytes, bytearray)) or isinstance(b, (bytes, bytearray)):
        try:
            s1 = bytes(a).decode("utf-8")
            s2 = bytes(b).decode("utf-8")
        except (UnicodeDecodeError, TypeError):
            return 1.0 if a == b else 0.0
        return _str_similarity(s1, s2, config)
    return _str_similarity(a, b, config)


def fuzzy_eq(a: Text, b: Text, config: Optional[FuzzyConfig] = None) -> bool:
    """Whether two lines are alike enough to count as the same."""
    return similarity(a, b, config) > _THRESHOLD


@dataclass
class _ImageLine:
    content: Text
    patched: bool = False


def _pre_image(lines: Sequence[Line]) -> list[Text]:
    return [line.content for line in lines if line.kind is not LineKind.INSERT]


def _post_image(lines: Sequence[Line]) -> list[Text]:
    return [line.content for line in lines if line.kind is not LineKind.DELETE]


def _candidates(start: int, length: int) -> Iterator[int]:
    """Yield ``start`` then positions alternately before and after it."""
    yield start
    backward = range(start - 1, -1, -1)
    forward = range(start + 1, length)
    for before, after in itertools.zip_longest(backward, forward):
        if before is not None:
            yield before
        if after is not None:
            yield after


def _start_position(image: list[_ImageLine], hunk: Hunk) -> int:
    return min(max(hunk.new_range.start - 1, 0), len(image))


def _window(image: list[_ImageLine], pos: int, size: int) -> Optional[list[_ImageLine]]:
    if pos + size > len(image):
        return None
    window = image[pos:pos + size]
    if any(entry.patched for entry in window):
        return None
    return window


def _match_exact(image: list[_ImageLine], lines: Sequence[Line], pos: int) -> bool:
    pre = _pre_image(lines)
    window = _window(image, pos, len(pre))
    if window is None:
        return False
    return all(entry.content == text for entry, text in zip(window, pre))


def _all_similar(pre: Sequence[Text], actual: Sequence[Text], ignored: Sequence[int],
                 config: FuzzyConfig) -> bool:
    return all(
        similarity(expected, found, config) >= _THRESHOLD
        for i, (expected, found) in enumerate(zip(pre, actual))
        if i not in ignored
    )


def _match_fuzzy(image: list[_ImageLine], lines: Sequence[Line], pos: int,
                 fuzz_level: int, config: FuzzyConfig) -> bool:
    pre = _pre_image(lines)
    window = _window(image, pos, len(pre))
    if window is None:
        return False
    actual = [entry.content for entry in window]

    context_indices = [
        i for i, line in enumerate(line for line in lines if line.kind is not LineKind.INSERT)
        if line.kind is LineKind.CONTEXT
    ]

    if len(context_indices) < fuzz_level:
        return _all_similar(pre, actual, (), config)

    combos = itertools.chain.from_iterable(
        itertools.combinations(context_indices, size)
        for size in range(min(fuzz_level, len(context_indices)) + 1)
    )
    return any(_all_similar(pre, actual, ignored, config) for ignored in combos)


def _find_position(image: list[_ImageLine], hunk: Hunk,
                   config: FuzzyConfig) -> Optional[tuple[int, int]]:
    start = _start_position(image, hunk)
    for pos in _candidates(start, len(image)):
        if _match_exact(image, hunk.lines, pos):
            return pos, 0
    for fuzz_level in range(1, config.max_fuzz + 1):
        for pos in _candidates(start, len(image)):
            if _match_fuzzy(image, hunk.lines, pos, fuzz_level, config):
                return pos, fuzz_level
    return None


def _apply_preserving_context(image: list[_ImageLine], hunk: Hunk, pos: int) -> None:
    offset = 0
    for line in hunk.lines:
        if line.kind is LineKind.CONTEXT:
            if pos + offset < len(image):
                image[pos + offset].patched = True
            offset += 1
        elif line.kind is LineKind.DELETE:
            del image[pos + offset]
        else:
            image.insert(pos + offset, _ImageLine(line.content, True))
            offset += 1


def _apply_hunk(image: list[_ImageLine], hunk: Hunk, config: FuzzyConfig) -> bool:
    found = _find_position(image, hunk, config)
    if found is None:
        return False
    pos, fuzz_level = found
    if fuzz_level == 0:
        size = len(_pre_image(hunk.lines))
        image[pos:pos + size] = [_ImageLine(text, True) for text in _post_image(hunk.lines)]
    else:
        _apply_preserving_context(image, hunk, pos)
    return True


def _apply(base_image: Text, patch: Patch, config: FuzzyConfig) -> list[Text]:
    image = [_ImageLine(line) for line in split_lines(base_image)]
    for index, hunk in enumerate(patch.hunks, start=1):
        if not _apply_hunk(image, hunk, config):
            raise ApplyError(index, repr(hunk))
    return [entry.content for entry in image]


def apply_with_config(base_image: str, patch: Patch, config: FuzzyConfig) -> str:
    """Apply ``patch`` to a text using the given fuzzy matching settings."""
    if not isinstance(base_image, str):
        raise TypeError("apply expects a str base image")
    return "".join(_apply(base_image, patch, config))


def apply(base_image: str, patch: Patch) -> str:
    """Apply ``patch`` to a text with default fuzzy matching."""
    return apply_with_config(base_image, patch, FuzzyConfig())


def apply_bytes_with_config(base_image: bytes, patch: Patch, config: FuzzyConfig) -> bytes:
    """Apply ``patch`` to a byte string using the given fuzzy matching settings."""
    if not isinstance(base_image, (bytes, bytearray)):
        raise TypeError("apply_bytes expects a bytes base image")
    return b"".join(_apply(bytes(base_image), patch, config))


def apply_bytes(base_image: bytes, patch: Patch) -> bytes:
    """Apply ``patch`` to a byte string with default fuzzy matching."""
    return apply_bytes_with_config(base_image, patch, FuzzyConfig())