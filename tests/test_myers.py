import pytest

from linepatch.myers import DiffKind, DiffRange, diff


def _summary(solution):
    return [(d.kind, d.old_slice(), d.new_slice()) for d in solution]


def _rebuild(seq_type_empty, solution):
    old = seq_type_empty
    new = seq_type_empty
    for d in solution:
        if d.kind is not DiffKind.INSERT:
            old = old + d.old_slice()
        if d.kind is not DiffKind.DELETE:
            new = new + d.new_slice()
    return old, new


def _edit_count(solution):
    return sum(len(d) for d in solution if d.kind is not DiffKind.EQUAL)


def test_find_middle_snake_case_runs_to_valid_script():
    solution = diff(b"ABCABBA", b"CBABAC")
    assert _rebuild(b"", solution) == (b"ABCABBA", b"CBABAC")
    assert _edit_count(solution) == 5


def test_identical_sequences():
    assert _summary(diff("abc", "abc")) == [(DiffKind.EQUAL, "abc", "abc")]


def test_empty_sequences():
    assert diff("", "") == []


def test_pure_insert():
    assert _summary(diff("", "abc")) == [(DiffKind.INSERT, "", "abc")]


def test_pure_delete():
    assert _summary(diff("abc", "")) == [(DiffKind.DELETE, "abc", "")]


def test_prefix_and_suffix_around_delete():
    assert _summary(diff("abXc", "abc")) == [
        (DiffKind.EQUAL, "ab", "ab"),
        (DiffKind.DELETE, "X", ""),
        (DiffKind.EQUAL, "c", "c"),
    ]


def test_common_prefix_then_insert():
    assert _summary(diff("1A ", "1A B A 2")) == [
        (DiffKind.EQUAL, "1A ", "1A "),
        (DiffKind.INSERT, "", "B A 2"),
    ]


@pytest.mark.parametrize(
    "old, new, distance",
    [
        ("ABCABBA", "CBABAC", 5),
        ("abgdef", "gh", 6),
        ("bat", "map", 4),
        ("abc", "def", 6),
        ("ACZBDZ", "ACBCBDEFD", 7),
    ],
)
def test_script_rebuilds_both_sides_with_minimal_edits(old, new, distance):
    solution = diff(old, new)
    assert _rebuild("", solution) == (old, new)
    assert _edit_count(solution) == distance


def test_equal_ranges_match_on_both_sides():
    solution = diff("the quick brown fox", "the quack brown fix")
    for d in solution:
        if d.kind is DiffKind.EQUAL:
            assert d.old_slice() == d.new_slice()


def test_unicode_compares_code_points():
    solution = diff("\u2603", "\u2604")
    assert all(d.kind is not DiffKind.EQUAL for d in solution)
    assert _rebuild("", solution) == ("\u2603", "\u2604")


def test_list_of_ints():
    old = [1, 2, 3, 4, 5]
    new = [1, 3, 4, 6, 5]
    solution = diff(old, new)
    assert _rebuild([], solution) == (old, new)
    assert _edit_count(solution) == 2


def test_diff_range_slices_and_emptiness():
    rng = DiffRange(DiffKind.EQUAL, "hello", 1, 3, "xello", 1, 3)
    assert rng.old_slice() == "el"
    assert rng.new_slice() == "el"
    assert len(rng) == 2
    assert rng.is_empty() is False

    insert = DiffRange(DiffKind.INSERT, "ab", 1, 1, "azb", 1, 2)
    assert insert.old_slice() == ""
    assert len(insert) == 1

    empty = DiffRange(DiffKind.DELETE, "ab", 1, 1, "ab", 1, 1)
    assert empty.is_empty() is True