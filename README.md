# linepatch

Find the differences between two texts, write them as unified-format
patches, and apply those patches to a base text.

- Myers' diff algorithm, followed by a compaction pass that shifts and
  merges edit blocks so the result has fewer of them.
- Works on `str` and on `bytes` (which need not be valid UTF-8).
- Applying a patch searches outward from the line numbers a hunk states
  when they are wrong, and falls back to fuzzy matching when no exact
  position is found.

Everything works in memory: read your files yourself and pass their
contents in.

## Creating a patch

```python
from linepatch.diff import create_patch

original = "The Way of Kings\nWords of Radiance\n"
modified = "The Way of Kings\nWords of Radiance\nOathbringer\n"

patch = create_patch(original, modified)
print(patch, end="")
```

```console
--- original
+++ modified
@@ -1,2 +1,3 @@
 The Way of Kings
 Words of Radiance
+Oathbringer
```

Lines are split on `\n` only (see `linepatch.diff.split_lines`). A final
line without a newline is marked with `\ No newline at end of file`.

`DiffOptions` is a dataclass that controls how the patch is produced:

- `context_len`: context lines around each change (default 3)
- `original_filename` / `modified_filename`: names in the `---` and `+++`
  header lines (default `"original"` and `"modified"`; `None` leaves the
  line out)
- `compact`: whether to run the compaction pass (default `True`)

```python
from linepatch.diff import DiffOptions

options = DiffOptions(context_len=1,
                      original_filename="the old version",
                      modified_filename="the better version")
patch = options.create_patch(original, modified)
```

`create_patch` requires two `str` values; for byte strings use
`create_patch_bytes` (or `DiffOptions.create_patch_bytes`) and render the
result with `Patch.to_bytes()`. Passing the wrong type raises `TypeError`.

A `Patch` holds `original`, `modified` and a list of `Hunk` objects; each
hunk has an `old_range` and `new_range` (`HunkRange`) and a list of `Line`
values whose `kind` is a `LineKind` (`CONTEXT`, `DELETE`, `INSERT`).
`Patch.reverse()` returns the patch that undoes it, swapping insertions
and deletions and the two file names.

## Applying a patch

```python
from linepatch.apply import apply

assert apply(original, patch) == modified
```

Hunks are applied in order. Each is first looked for at its stated
position, then at positions alternately before and after it, until its
context and removed lines match exactly. If no exact match exists, the
search is repeated with fuzz levels 1 up to `max_fuzz`: at each level up to
that many context lines may be ignored, and the remaining lines need only a
similarity score of at least 0.8. A hunk placed by fuzzy matching keeps the
base text's own context lines.

```python
from linepatch.apply import FuzzyConfig, apply_with_config

config = FuzzyConfig(max_fuzz=2, ignore_whitespace=True, ignore_case=False)
result = apply_with_config(original, patch, config)
```

`apply_bytes` and `apply_bytes_with_config` do the same for `bytes`; lines
that are not valid UTF-8 are compared exactly. A hunk that cannot be placed
raises `ApplyError`, whose message reads `error applying hunk #N: ...` with
hunks counted from 1 (also available as `hunk_index`).

The scoring helpers are public too: `levenshtein(a, b)`,
`similarity(a, b, config)` (a value from 0.0 to 1.0, based on edit distance
over the longer line's UTF-8 length) and `fuzzy_eq(a, b, config)` (true when
the similarity is above 0.8).

## Lower-level pieces

- `linepatch.myers.diff(old, new)` returns the list of `DiffRange` edits
  between any two sequences; each range has a `kind` (`DiffKind`) and
  `old_slice()` / `new_slice()`.
- `linepatch.cleanup.compact(diffs)` shifts and merges such a list in place.
- `linepatch.diff.diff(original, modified)` diffs two sequences item by
  item (characters, for strings) and returns `(kind, items)` pairs.

## What it does not do

- It does not read patches: there is no parser for unified-format text, so
  patches to apply must be built with `create_patch` or assembled from
  `Patch`, `Hunk` and `Line` objects.
- There is no three-way merge and no coloured output.
- There is no command-line tool; it is a library only.