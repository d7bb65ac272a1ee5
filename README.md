# layerstate

Bookkeeping for layered filesystem snapshots, as used when building images
one layer at a time.

- `layerstate.layered_map.LayeredMap` keeps, for every layer, the files added
  (with their content hashes) and the files deleted. It can tell whether a
  file changed since the last layer, list the paths present in the image,
  and give a stable cache key for the newest layer.
- `layerstate.whiteouts` decides which deleted paths need a whiteout entry
  (`remove_obsolete_whiteouts`) and expands a symlink to itself plus its
  existing target (`files_with_links`).
- `layerstate.timing` adds up elapsed time per category, with a shared
  default run reachable through `start`, `stop`, `summary` and `to_json`.

## Installation

```
pip install .
```

## Layers

`LayeredMap` takes a hasher: any callable that maps a path to a string.
Optional `adds` and `deletes` arguments seed existing layers (a list of
`{path: hash}` mappings and a list of path collections).

```python
import hashlib
from layerstate.layered_map import LayeredMap

def sha256_of(path):
    with open(path, "rb") as fh:
        return hashlib.sha256(fh.read()).hexdigest()

layers = LayeredMap(sha256_of)
layers.snapshot()                    # open the first layer
if layers.check_file_change("/etc/hosts"):
    layers.add("/etc/hosts")         # reuses the hash computed above
layers.add_delete("/tmp/old")

print(layers.current_paths())        # {'/etc/hosts'}
print(layers.key())                  # sha256 hex digest of this layer's adds and deletes
```

- `snapshot()` folds the top layer into the image and opens a new, empty
  layer; the hash cache filled by `check_file_change` is reset.
- `check_file_change(path)` is true when the path is not in the image as of
  the last `snapshot()` or its hash differs. The time it spends is recorded
  under the category `"Hashing files"` of the default timing run.
- `current_paths()` is the set of paths in the image with the top layer
  applied.
- `key()` depends only on the top layer's contents, not on insertion order.
- `add` and `add_delete` raise `RuntimeError` if no layer has been opened.
  A hasher that fails makes `check_file_change` raise its error as is, and
  `add` raise `RuntimeError` naming the path.

## Whiteouts

```python
from layerstate.whiteouts import remove_obsolete_whiteouts, files_with_links

remove_obsolete_whiteouts({"/a", "/a/b", "/c/d"})   # ['/a', '/c/d']
files_with_links("/usr/bin/python3")                # [link, target] if it is a symlink to an existing path
```

`remove_obsolete_whiteouts` returns, sorted, the deleted paths whose parent
directory was not deleted too. `files_with_links` returns `[path]` for
anything that is not a symlink or whose target does not exist; a relative
target is resolved against the link's directory. It raises `OSError` if
`path` itself does not exist.

## Timing

```python
from layerstate import timing

t = timing.start("Hashing files")
...
timing.stop(t)
print(timing.summary())   # e.g. "Hashing files: 1.5ms\n"
print(timing.to_json())   # e.g. '{"Hashing files":1500000}'
```

`TimedRun(categories=None, clock=None)` makes a separate run; `clock`
returns nanoseconds and defaults to `time.monotonic_ns`. Categories are
listed in sorted order, and durations are written by `format_duration`
(`3s`, `1ms`, `1m30s`, `0s`, ...). The JSON holds nanosecond totals.

## What it does not do

The package keeps the books; it does not touch the filesystem beyond
`files_with_links`. It does not walk directory trees to find changed or
deleted files, does not hash files itself (the caller supplies the hasher),
and does not write layer tarballs or whiteout entries into archives.

## Tests

```
pip install .[test]
pytest
```