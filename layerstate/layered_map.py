"""Track files added and deleted across image layers."""

from __future__ import annotations

import hashlib
import json
from typing import Callable, Iterable, Mapping

from layerstate import timing

Hasher = Callable[[str], str]


def _encode(value: object) -> str:
    text = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escape in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(char, escape)
    return text + "\n"


class LayeredMap:
    """Layers of added files (with hashes) and deleted files over an image."""

    def __init__(
        self,
        hasher: Hasher,
        adds: Iterable[Mapping[str, str] | None] | None = None,
        deletes: Iterable[Iterable[str] | None] | None = None,
    ) -> None:
        self._hasher = hasher
        self._adds: list[dict[str, str]] = [dict(a or {}) for a in adds or ()]
        self._deletes: list[set[str]] = [set(d or ()) for d in deletes or ()]
        self._current_image: dict[str, str] = {}
        self._current_valid = False
        self._layer_hash_cache: dict[str, str] = {}

    def snapshot(self) -> None:
        """Fold the top layer into the current image and open a new layer."""
        self._update_current_image()
        self._adds.append({})
        self._deletes.append(set())
        self._layer_hash_cache = {}

    def key(self) -> str:
        """A SHA-256 hex digest of the top layer's adds and deletes."""
        if self._adds:
            adds: object = self._adds[-1]
            deletes: object = {path: {} for path in self._deletes[-1]} if self._deletes else None
        else:
            adds = deletes = None
        payload = _encode(adds) + _encode(deletes)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def _merged_image(self) -> dict[str, str]:
        if self._current_valid or not self._adds:
            return self._current_image
        current = dict(self._current_image)
        current.update(self._adds[-1])
        for path in self._deletes[-1] if self._deletes else ():
            current.pop(path, None)
        return current

    def _update_current_image(self) -> None:
        if self._current_valid:
            return
        self._current_image = self._merged_image()
        self._current_valid = True

    def current_paths(self) -> set[str]:
        """All paths present in the image including the top layer."""
        return set(self._merged_image())

    def _require_layer(self) -> None:
        if not self._adds or not self._deletes:
            raise RuntimeError("no layer to modify; call snapshot() first")

    def add_delete(self, path: str) -> None:
        """Record ``path`` as deleted in the top layer."""
        self._require_layer()
        self._current_valid = False
        self._deletes[-1].add(path)

    def add(self, path: str) -> None:
        """Record ``path`` with its hash as added in the top layer."""
        self._require_layer()
        self._current_valid = False
        digest = self._layer_hash_cache.get(path)
        if digest is None:
            try:
                digest = self._hasher(path)
            except Exception as err:
                raise RuntimeError(f"Error creating hash for {path}: {err}") from err
        self._adds[-1][path] = digest

    def check_file_change(self, path: str) -> bool:
        """Whether ``path`` is new or its hash differs from the current image."""
        timer = timing.start("Hashing files")
        try:
            digest = self._hasher(path)
            self._layer_hash_cache[path] = digest
            old = self._current_image.get(path)
            return old is None or old != digest
        finally:
            timing.stop(timer)