"""Per-operation cache of intermediate containers.

A `ContainerCache` lives for exactly one top-level encode or decode pass
and is threaded by reference through every recursive call of that pass.
Entries are keyed by the key tuple of the nested container (the parent's
coding path plus the key being descended into). The joined path string
is only used for logging and display, since different keys can share a
string form (``"a.b"`` and ``("a", "b")``, ``1`` and ``"1"``).
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Hashable, Iterable, Iterator, Mapping, Optional, Tuple

from keypath_lib.keypath.paths import as_key_path

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "."

CachePath = Tuple[Hashable, ...]


def coding_string_path(keys: Iterable[Hashable], separator: str = DEFAULT_SEPARATOR) -> str:
    """Join the human-readable form of each key into one display string."""
    return separator.join(str(k) for k in keys)


def _still_attached(parent: Any, key: Hashable, cached: Any) -> bool:
    # Containers exposing `data` can be checked against their parent; a
    # cached child whose mapping was replaced under `key` is stale.
    parent_data = getattr(parent, "data", None)
    child_data = getattr(cached, "data", None)
    if not isinstance(parent_data, Mapping) or child_data is None:
        return True
    return parent_data.get(key) is child_data


class ContainerCache:
    """Lookup/insert table from key-path tuple to container.

    No eviction and no locking: one instance per pass, never shared
    between threads or between unrelated records.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        self.separator = separator
        self._containers: Dict[CachePath, Any] = {}
        self.hits = 0
        self.misses = 0

    def path_for(self, container: Any, key: Hashable) -> CachePath:
        return tuple(container.coding_path) + (key,)

    def describe(self, path: CachePath) -> str:
        return coding_string_path(path, self.separator)

    def lookup(self, path: CachePath) -> Optional[Any]:
        return self._containers.get(as_key_path(path))

    def store(self, path: CachePath, container: Any) -> None:
        self._containers[as_key_path(path)] = container
        logger.debug("Cached container at %r (%d entries)", self.describe(path), len(self._containers))

    def resolve(self, container: Any, key: Hashable) -> Any:
        """Return the nested container for `key`, creating it at most once.

        A cached container that no longer backs `key` in its parent (the
        parent's value was overwritten later in the pass) is dropped and
        resolved again. Errors from `container.nested_container` propagate
        and leave no entry for `key`.
        """
        path = self.path_for(container, key)
        cached = self._containers.get(path)
        if cached is not None:
            if _still_attached(container, key, cached):
                self.hits += 1
                return cached
            logger.debug("Dropping stale container at %r", self.describe(path))
            del self._containers[path]
        self.misses += 1
        nested = container.nested_container(key)
        self.store(path, nested)
        return nested

    def clear(self) -> None:
        self._containers.clear()
        self.hits = 0
        self.misses = 0

    def keys(self) -> Iterator[CachePath]:
        return iter(self._containers)

    def paths(self) -> Iterator[str]:
        return (self.describe(p) for p in self._containers)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, bytes)) or not isinstance(path, Iterable):
            path = (path,)
        return tuple(path) in self._containers

    def __len__(self) -> int:
        return len(self._containers)

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"ContainerCache(entries={len(self)}, hits={self.hits}, misses={self.misses})"
