"""Writing values at a key path.

Intermediate containers are created on the way down, so the writer has
no tolerant variant. A `None` value is skipped before any container is
touched, for one-key and multi-key paths alike.
"""
from __future__ import annotations
from typing import Any, Hashable, Optional, Sequence

from keypath_lib.containers.interfaces import KeyedEncodingContainer
from keypath_lib.errors import EmptyKeyPath
from keypath_lib.keypath.cache import ContainerCache
from keypath_lib.keypath.paths import as_key_path


def write(
    container: KeyedEncodingContainer,
    value: Any,
    key_path: Sequence[Hashable],
    cache: Optional[ContainerCache] = None,
) -> None:
    """Encode `value` at `key_path`, creating nested containers as needed.

    There is no rollback: values written by earlier calls stay in place
    when this one fails.

    Raises:
        EmptyKeyPath: `key_path` has no elements (checked even for None).
        TypeMismatch: an intermediate key already holds a non-container.
        InvalidValue: `value` cannot be represented by the container.
    """
    path = as_key_path(key_path)
    if not path:
        raise EmptyKeyPath(encoding=True)

    if value is None:
        return

    if len(path) == 1:
        container.encode(value, path[0])
        return

    if cache is None:
        nested = container.nested_container(path[0])
    else:
        nested = cache.resolve(container, path[0])
    write(nested, value, path[1:], cache)
