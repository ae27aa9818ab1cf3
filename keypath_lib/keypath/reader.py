"""Reading values at a key path.

Both variants recurse one level per key: the last key is read from the
current container, every earlier key selects the next nested container.
When a `ContainerCache` is supplied, each intermediate container is
resolved once per cache and reused by later reads sharing the prefix.
"""
from __future__ import annotations
from typing import Any, Hashable, Optional, Sequence

from keypath_lib.containers.interfaces import KeyedDecodingContainer
from keypath_lib.errors import EmptyKeyPath, KeyAbsent, NullValue, TypeMismatch
from keypath_lib.keypath.cache import ContainerCache
from keypath_lib.keypath.paths import as_key_path

# Failures that mean "this intermediate object is not there" for read_optional.
_ABSENT_CONTAINER_ERRORS = (KeyAbsent, NullValue, TypeMismatch)


def _nested(container: KeyedDecodingContainer, key: Hashable, cache: Optional[ContainerCache]) -> KeyedDecodingContainer:
    if cache is None:
        return container.nested_container(key)
    return cache.resolve(container, key)


def read_key(container: KeyedDecodingContainer, key: Hashable, type_: Any = Any) -> Any:
    return container.decode(type_, key)


def read_key_optional(container: KeyedDecodingContainer, key: Hashable, type_: Any = Any) -> Optional[Any]:
    return container.decode_if_present(type_, key)


def read(
    container: KeyedDecodingContainer,
    key_path: Sequence[Hashable],
    type_: Any = Any,
    cache: Optional[ContainerCache] = None,
) -> Any:
    """Decode the value of `type_` found at `key_path`.

    Raises:
        EmptyKeyPath: `key_path` has no elements.
        KeyAbsent: an intermediate or leaf key is missing.
        NullValue: the leaf, or an intermediate container, is null.
        TypeMismatch: a value cannot take the requested shape.
    """
    path = as_key_path(key_path)
    if not path:
        raise EmptyKeyPath()

    if len(path) == 1:
        return read_key(container, path[0], type_)

    nested = _nested(container, path[0], cache)
    return read(nested, path[1:], type_, cache)


def read_optional(
    container: KeyedDecodingContainer,
    key_path: Sequence[Hashable],
    type_: Any = Any,
    cache: Optional[ContainerCache] = None,
) -> Optional[Any]:
    """Decode the value at `key_path`, or return None if it is not there.

    A missing or null leaf, and any intermediate container that cannot be
    obtained, all read as None. A leaf that is present but cannot be
    converted to `type_` still raises `TypeMismatch`.

    Raises:
        EmptyKeyPath: `key_path` has no elements.
        TypeMismatch: the leaf value cannot be converted to `type_`.
    """
    path = as_key_path(key_path)
    if not path:
        raise EmptyKeyPath()

    if len(path) == 1:
        return read_key_optional(container, path[0], type_)

    try:
        nested = _nested(container, path[0], cache)
    except _ABSENT_CONTAINER_ERRORS:
        return None
    return read_optional(nested, path[1:], type_, cache)
