from typing import Any, Hashable, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class KeyedDecodingContainer(Protocol):
    """One nesting level of a document being read.

    Implementations should raise the errors from `keypath_lib.errors`:
    `KeyAbsent` for a missing key, `NullValue` for an explicit null and
    `TypeMismatch` for a value that cannot take the requested shape.
    """

    @property
    def coding_path(self) -> Tuple[Hashable, ...]: ...

    def contains(self, key: Hashable) -> bool: ...

    def decode(self, type_: Any, key: Hashable) -> Any: ...

    def decode_if_present(self, type_: Any, key: Hashable) -> Optional[Any]: ...

    def nested_container(self, key: Hashable) -> "KeyedDecodingContainer": ...


@runtime_checkable
class KeyedEncodingContainer(Protocol):
    """One nesting level of a document being written.

    `nested_container` is constructive: it returns the existing container
    at `key` when one is present and creates it otherwise.
    """

    @property
    def coding_path(self) -> Tuple[Hashable, ...]: ...

    def encode(self, value: Any, key: Hashable) -> None: ...

    def encode_nil(self, key: Hashable) -> None: ...

    def nested_container(self, key: Hashable) -> "KeyedEncodingContainer": ...
