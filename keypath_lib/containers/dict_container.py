"""Mapping-backed keyed containers.

These wrap an in-memory dict (as produced by the JSON/YAML serializers)
and expose it one nesting level at a time. Leaf conversion on read goes
through pydantic `TypeAdapter`; leaf values on write are reduced to
JSON-compatible primitives with `pydantic_core.to_jsonable_python`.
"""
from __future__ import annotations
from functools import lru_cache
from typing import Any, Hashable, List, Mapping, MutableMapping, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from keypath_lib.errors import InvalidValue, KeyAbsent, NullValue, TypeMismatch


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _convert(value: Any, type_: Any, key: Hashable, coding_path: Sequence[Hashable]) -> Any:
    if type_ is Any:
        return value
    try:
        return _adapter(type_).validate_python(value)
    except ValidationError as e:
        raise TypeMismatch(key, type_, detail=str(e), coding_path=coding_path) from e


class DictDecodingContainer:
    """Read-side container over one mapping level."""

    def __init__(self, data: Mapping, coding_path: Sequence[Hashable] = ()) -> None:
        if not isinstance(data, Mapping):
            raise TypeMismatch(
                coding_path[-1] if coding_path else "<root>", dict,
                detail=f"found {type(data).__name__} instead",
                coding_path=coding_path[:-1],
            )
        self._data = data
        self._coding_path: Tuple[Hashable, ...] = tuple(coding_path)

    @property
    def coding_path(self) -> Tuple[Hashable, ...]:
        return self._coding_path

    @property
    def data(self) -> Mapping:
        return self._data

    @property
    def all_keys(self) -> List[Hashable]:
        return list(self._data.keys())

    def contains(self, key: Hashable) -> bool:
        return key in self._data

    def decode(self, type_: Any, key: Hashable) -> Any:
        if key not in self._data:
            raise KeyAbsent(key, coding_path=self._coding_path)
        value = self._data[key]
        if value is None:
            raise NullValue(key, expected=type_, coding_path=self._coding_path)
        return _convert(value, type_, key, self._coding_path)

    def decode_if_present(self, type_: Any, key: Hashable) -> Optional[Any]:
        value = self._data.get(key)
        if value is None:
            return None
        return _convert(value, type_, key, self._coding_path)

    def nested_container(self, key: Hashable) -> "DictDecodingContainer":
        if key not in self._data:
            raise KeyAbsent(key, coding_path=self._coding_path)
        value = self._data[key]
        if value is None:
            raise NullValue(key, expected=dict, coding_path=self._coding_path)
        if not isinstance(value, Mapping):
            raise TypeMismatch(
                key, dict,
                detail=f"found {type(value).__name__} instead",
                coding_path=self._coding_path,
            )
        return DictDecodingContainer(value, self._coding_path + (key,))

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"DictDecodingContainer(path={self._coding_path!r}, keys={self.all_keys!r})"


class DictEncodingContainer:
    """Write-side container over one mapping level.

    The wrapped dict is mutated in place, so nested containers handed out
    by `nested_container` write straight into the parent's document.
    """

    def __init__(self, data: Optional[MutableMapping] = None, coding_path: Sequence[Hashable] = ()) -> None:
        self._data: MutableMapping = {} if data is None else data
        self._coding_path: Tuple[Hashable, ...] = tuple(coding_path)

    @property
    def coding_path(self) -> Tuple[Hashable, ...]:
        return self._coding_path

    @property
    def data(self) -> MutableMapping:
        return self._data

    def encode(self, value: Any, key: Hashable) -> None:
        try:
            self._data[key] = to_jsonable_python(value)
        except (PydanticSerializationError, ValueError) as e:
            raise InvalidValue(key, value, detail=str(e), coding_path=self._coding_path) from e

    def encode_nil(self, key: Hashable) -> None:
        self._data[key] = None

    def nested_container(self, key: Hashable) -> "DictEncodingContainer":
        existing = self._data.get(key)
        if existing is None:
            existing = {}
            self._data[key] = existing
        elif not isinstance(existing, MutableMapping):
            raise TypeMismatch(
                key, dict,
                detail=f"cannot nest a container over {type(existing).__name__}",
                coding_path=self._coding_path,
            )
        return DictEncodingContainer(existing, self._coding_path + (key,))

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"DictEncodingContainer(path={self._coding_path!r}, data={self._data!r})"
