"""Map flat record fields onto nested key paths.

A `RecordCodec` holds a list of `FieldPath` declarations and reads or
writes all of them in one pass. Each pass gets its own `ContainerCache`,
so fields that share a prefix (``meta.avatar.id`` and ``meta.avatar.url``)
descend into the shared containers once and nothing leaks between
records.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel

from keypath_lib.config import CodecSettings
from keypath_lib.containers.interfaces import KeyedDecodingContainer, KeyedEncodingContainer
from keypath_lib.documents import dump_document, load_document, new_document
from keypath_lib.errors import EmptyKeyPath
from keypath_lib.keypath.cache import DEFAULT_SEPARATOR, ContainerCache
from keypath_lib.keypath.paths import as_key_path
from keypath_lib.keypath.reader import read, read_optional
from keypath_lib.keypath.writer import write

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class FieldPath:
    """One record field and the key path where it lives in the document."""

    name: str
    key_path: Tuple[Hashable, ...]
    type_: Any = Any
    required: bool = True

    def __post_init__(self) -> None:
        path = as_key_path(self.key_path)
        if not path:
            raise EmptyKeyPath()
        object.__setattr__(self, "key_path", path)


@dataclass
class RecordCodec:
    fields: List[FieldPath]
    use_cache: bool = True
    separator: str = DEFAULT_SEPARATOR
    document_format: str = "json"
    last_cache: Optional[ContainerCache] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.fields = list(self.fields)
        seen = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field name {f.name!r}")
            seen.add(f.name)

    @classmethod
    def from_settings(cls, fields: Iterable[FieldPath], settings: CodecSettings) -> "RecordCodec":
        return cls(
            list(fields),
            use_cache=settings.use_cache,
            separator=settings.path_separator,
            document_format=settings.document_format,
        )

    def _new_cache(self) -> Optional[ContainerCache]:
        cache = ContainerCache(self.separator) if self.use_cache else None
        self.last_cache = cache
        return cache

    def decode(self, container: KeyedDecodingContainer) -> Dict[str, Any]:
        """Read every declared field from `container`.

        Optional fields that are absent come back as None. Errors from
        required fields propagate and abort the whole record.
        """
        cache = self._new_cache()
        out: Dict[str, Any] = {}
        for f in self.fields:
            if f.required:
                out[f.name] = read(container, f.key_path, f.type_, cache)
            else:
                out[f.name] = read_optional(container, f.key_path, f.type_, cache)
        if cache is not None:
            logger.debug("Decoded %d fields (cache hits=%d misses=%d)", len(out), cache.hits, cache.misses)
        return out

    def decode_model(self, model_cls: Type[M], container: KeyedDecodingContainer) -> M:
        return model_cls.model_validate(self.decode(container))

    def encode(self, values: Union[Mapping[str, Any], BaseModel], container: Optional[KeyedEncodingContainer] = None) -> KeyedEncodingContainer:
        """Write every declared field found in `values` into `container`.

        Missing and None values are skipped without creating containers.
        """
        if isinstance(values, BaseModel):
            values = values.model_dump()
        target = container if container is not None else new_document()
        cache = self._new_cache()
        for f in self.fields:
            write(target, values.get(f.name), f.key_path, cache)
        if cache is not None:
            logger.debug("Encoded record (cache hits=%d misses=%d)", cache.hits, cache.misses)
        return target

    def loads(self, data: Union[bytes, str], fmt: Optional[str] = None) -> Dict[str, Any]:
        return self.decode(load_document(data, fmt or self.document_format))

    def dumps(self, values: Union[Mapping[str, Any], BaseModel], fmt: Optional[str] = None) -> bytes:
        return dump_document(self.encode(values), fmt or self.document_format)
