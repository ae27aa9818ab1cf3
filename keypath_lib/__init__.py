"""Read and write nested document fields through flat key paths."""

from .errors import (
    EmptyKeyPath,
    InvalidValue,
    KeyAbsent,
    KeyPathError,
    NullValue,
    TypeMismatch,
)
from .containers import (
    DictDecodingContainer,
    DictEncodingContainer,
    KeyedDecodingContainer,
    KeyedEncodingContainer,
)
from .keypath import (
    ContainerCache,
    coding_string_path,
    read,
    read_key,
    read_key_optional,
    read_optional,
    write,
)
from .documents import dump_document, load_document, new_document
from .records import FieldPath, RecordCodec
from .config import CodecSettings, load_settings

__all__ = [
    "KeyPathError",
    "EmptyKeyPath",
    "KeyAbsent",
    "NullValue",
    "TypeMismatch",
    "InvalidValue",
    "KeyedDecodingContainer",
    "KeyedEncodingContainer",
    "DictDecodingContainer",
    "DictEncodingContainer",
    "ContainerCache",
    "coding_string_path",
    "read",
    "read_optional",
    "read_key",
    "read_key_optional",
    "write",
    "load_document",
    "dump_document",
    "new_document",
    "FieldPath",
    "RecordCodec",
    "CodecSettings",
    "load_settings",
]
