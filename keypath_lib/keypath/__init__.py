"""Key-path traversal engine."""

from .cache import ContainerCache, coding_string_path
from .paths import as_key_path
from .reader import read, read_key, read_key_optional, read_optional
from .writer import write

__all__ = [
    "ContainerCache",
    "coding_string_path",
    "as_key_path",
    "read",
    "read_optional",
    "read_key",
    "read_key_optional",
    "write",
]
