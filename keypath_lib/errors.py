"""Error taxonomy for key-path reads and writes.

Every error carries the coding path of the container that raised it so a
caller can tell where in the document a traversal stopped. The classes
also subclass the closest builtin exception, which lets callers that only
know about ``KeyError`` or ``TypeError`` keep working.
"""
from __future__ import annotations
from typing import Any, Optional, Sequence

DECODING_ERROR_DOMAIN = "DecodingErrorDomain"
ENCODING_ERROR_DOMAIN = "EncodingErrorDomain"

EMPTY_KEY_PATH_DECODE_CODE = 10001
EMPTY_KEY_PATH_ENCODE_CODE = 10002


class KeyPathError(Exception):
    """Base class for all key-path codec failures."""

    code: Optional[int] = None

    def __init__(
        self,
        message: str,
        *,
        debug_description: str = "",
        coding_path: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.debug_description = debug_description
        self.coding_path = tuple(coding_path)

    def __str__(self) -> str:
        if self.coding_path:
            path = ".".join(str(k) for k in self.coding_path)
            return f"{self.message} (at {path})"
        return self.message


class EmptyKeyPath(KeyPathError, ValueError):
    """Raised when a key path has no elements. Always a caller error."""

    def __init__(self, *, encoding: bool = False) -> None:
        super().__init__(
            "Array of keys is empty",
            debug_description="Expected non-empty array of keys",
        )
        self.domain = ENCODING_ERROR_DOMAIN if encoding else DECODING_ERROR_DOMAIN
        self.code = EMPTY_KEY_PATH_ENCODE_CODE if encoding else EMPTY_KEY_PATH_DECODE_CODE


class KeyAbsent(KeyPathError, KeyError):
    """Raised when a container has no entry for the requested key."""

    def __init__(self, key: Any, coding_path: Sequence[Any] = ()) -> None:
        super().__init__(
            f"No value associated with key {str(key)!r}",
            coding_path=coding_path,
        )
        self.key = key

    # KeyError.__str__ would repr() the message
    __str__ = KeyPathError.__str__


class NullValue(KeyPathError, LookupError):
    """Raised when the key exists but holds an explicit null."""

    def __init__(self, key: Any, expected: Any = None, coding_path: Sequence[Any] = ()) -> None:
        what = getattr(expected, "__name__", None) or str(expected or "value")
        super().__init__(
            f"Expected {what} for key {str(key)!r} but found null instead",
            coding_path=coding_path,
        )
        self.key = key
        self.expected = expected


class TypeMismatch(KeyPathError, TypeError):
    """Raised when a present value cannot be converted to the requested shape."""

    def __init__(self, key: Any, expected: Any, detail: str = "", coding_path: Sequence[Any] = ()) -> None:
        what = getattr(expected, "__name__", None) or str(expected)
        super().__init__(
            f"Expected to decode {what} for key {str(key)!r}",
            debug_description=detail,
            coding_path=coding_path,
        )
        self.key = key
        self.expected = expected


class InvalidValue(KeyPathError, ValueError):
    """Raised when a value cannot be represented by the encoding container."""

    def __init__(self, key: Any, value: Any, detail: str = "", coding_path: Sequence[Any] = ()) -> None:
        super().__init__(
            f"Cannot encode {type(value).__name__} for key {str(key)!r}",
            debug_description=detail,
            coding_path=coding_path,
        )
        self.key = key
        self.value = value
