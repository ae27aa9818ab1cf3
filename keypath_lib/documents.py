"""Document serializers and root container helpers.

Serializers are symmetric: `dump` -> bytes, `load` <- bytes. A loaded
document must be a mapping at the top level so it can be wrapped in a
root keyed container.
"""
from typing import Any, Dict, Mapping, Protocol, Tuple, Union
import json
import yaml

from keypath_lib.containers.dict_container import DictDecodingContainer, DictEncodingContainer
from keypath_lib.errors import InvalidValue, TypeMismatch


class Serializer(Protocol):
    """Serialize/deserialize plain Python values to bytes."""

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text)."""

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text). Loading uses `yaml.safe_load`."""

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


_SERIALIZERS: Dict[str, type] = {
    "json": JSONSerializer,
    "yaml": YAMLSerializer,
    "yml": YAMLSerializer,
}


def get_serializer(name: str) -> Serializer:
    try:
        return _SERIALIZERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown document format {name!r}") from None


def _as_bytes(data: Union[bytes, str]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def load_document(data: Union[bytes, str], fmt: str = "json") -> DictDecodingContainer:
    """Parse `data` and return the root read container.

    An empty YAML document reads as an empty mapping.
    """
    value = get_serializer(fmt).load(_as_bytes(data))
    if value is None and fmt.lower() != "json":
        value = {}
    if not isinstance(value, Mapping):
        raise TypeMismatch("<root>", dict, detail=f"document is a {type(value).__name__}")
    return DictDecodingContainer(value)


def new_document() -> DictEncodingContainer:
    return DictEncodingContainer({})


def _check_json_keys(value: Any, path: Tuple[Any, ...] = ()) -> None:
    # JSON object keys must be str to read back at the same key path
    if isinstance(value, Mapping):
        for k, v in value.items():
            if not isinstance(k, str):
                raise InvalidValue(k, value, detail="JSON object keys must be str", coding_path=path)
            _check_json_keys(v, path + (k,))
    elif isinstance(value, list):
        for i, v in enumerate(value):
            _check_json_keys(v, path + (i,))


def dump_document(container: DictEncodingContainer, fmt: str = "json") -> bytes:
    """Serialize the document under `container`.

    JSON needs `str` object keys to round-trip, so any other key type raises
    `InvalidValue` instead of being stringified.
    """
    serializer = get_serializer(fmt)
    if isinstance(serializer, JSONSerializer):
        _check_json_keys(container.data)
    return serializer.dump(container.data)
