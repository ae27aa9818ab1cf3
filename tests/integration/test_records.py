import json
from typing import Optional

import pytest
from pydantic import BaseModel

from keypath_lib.config import CodecSettings
from keypath_lib.containers.dict_container import DictDecodingContainer
from keypath_lib.errors import EmptyKeyPath, KeyAbsent, TypeMismatch
from keypath_lib.records import FieldPath, RecordCodec
from tests.helpers import CountingDecodingContainer, CountingEncodingContainer


class Person(BaseModel):
    name: str
    avatar_id: int
    avatar_url: Optional[str] = None
    nickname: Optional[str] = None


PERSON_FIELDS = [
    FieldPath("name", ["name"], str),
    FieldPath("avatar_id", ["meta_info", "avatar", "id"], int),
    FieldPath("avatar_url", ["meta_info", "avatar", "url"], str, required=False),
    FieldPath("nickname", ["meta_info", "profile", "nickname"], str, required=False),
]

PERSON_DOC = {
    "name": "Ann",
    "meta_info": {"avatar": {"id": 1, "url": "http://x/y.jpg"}},
}


def test_field_path_validation():
    assert FieldPath("a", "single").key_path == ("single",)
    with pytest.raises(EmptyKeyPath):
        FieldPath("a", [])


def test_duplicate_field_names():
    with pytest.raises(ValueError):
        RecordCodec([FieldPath("a", ["x"]), FieldPath("a", ["y"])])


def test_decode_record():
    codec = RecordCodec(PERSON_FIELDS)
    out = codec.decode(DictDecodingContainer(PERSON_DOC))
    assert out == {
        "name": "Ann",
        "avatar_id": 1,
        "avatar_url": "http://x/y.jpg",
        "nickname": None,
    }


def test_decode_shares_prefix_resolution():
    root = CountingDecodingContainer(PERSON_DOC)
    codec = RecordCodec(PERSON_FIELDS)
    codec.decode(root)
    # meta_info and meta_info.avatar once each, plus the failed profile lookup
    assert root.calls == [("meta_info",), ("meta_info", "avatar"), ("meta_info", "profile")]
    assert ("meta_info", "avatar") in codec.last_cache


def test_each_pass_gets_a_fresh_cache():
    codec = RecordCodec(PERSON_FIELDS)
    codec.decode(DictDecodingContainer(PERSON_DOC))
    first = codec.last_cache
    other = {"name": "Bob", "meta_info": {"avatar": {"id": 2}}}
    assert codec.decode(DictDecodingContainer(other))["avatar_id"] == 2
    assert codec.last_cache is not first


def test_decode_without_cache():
    root = CountingDecodingContainer(PERSON_DOC)
    codec = RecordCodec(PERSON_FIELDS, use_cache=False)
    codec.decode(root)
    assert codec.last_cache is None
    assert len(root.calls) == 6


def test_required_field_errors_abort():
    codec = RecordCodec(PERSON_FIELDS)
    with pytest.raises(KeyAbsent):
        codec.decode(DictDecodingContainer({"name": "Ann"}))
    with pytest.raises(TypeMismatch):
        codec.decode(DictDecodingContainer({"name": "Ann", "meta_info": {"avatar": {"id": "x"}}}))


def test_decode_model():
    codec = RecordCodec(PERSON_FIELDS)
    person = codec.decode_model(Person, DictDecodingContainer(PERSON_DOC))
    assert person == Person(name="Ann", avatar_id=1, avatar_url="http://x/y.jpg")


def test_encode_record_skips_missing_values():
    codec = RecordCodec(PERSON_FIELDS)
    doc = CountingEncodingContainer()
    codec.encode({"name": "Ann", "avatar_id": 42, "nickname": None}, doc)
    assert doc.data == {"name": "Ann", "meta_info": {"avatar": {"id": 42}}}
    assert doc.calls == [("meta_info",), ("meta_info", "avatar")]


def test_encode_model_and_round_trip():
    codec = RecordCodec(PERSON_FIELDS)
    person = Person(name="Ann", avatar_id=1, avatar_url="http://x/y.jpg", nickname="A")
    data = codec.dumps(person)
    assert json.loads(data) == {
        "name": "Ann",
        "meta_info": {
            "avatar": {"id": 1, "url": "http://x/y.jpg"},
            "profile": {"nickname": "A"},
        },
    }
    assert codec.loads(data) == person.model_dump()


def test_yaml_round_trip():
    codec = RecordCodec(PERSON_FIELDS)
    data = codec.dumps({"name": "Ann", "avatar_id": 3}, "yaml")
    assert codec.loads(data, "yaml")["avatar_id"] == 3


def test_from_settings():
    settings = CodecSettings(path_separator="/", use_cache=True)
    codec = RecordCodec.from_settings(PERSON_FIELDS, settings)
    codec.decode(DictDecodingContainer(PERSON_DOC))
    assert "meta_info/avatar" in list(codec.last_cache.paths())


def test_from_settings_uses_document_format():
    settings = CodecSettings(document_format="yaml")
    codec = RecordCodec.from_settings(PERSON_FIELDS, settings)
    data = codec.dumps({"name": "Ann", "avatar_id": 3})
    assert data.startswith(b"name: Ann")
    assert codec.loads(data)["avatar_id"] == 3
    # an explicit format still wins
    assert json.loads(codec.dumps({"name": "Ann", "avatar_id": 3}, "json"))["name"] == "Ann"
