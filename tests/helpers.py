from typing import Any, Hashable, List, Optional

from keypath_lib.containers.dict_container import DictDecodingContainer, DictEncodingContainer


class CountingDecodingContainer(DictDecodingContainer):
    """Read container that records every `nested_container` call.

    All containers handed out from one root share the same `calls` list, so
    a test can count how many nested resolutions a whole pass performed.
    """

    def __init__(self, data, coding_path=(), calls: Optional[List[tuple]] = None):
        super().__init__(data, coding_path)
        self.calls = calls if calls is not None else []

    def nested_container(self, key: Hashable) -> "CountingDecodingContainer":
        self.calls.append(self.coding_path + (key,))
        nested = super().nested_container(key)
        return CountingDecodingContainer(nested.data, nested.coding_path, self.calls)


class CountingEncodingContainer(DictEncodingContainer):
    def __init__(self, data=None, coding_path=(), calls: Optional[List[tuple]] = None):
        super().__init__(data, coding_path)
        self.calls = calls if calls is not None else []

    def nested_container(self, key: Hashable) -> "CountingEncodingContainer":
        self.calls.append(self.coding_path + (key,))
        nested = super().nested_container(key)
        return CountingEncodingContainer(nested.data, nested.coding_path, self.calls)


class UntouchableContainer:
    """Container that fails the test if any of its capabilities are used."""

    def __getattr__(self, name: str) -> Any:
        raise AssertionError(f"container was touched: {name}")


AVATAR_DOC = {"meta_info": {"avatar": {"id": 1, "url": "http://x/y.jpg"}}}
