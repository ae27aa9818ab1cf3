"""Keyed container implementations used by the key-path engine."""

from .interfaces import KeyedDecodingContainer, KeyedEncodingContainer
from .dict_container import DictDecodingContainer, DictEncodingContainer

__all__ = [
    "KeyedDecodingContainer",
    "KeyedEncodingContainer",
    "DictDecodingContainer",
    "DictEncodingContainer",
]
