"""Pytest configuration for keypath_lib tests.

Puts the repo root on sys.path so `tests.helpers` and the package import
without PYTHONPATH, and provides shared document fixtures.
"""
import copy
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def avatar_doc():
    from tests.helpers import AVATAR_DOC
    return copy.deepcopy(AVATAR_DOC)
