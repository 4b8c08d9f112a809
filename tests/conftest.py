"""Pytest configuration"""

import os
import sys
from pathlib import Path

import pytest

# Keep the developer's environment out of Config
for _name in [k for k in os.environ if k.startswith("TAGHOOKS_")]:
    del os.environ[_name]

# Add the src path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taghooks.core.hooks import Hooks  # noqa: E402


@pytest.fixture()
def hooks():
    return Hooks()


@pytest.fixture()
def registry(hooks):
    return hooks.registry
