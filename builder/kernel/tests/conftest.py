"""
Kernel test configuration.

The `store` fixture issues predictable instance IDs: component_1, component_2, ...
"""

import itertools

import pytest

from builder.kernel.store import BuilderStore


@pytest.fixture
def store():
    counter = itertools.count(1)
    return BuilderStore(id_factory=lambda: f"component_{next(counter)}")
