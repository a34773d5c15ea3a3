from collections.abc import Callable

import pytest
from harness import Harness, build_harness


@pytest.fixture
def make_harness() -> Callable[..., Harness]:
    return build_harness


@pytest.fixture
def harness() -> Harness:
    return build_harness()
