from __future__ import annotations

import pytest

from tests.fakes import InMemoryRepository


@pytest.fixture()
def repo() -> InMemoryRepository:
    return InMemoryRepository()
