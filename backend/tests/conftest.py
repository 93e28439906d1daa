from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from graphboard.api.deps import get_storage
from graphboard.core.storage import GraphStorage
from graphboard.main import app


@pytest.fixture()
def storage(tmp_path: Path) -> GraphStorage:
    return GraphStorage(tmp_path / "graphs")


@pytest.fixture()
def client(storage: GraphStorage) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
