# tests/conftest.py
"""
Pytest configuration and shared fixtures for FlowSync tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import httpx
import pytest
from fastapi.testclient import TestClient

from flowsync.main import app
from flowsync.routers.process import get_process_file
from flowsync.services.persistence_client import PersistenceClient


SEED_DOCUMENT: Dict[str, Any] = {
    "nodes": [
        {"id": "1", "type": "default", "position": {"x": 0, "y": 0}, "data": {}},
    ],
    "nodeTypes": {},
    "edges": [],
    "edgeTypes": {},
}


@pytest.fixture
def seed_document() -> Dict[str, Any]:
    """Fresh copy of the one-node seed document."""
    return json.loads(json.dumps(SEED_DOCUMENT))


@pytest.fixture
def process_file(tmp_path: Path, seed_document) -> Path:
    """Seeded process.json the server reads and overwrites."""
    path = tmp_path / "process.json"
    path.write_text(json.dumps(seed_document, indent=2))
    return path


@pytest.fixture
def serve_file():
    """Point the app at a given file for the duration of a test."""
    def _serve(path: Path) -> None:
        app.dependency_overrides[get_process_file] = lambda: str(path)

    yield _serve
    app.dependency_overrides.pop(get_process_file, None)


@pytest.fixture
def test_client(process_file: Path, serve_file) -> TestClient:
    serve_file(process_file)
    return TestClient(app)


@pytest.fixture
def persistence_client(process_file: Path, serve_file) -> PersistenceClient:
    """Client talking to the real app in-process."""
    serve_file(process_file)
    return PersistenceClient(
        base_url="http://testserver",
        transport=httpx.ASGITransport(app=app),
    )


@pytest.fixture
def scripted_client():
    """Build clients whose requests are answered by a handler."""
    def _client(handler) -> PersistenceClient:
        return PersistenceClient(
            base_url="http://testserver",
            transport=httpx.MockTransport(handler),
        )

    return _client
