"""Shared fixtures for backend service tests.

Uses FastAPI TestClient to test endpoints without starting a real server.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure backend and kinematics_engine are importable from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent / "src"))


@pytest.fixture
def client():
    """Create a FastAPI TestClient with the engine app."""
    from backend.server import app

    return TestClient(app)


@pytest.fixture
def stats(client):
    """Return a callable fetching the current counter snapshot."""
    return lambda: client.get("/api/v1/kinematics/stats").json()


@pytest.fixture
def service(id_factory):
    """A KinematicsService with deterministic ids."""
    from backend.kinematics_service import KinematicsService

    return KinematicsService(id_factory=id_factory)
