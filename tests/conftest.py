"""
Pytest configuration and shared fixtures.
"""

import itertools
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dir(temp_dir):
    """Create a sample configuration directory with an engine.yaml."""
    config_dir = temp_dir / "config"
    config_dir.mkdir(parents=True)

    engine_config = """
server:
  host: "127.0.0.1"
  port: 9090
  cors_origins:
    - "http://localhost:3000"

logging:
  level: "DEBUG"
  json_output: true
"""
    (config_dir / "engine.yaml").write_text(engine_config)
    return config_dir


@pytest.fixture
def id_factory():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"
