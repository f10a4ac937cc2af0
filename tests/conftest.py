"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def person_node():
    """Sample node for a person snapshot."""
    return {"name": "bob", "isFancy": True, "counter": 13}


@pytest.fixture
def group_node():
    """Sample node with a nested object and a nested list."""
    return {
        "title": "Climbers",
        "address": {
            "street": "Main Street 1",
            "city": "Linz"
        },
        "members": {
            "-Kx1": {"role": "admin"},
            "-Kx2": {"role": "guest"},
            "-Kx3": {"role": "guest"}
        }
    }


@pytest.fixture
def people_tree():
    """Sample tree of person nodes keyed by generated ids."""
    return {
        "-KpA": {"name": "alice", "counter": 1},
        "-KpB": {"name": "bob", "counter": 2, "isFancy": False},
        "-KpC": {"name": "carol", "counter": 3.5}
    }
