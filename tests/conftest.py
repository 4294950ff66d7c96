"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import tempfile
import shutil

from wordcounter.app.main import create_app
from wordcounter.app.storage import MemoryStorage


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def sample_text():
    """Sample text for testing"""
    return """The quick brown fox jumps over the lazy dog.
The dog was really lazy.
The fox was very quick and brown.
Quick brown foxes are amazing animals.
Lazy dogs sleep all day."""


@pytest.fixture
def memory_storage():
    return MemoryStorage("https://localhost:7002")


@pytest.fixture
def client(memory_storage):
    """TestClient backed by an in-memory store"""
    from fastapi.testclient import TestClient
    with TestClient(create_app(storage=memory_storage)) as c:
        yield c


@pytest.fixture
def sample_input_path(temp_dir, sample_text):
    """Create a sample input file for testing"""
    filepath = os.path.join(temp_dir, 'input.txt')
    with open(filepath, 'w') as f:
        f.write(sample_text)
    return filepath
