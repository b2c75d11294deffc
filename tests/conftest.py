"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import create_test_engine, create_session_factory


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "concurrency: multi-threaded contention tests (deselect with '-m \"not concurrency\"')"
    )


@pytest.fixture
def file_session_factory(tmp_path):
    """
    Session factory over a file-backed SQLite database.

    Unlike the in-memory engine, each thread gets its own connection, so
    concurrent units really contend for the database write lock.
    """
    engine = create_test_engine(f"sqlite:///{tmp_path / 'carematch.db'}")
    yield create_session_factory(engine)
    engine.dispose()
