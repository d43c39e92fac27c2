"""Shared fixtures for the stackscan test suite.

Projects are built on disk under tmp_path: a package.json plus whatever
config files or directories a test needs.
"""

import pytest


@pytest.fixture
def tmp_repo(tmp_path):
    """An empty project root."""
    return tmp_path
