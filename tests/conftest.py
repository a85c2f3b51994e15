"""Shared pytest fixtures for wirebox tests."""

import pytest

from wirebox import Container


@pytest.fixture()
def container() -> Container:
    """Empty container with deep cloning of transient values."""
    return Container()


@pytest.fixture()
def shallow_container() -> Container:
    """Empty container copying transient values shallowly."""
    return Container(deep_clone=False)
