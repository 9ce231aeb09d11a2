"""Shared fixtures for the voxelgen test suite."""

import pytest

from voxelgen.geometry import derive_config


@pytest.fixture
def tiny_config():
    """10 x 10 x 10 voxel grid (n=24)."""
    return derive_config(24)


@pytest.fixture
def small_config():
    """42 x 42 x 42 voxel grid (n=100)."""
    return derive_config(100)
