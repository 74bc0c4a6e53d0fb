"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


def pytest_collection_modifyitems(config, items):
    """Run the Taichi kernel compile checks before everything else.

    A kernel that fails to compile then shows up as one named failure
    instead of a failure in every test that renders.
    """
    items.sort(key=lambda item: item.get_closest_marker("kernel") is None)


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


class ConstantEnvironment:
    """Environment returning one color for every direction.

    Records the directions it was asked about.
    """

    def __init__(self, color):
        self.color = color
        self.directions = []

    def get(self, direction):
        self.directions.append(direction)
        return self.color


class ExplodingEnvironment:
    """Environment whose every lookup is out of bounds."""

    def get(self, direction):
        raise IndexError("sample outside probe")


@pytest.fixture
def sky():
    """A constant sky-blue environment."""
    from src.spheretrace.core.color import Color

    return ConstantEnvironment(Color(100.0, 150.0, 250.0))


@pytest.fixture
def exploding_environment():
    """An environment that always raises IndexError."""
    return ExplodingEnvironment()


@pytest.fixture
def context():
    """A seeded trace context."""
    from src.spheretrace.core.integrator import TraceContext, TracerSettings

    return TraceContext.from_settings(TracerSettings(seed=1234))
