"""Pytest configuration for aotracer tests.

This module provides shared fixtures for all test modules: seeded random
generators, common materials and a small, fast render configuration.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """A seeded generator so stochastic tests are repeatable."""
    return np.random.default_rng(12345)


@pytest.fixture
def white_material():
    """Plain diffuse white material."""
    from aotracer.core.vector import Vec3
    from aotracer.materials.phong import Material

    return Material(Vec3(1.0, 1.0, 1.0))


@pytest.fixture
def mirror_material():
    """Perfect mirror: all outgoing color comes from the reflected ray."""
    from aotracer.core.vector import Vec3
    from aotracer.materials.phong import Material

    return Material(Vec3(1.0, 1.0, 1.0), reflectance=1.0)


@pytest.fixture
def small_config():
    """Low resolution, few AO samples and two workers for fast renders."""
    from aotracer.core.config import RenderConfig

    return RenderConfig(width=24, height=18, ao_samples=2, workers=2, seed=7)
