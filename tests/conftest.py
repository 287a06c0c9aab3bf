"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f32)
    yield


@pytest.fixture
def reference_scene():
    """The four-sphere reference scene."""
    from src.whitted.scene.reference import create_reference_scene

    scene, _ = create_reference_scene()
    return scene


@pytest.fixture
def reference_scene_data(reference_scene):
    """The reference scene uploaded to Taichi fields."""
    from src.whitted.scene.intersection import SceneData

    return SceneData(reference_scene)
