"""Unit tests for SceneData.intersect via nearest_hit().

Tests cover:
- Nearest sphere selection and tie-breaking
- Plane hits in an empty scene
- The plane reusing the material resolved so far
- Escape beyond the maximum distance
"""

import math

import pytest


class TestSphereQueries:
    """Tests for sphere hits."""

    def test_reference_scene_center_ray(self, reference_scene_data):
        """Test the center ray hits the closest reference sphere."""
        info = reference_scene_data.nearest_hit((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert info is not None
        # Glass sphere at (-1, -1.5, -12) with radius 2 is the first hit
        assert info.material.refractive_index == pytest.approx(1.5)
        normal_len = math.sqrt(sum(c * c for c in info.normal))
        assert normal_len == pytest.approx(1.0, abs=1e-5)

    def test_reference_scene_upward_miss(self, reference_scene_data):
        """Test a ray straight up escapes."""
        assert reference_scene_data.nearest_hit((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)) is None

    def test_nearest_of_two_spheres(self):
        """Test the closer sphere wins regardless of list order."""
        from src.whitted.scene.description import Material, Scene, Sphere
        from src.whitted.scene.intersection import SceneData

        far = Material(diffuse_color=(0.0, 0.0, 1.0))
        near = Material(diffuse_color=(1.0, 0.0, 0.0))
        scene = Scene(
            spheres=(Sphere((0, 0, -20), 1, far), Sphere((0, 0, -10), 1, near))
        )
        info = SceneData(scene).nearest_hit((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert info.distance == pytest.approx(9.0, abs=1e-5)
        assert info.point == pytest.approx((0.0, 0.0, -9.0), abs=1e-5)
        assert info.normal == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)
        assert info.material == near

    def test_tie_keeps_first_sphere(self):
        """Test coincident spheres report the first one's material."""
        from src.whitted.scene.description import Material, Scene, Sphere
        from src.whitted.scene.intersection import SceneData

        first = Material(diffuse_color=(1.0, 0.0, 0.0))
        second = Material(diffuse_color=(0.0, 1.0, 0.0))
        scene = Scene(
            spheres=(Sphere((0, 0, -10), 1, first), Sphere((0, 0, -10), 1, second))
        )
        info = SceneData(scene).nearest_hit((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert info.material == first

    def test_hit_beyond_max_distance_escapes(self):
        """Test a sphere 2000 units away is not reported."""
        from src.whitted.scene.description import Scene, Sphere
        from src.whitted.scene.intersection import SceneData

        scene = Scene(spheres=(Sphere((0, 0, -2000), 1),))
        assert SceneData(scene).nearest_hit((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)) is None


class TestPlaneQueries:
    """Tests for checkerboard hits."""

    def _direction(self, target):
        norm = math.sqrt(sum(c * c for c in target))
        return tuple(c / norm for c in target)

    def test_empty_scene_white_tile(self):
        """Test an empty scene still shows the plane with default material."""
        from src.whitted.scene.description import Scene
        from src.whitted.scene.intersection import SceneData

        info = SceneData(Scene()).nearest_hit((0.0, 0.0, 0.0), self._direction((1.0, -4.0, -15.5)))
        assert info is not None
        assert info.point[1] == pytest.approx(-4.0, abs=1e-4)
        assert info.normal == (0.0, 1.0, 0.0)
        assert info.material.diffuse_color == pytest.approx((1.0, 1.0, 1.0))
        assert info.material.albedo == (1.0, 0.0, 0.0, 0.0)
        assert info.material.refractive_index == 1.0
        assert info.material.specular_exponent == 0.0

    def test_empty_scene_black_tile(self):
        """Test the neighbouring tile along x is black."""
        from src.whitted.scene.description import Scene
        from src.whitted.scene.intersection import SceneData

        info = SceneData(Scene()).nearest_hit((0.0, 0.0, 0.0), self._direction((3.0, -4.0, -15.5)))
        assert info is not None
        assert info.material.diffuse_color == pytest.approx((0.0, 0.0, 0.0))

    def test_plane_keeps_farther_sphere_material(self):
        """Test the plane takes every field but colour from the sphere behind it."""
        from src.whitted.scene.description import Scene, Sphere
        from src.whitted.scene.intersection import SceneData
        from src.whitted.scene.reference import IVORY

        scene = Scene(spheres=(Sphere((0, 0, -20), 1, IVORY),))
        info = SceneData(scene).nearest_hit((0.0, -6.0, -20.0), (0.0, 1.0, 0.0))
        assert info.distance == pytest.approx(2.0, abs=1e-5)
        assert info.normal == (0.0, 1.0, 0.0)
        assert info.material.albedo == pytest.approx(IVORY.albedo)
        assert info.material.specular_exponent == pytest.approx(IVORY.specular_exponent)
        # int(1000) + int(-10) = 990 is an even tile
        assert info.material.diffuse_color == pytest.approx((0.0, 0.0, 0.0))

    def test_sphere_in_front_of_plane_wins(self):
        """Test a sphere closer than the plane hides it."""
        from src.whitted.scene.description import Scene, Sphere
        from src.whitted.scene.intersection import SceneData
        from src.whitted.scene.reference import RED_RUBBER

        scene = Scene(spheres=(Sphere((0, -2, -20), 1, RED_RUBBER),))
        info = SceneData(scene).nearest_hit((0.0, 0.0, -20.0), (0.0, -1.0, 0.0))
        assert info.distance == pytest.approx(1.0, abs=1e-5)
        assert info.material.diffuse_color == pytest.approx(RED_RUBBER.diffuse_color)
        assert info.material.albedo == pytest.approx(RED_RUBBER.albedo)


class TestHitRecord:
    """Tests for the device hit record structs."""

    def test_miss_record_defaults(self):
        """Test a miss record carries the default material."""
        import taichi as ti

        from src.whitted.scene.intersection import SceneHitRecord, miss_record

        record = SceneHitRecord.field(shape=())

        @ti.kernel
        def test_kernel():
            record[None] = miss_record()

        test_kernel()
        assert record.hit[None] == 0
        assert record.material.refractive_index[None] == 1.0
        assert tuple(record.material.albedo[None]) == (1.0, 0.0, 0.0, 0.0)
        assert record.material.specular_exponent[None] == 0.0
