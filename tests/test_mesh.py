"""Unit tests for triangle meshes and the vertex/face file loader."""

import random

import pytest

from core.ray import Ray
from core.vector import Vector3
from geometry.mesh import Mesh, MeshLoadError, Triangle, load_mesh


def _facing_triangle(z, dx=0.0, dy=0.0, size=1.0):
    """Triangle in the plane at depth z around (dx, dy)."""
    return Triangle(Vector3(dx - size, dy - size, z),
                    Vector3(dx + size, dy - size, z),
                    Vector3(dx, dy + size, z))


@pytest.fixture
def random_triangles():
    """Sixty small triangles scattered through a box, from a fixed seed."""
    rng = random.Random(7)
    return [_facing_triangle(rng.uniform(-5, 5), rng.uniform(-4, 4), rng.uniform(-4, 4),
                             rng.uniform(0.3, 1.0))
            for _ in range(60)]


@pytest.fixture
def write_mesh(tmp_path):
    """Write text to a mesh file and return its path."""
    def _write(text, name="mesh.obj"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


class TestMeshIntersection:
    """Tests for nearest-hit queries over a mesh."""

    def test_nearest_of_two_triangles(self):
        """Test that the nearer of two stacked triangles is reported."""
        mesh = Mesh([_facing_triangle(2.0), _facing_triangle(0.0)])
        hit = mesh.intersect(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)))
        assert hit.distance == pytest.approx(5.0)
        assert tuple(hit.normal) == pytest.approx((0, 0, 1))

    def test_miss(self):
        """Test that a ray beside every triangle misses."""
        mesh = Mesh([_facing_triangle(0.0)])
        assert mesh.intersect(Ray(Vector3(5, 5, -5), Vector3(0, 0, 1))) is None

    def test_bvh_matches_brute_force(self, random_triangles):
        """Test that the accelerated query finds the same distances as the linear scan."""
        mesh = Mesh(random_triangles)
        assert mesh.bvh is not None
        for i in range(-6, 7):
            for j in range(-6, 7):
                ray = Ray(Vector3(i * 0.7, j * 0.7, -10), Vector3(0.02 * i, -0.01 * j, 1))
                fast = mesh.intersect(ray)
                slow = mesh.intersect_brute_force(ray)
                if slow is None:
                    assert fast is None
                else:
                    assert fast is not None
                    assert fast.distance == pytest.approx(slow.distance)

    def test_unaccelerated_mesh(self, random_triangles):
        """Test that accelerate=False skips the hierarchy."""
        mesh = Mesh(random_triangles, accelerate=False)
        assert mesh.bvh is None
        ray = Ray(Vector3(0, 0, -10), Vector3(0, 0, 1))
        fast = Mesh(random_triangles).intersect(ray)
        slow = mesh.intersect(ray)
        assert (fast is None) == (slow is None)

    def test_bounding_box_covers_vertices(self):
        """Test that the mesh box is the union of the vertex extents."""
        mesh = Mesh([_facing_triangle(-1.0), _facing_triangle(3.0, dx=2.0)])
        box = mesh.bounding_box()
        assert box.contains(Vector3(-1, -1, -1))
        assert box.contains(Vector3(3, 1, 3))
        assert not box.contains(Vector3(0, 0, 4))

    def test_empty_mesh_rejected(self):
        """Test that a mesh without triangles raises ValueError."""
        with pytest.raises(ValueError):
            Mesh([])


class TestLoadMesh:
    """Tests for the line-oriented vertex/face loader."""

    def test_load_triangle(self, write_mesh):
        """Test that a single triangle loads and can be hit."""
        path = write_mesh("v -1 -1 0\nv 1 -1 0\nv 0 1 0\nf 1 2 3\n")
        mesh = load_mesh(path)
        assert len(mesh.triangles) == 1
        hit = mesh.intersect(Ray(Vector3(0, 0, -5), Vector3(0, 0, 1)))
        assert hit.distance == pytest.approx(5.0)

    def test_quad_is_fan_triangulated(self, write_mesh):
        """Test that a four-index face becomes two triangles."""
        path = write_mesh("v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n")
        assert len(load_mesh(path).triangles) == 2

    def test_slash_groups_use_vertex_index(self, write_mesh):
        """Test that v/vt/vn groups take the index before the first slash."""
        path = write_mesh("v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\n"
                          "f 1/1/1 2/2/1 3//1\n")
        tri = load_mesh(path).triangles[0]
        assert tuple(tri.v1) == (1, 0, 0)
        assert tuple(tri.v2) == (0, 1, 0)

    def test_other_lines_ignored(self, write_mesh):
        """Test that comments, blank lines and unknown records are skipped."""
        path = write_mesh("# a comment\n\no name\nv 0 0 0\nv 1 0 0\nv 0 1 0\n"
                          "vt 0 0\ns off\nf 1 2 3\n")
        assert len(load_mesh(path).triangles) == 1

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises MeshLoadError chained to OSError."""
        with pytest.raises(MeshLoadError) as info:
            load_mesh(tmp_path / "missing.obj")
        assert isinstance(info.value.__cause__, OSError)

    def test_malformed_number(self, write_mesh):
        """Test that a bad coordinate reports its line."""
        path = write_mesh("v 0 0 0\nv 1 x 0\n")
        with pytest.raises(MeshLoadError) as info:
            load_mesh(path)
        assert info.value.line_num == 2
        assert info.value.path == path

    def test_too_few_coordinates(self, write_mesh):
        """Test that a vertex with two coordinates is rejected."""
        with pytest.raises(MeshLoadError):
            load_mesh(write_mesh("v 0 0\n"))

    def test_index_out_of_range(self, write_mesh):
        """Test that a face referencing an unread vertex is rejected."""
        path = write_mesh("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n")
        with pytest.raises(MeshLoadError) as info:
            load_mesh(path)
        assert info.value.line_num == 4

    def test_zero_index(self, write_mesh):
        """Test that indices are 1-based and zero is rejected."""
        with pytest.raises(MeshLoadError):
            load_mesh(write_mesh("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n"))

    def test_short_face(self, write_mesh):
        """Test that a face with two indices is rejected."""
        with pytest.raises(MeshLoadError):
            load_mesh(write_mesh("v 0 0 0\nv 1 0 0\nf 1 2\n"))

    def test_no_faces(self, write_mesh):
        """Test that a file with vertices only is rejected."""
        with pytest.raises(MeshLoadError):
            load_mesh(write_mesh("v 0 0 0\nv 1 0 0\nv 0 1 0\n"))

    def test_undecodable_file(self, tmp_path):
        """Test that binary content surfaces as MeshLoadError."""
        path = tmp_path / "binary.obj"
        path.write_bytes(b"\xff\xfe\x00\x81v 0 0 0\n")
        with pytest.raises(MeshLoadError):
            load_mesh(path)
