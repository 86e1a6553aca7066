"""Unit tests for finite cylinder intersection.

Tests cover:
- Lateral wall hits and the radial normal
- Top and bottom cap hits
- Rays passing above the cylinder or outside its radius
- Rays starting inside the cylinder
- Host-side CylinderShape validation
"""

import pytest
import taichi as ti


def _intersect(origin, direction, center=(0.0, 0.0, 0.0), radius=1.0, height=2.0):
    """Run hit_cylinder in a kernel and return (hit, t, point, normal)."""
    from raycaster.geometry.cylinder import hit_cylinder, make_cylinder, vec3
    from raycaster.materials.material import SurfaceMaterial

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    hit_point = ti.field(dtype=ti.math.vec3, shape=())
    hit_normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        cx: ti.f32, cy: ti.f32, cz: ti.f32,
        r: ti.f32, h: ti.f32,
    ):
        material = SurfaceMaterial(
            albedo=vec3(0.2, 0.2, 0.8), specular=0.0, shininess=1.0, reflectivity=0.0
        )
        cylinder = make_cylinder(vec3(cx, cy, cz), r, h, material)
        record = hit_cylinder(vec3(ox, oy, oz), vec3(dx, dy, dz), cylinder)
        hit[None] = record.hit
        t_val[None] = record.t
        hit_point[None] = record.point
        hit_normal[None] = record.normal

    test_kernel(*origin, *direction, *center, radius, height)
    return hit[None], t_val[None], hit_point[None], hit_normal[None]


class TestCylinderShape:
    """Tests for the host-side CylinderShape."""

    def test_fields(self):
        """Test the shape keeps its parameters and kind."""
        from raycaster.geometry import CylinderShape, PrimitiveKind
        from raycaster.materials import Material

        shape = CylinderShape((0.0, -1.5, -4.5), 0.6, 1.8, Material.blue())
        assert shape.radius == 0.6
        assert shape.height == 1.8
        assert shape.kind == PrimitiveKind.CYLINDER

    @pytest.mark.parametrize(("radius", "height"), [(0.0, 1.0), (1.0, 0.0), (-1.0, 1.0)])
    def test_non_positive_dimensions_raise(self, radius, height):
        """Test radius and height must be positive."""
        from raycaster.geometry import CylinderShape
        from raycaster.materials import Material

        with pytest.raises(ValueError):
            CylinderShape((0.0, 0.0, 0.0), radius, height, Material.blue())


class TestCylinderWall:
    """Tests for hits on the lateral wall."""

    def test_wall_hit(self):
        """Test a horizontal ray hits the wall with a radial normal."""
        hit, t, p, n = _intersect((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5
        assert abs(n[0]) < 1e-5
        assert abs(n[1]) < 1e-6
        assert abs(n[2] - 1.0) < 1e-5

    def test_wall_hit_off_center_height(self):
        """Test a wall hit above the center but below the top cap."""
        hit, t, p, n = _intersect((5.0, 0.9, 0.0), (-1.0, 0.0, 0.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(p[1] - 0.9) < 1e-6
        assert abs(n[0] - 1.0) < 1e-5

    def test_passes_above(self):
        """Test a horizontal ray above the top cap misses."""
        hit, _, _, _ = _intersect((0.0, 1.5, 5.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_passes_beside(self):
        """Test a ray outside the radius misses."""
        hit, _, _, _ = _intersect((1.5, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_inside_hits_far_wall(self):
        """Test a ray from the axis hits the wall in front of it."""
        hit, t, _, n = _intersect((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))

        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(n[0] - 1.0) < 1e-5


class TestCylinderCaps:
    """Tests for hits on the flat caps."""

    def test_top_cap(self):
        """Test a downward ray on the axis hits the top cap."""
        hit, t, p, n = _intersect((0.0, 5.0, 0.0), (0.0, -1.0, 0.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(p[1] - 1.0) < 1e-5
        assert abs(n[1] - 1.0) < 1e-6

    def test_bottom_cap(self):
        """Test an upward ray on the axis hits the bottom cap."""
        hit, t, p, n = _intersect((0.0, -5.0, 0.0), (0.0, 1.0, 0.0))

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(p[1] + 1.0) < 1e-5
        assert abs(n[1] + 1.0) < 1e-6

    def test_cap_of_offset_cylinder(self):
        """Test cap heights follow the cylinder center."""
        hit, t, p, n = _intersect(
            (0.3, 5.0, -4.5), (0.0, -1.0, 0.0), center=(0.0, -1.5, -4.5), radius=0.6, height=1.8
        )

        assert hit == 1
        # Top cap at y = -1.5 + 0.9 = -0.6
        assert abs(p[1] + 0.6) < 1e-5
        assert abs(t - 5.6) < 1e-4
        assert abs(n[1] - 1.0) < 1e-6

    def test_vertical_ray_outside_radius_misses(self):
        """Test a vertical ray outside the cap disks misses."""
        hit, _, _, _ = _intersect((3.0, 5.0, 0.0), (0.0, -1.0, 0.0))
        assert hit == 0

    def test_oblique_ray_hits_cap_before_wall(self):
        """Test the nearer of cap and wall candidates wins."""
        # Enters through the top cap at (0, 1, 0.5) and would exit through the wall
        hit, t, p, n = _intersect((0.0, 2.0, 1.5), (0.0, -1.0, -1.0))

        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(p[1] - 1.0) < 1e-5
        assert abs(n[1] - 1.0) < 1e-6
