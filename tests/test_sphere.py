"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (near root)
- Ray missing sphere
- Ray starting inside sphere (far root)
- Sphere entirely behind the ray
- Placement by translation and uniform scale
- Host-side SphereShape validation
"""

import pytest
import taichi as ti


def _intersect(origin, direction, center, radius, translation=(0.0, 0.0, 0.0), scale=1.0):
    """Run hit_sphere in a kernel and return (hit, t, point, normal)."""
    from raycaster.geometry.sphere import Sphere, hit_sphere, vec3
    from raycaster.materials.material import SurfaceMaterial

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        cx: ti.f32, cy: ti.f32, cz: ti.f32, r: ti.f32,
        tx: ti.f32, ty: ti.f32, tz: ti.f32, s: ti.f32,
    ):
        sphere = Sphere(
            center=vec3(cx, cy, cz),
            radius=r,
            translation=vec3(tx, ty, tz),
            scale=s,
            material=SurfaceMaterial(
                albedo=vec3(0.5, 0.5, 0.5), specular=0.0, shininess=1.0, reflectivity=0.0
            ),
        )
        record = hit_sphere(vec3(ox, oy, oz), vec3(dx, dy, dz), sphere)
        hit[None] = record.hit
        t_val[None] = record.t
        point[None] = record.point
        normal[None] = record.normal

    test_kernel(*origin, *direction, *center, radius, *translation, scale)
    return hit[None], t_val[None], point[None], normal[None]


class TestSphereBasics:
    """Tests for SphereShape and make_sphere."""

    def test_make_sphere(self):
        """Test make_sphere creates an unplaced sphere."""
        from raycaster.geometry.sphere import make_sphere, vec3
        from raycaster.materials.material import SurfaceMaterial

        center_result = ti.field(dtype=ti.math.vec3, shape=())
        radius_result = ti.field(dtype=ti.f32, shape=())
        scale_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            material = SurfaceMaterial(
                albedo=vec3(1.0, 0.0, 0.0), specular=0.0, shininess=1.0, reflectivity=0.0
            )
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5, material)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius
            scale_result[None] = sphere.scale

        test_kernel()
        c = center_result[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        assert abs(c[2] - 3.0) < 1e-6
        assert abs(radius_result[None] - 0.5) < 1e-6
        assert scale_result[None] == 1.0

    def test_shape_defaults_to_identity_transform(self):
        """Test SphereShape gets an identity placement by default."""
        from raycaster.geometry import PrimitiveKind, SphereShape
        from raycaster.materials import Material

        shape = SphereShape(center=(0.0, 0.0, -3.0), radius=1.0, material=Material.red())
        assert shape.transform.is_identity
        assert shape.kind == PrimitiveKind.SPHERE

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_raises(self, radius):
        """Test spheres need a positive radius."""
        from raycaster.geometry import SphereShape
        from raycaster.materials import Material

        with pytest.raises(ValueError, match="radius"):
            SphereShape(center=(0.0, 0.0, 0.0), radius=radius, material=Material.red())


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self):
        """Test ray hitting sphere head-on from outside."""
        hit, t, p, n = _intersect((0.0, 0.0, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        # Should hit at z=1 (front of sphere), so t=4
        assert abs(t - 4.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5
        assert abs(n[0]) < 1e-5
        assert abs(n[1]) < 1e-5
        assert abs(n[2] - 1.0) < 1e-5

    def test_unnormalized_direction(self):
        """Test t is measured in units of the direction vector."""
        hit, t, p, _ = _intersect((0.0, 0.0, 5.0), (0.0, 0.0, -2.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        assert abs(t - 2.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5

    def test_miss(self):
        """Test ray missing sphere entirely."""
        hit, _, _, _ = _intersect((5.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 0

    def test_inside_uses_far_root(self):
        """Test ray starting at the center hits the far wall."""
        hit, t, p, n = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5
        # Normal is outward, not flipped toward the ray
        assert abs(n[2] - 1.0) < 1e-5

    def test_sphere_behind_ray(self):
        """Test sphere entirely behind the ray origin is not hit."""
        hit, _, _, _ = _intersect((0.0, 0.0, 5.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 0

    def test_origin_on_surface_ignores_self_hit(self):
        """Test a ray leaving the surface does not hit it again at t=0."""
        hit, t, _, _ = _intersect((0.0, 0.0, 1.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0)

        # The near root (t=0) is rejected and the far wall is found
        assert hit == 1
        assert abs(t - 2.0) < 1e-4

    def test_hit_off_axis_normal(self):
        """Test the normal at an off-axis hit points away from the center."""
        hit, _, p, n = _intersect((0.6, 0.0, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        assert abs(p[0] - 0.6) < 1e-5
        assert abs(p[2] - 0.8) < 1e-4
        assert abs(n[0] - 0.6) < 1e-4
        assert abs(n[2] - 0.8) < 1e-4


class TestSpherePlacement:
    """Tests for spheres intersected through their placement."""

    def test_translated_sphere(self):
        """Test a translation moves the sphere in world space."""
        hit, t, p, n = _intersect(
            (2.0, 0.0, 5.0),
            (0.0, 0.0, -1.0),
            (0.0, 0.0, 0.0),
            1.0,
            translation=(2.0, 0.0, 0.0),
        )

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert abs(p[0] - 2.0) < 1e-5
        assert abs(p[2] - 1.0) < 1e-5
        assert abs(n[2] - 1.0) < 1e-5

    def test_translated_sphere_missed_at_object_position(self):
        """Test the untranslated position is empty once a sphere is moved."""
        hit, _, _, _ = _intersect(
            (0.0, 0.0, 5.0),
            (0.0, 0.0, -1.0),
            (0.0, 0.0, 0.0),
            1.0,
            translation=(5.0, 0.0, 0.0),
        )
        assert hit == 0

    def test_scaled_sphere(self):
        """Test a uniform scale of 2 doubles the radius in world space."""
        hit, t, p, n = _intersect(
            (0.0, 0.0, 5.0),
            (0.0, 0.0, -1.0),
            (0.0, 0.0, 0.0),
            1.0,
            scale=2.0,
        )

        assert hit == 1
        # World-space surface at z=2; t is shared between object and world space
        assert abs(t - 3.0) < 1e-5
        assert abs(p[2] - 2.0) < 1e-5
        assert abs(n[2] - 1.0) < 1e-5
