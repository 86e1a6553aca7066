"""Unit tests for materials.

Tests cover:
- Material construction, defaults and validation
- Named presets and convenience constructors
- Device-side SurfaceMaterial struct
"""

import pytest
import taichi as ti


class TestMaterialConstruction:
    """Tests for the host-side Material dataclass."""

    def test_defaults(self):
        """Test a plain material has no specular or reflective component."""
        from raycaster.materials import Material

        material = Material((0.1, 0.2, 0.3))
        assert material.albedo == (0.1, 0.2, 0.3)
        assert material.specular == 0.0
        assert material.shininess == 1.0
        assert material.reflectivity == 0.0

    def test_albedo_converted_to_float_tuple(self):
        """Test albedo given as a list of ints is stored as a float tuple."""
        from raycaster.materials import Material

        material = Material([1, 0, 0])
        assert material.albedo == (1.0, 0.0, 0.0)
        assert all(isinstance(c, float) for c in material.albedo)

    def test_material_is_immutable(self):
        """Test materials cannot be modified after construction."""
        from dataclasses import FrozenInstanceError

        from raycaster.materials import Material

        material = Material.red()
        with pytest.raises(FrozenInstanceError):
            material.reflectivity = 0.5

    def test_albedo_above_one_allowed(self):
        """Test albedo is unclamped."""
        from raycaster.materials import Material

        assert Material((2.0, 1.5, 1.0)).albedo == (2.0, 1.5, 1.0)

    def test_negative_albedo_allowed(self):
        """Test negative albedo components are accepted."""
        from raycaster.materials import Material

        assert Material((-0.1, 0.5, 0.5)).albedo == (-0.1, 0.5, 0.5)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"albedo": (0.5, 0.5)},
            {"albedo": (0.5, 0.5, 0.5), "specular": -1.0},
            {"albedo": (0.5, 0.5, 0.5), "shininess": 0.0},
            {"albedo": (0.5, 0.5, 0.5), "reflectivity": 1.5},
            {"albedo": (0.5, 0.5, 0.5), "reflectivity": -0.1},
        ],
    )
    def test_invalid_parameters_raise(self, kwargs):
        """Test invalid material parameters are rejected."""
        from raycaster.materials import Material

        with pytest.raises(ValueError):
            Material(**kwargs)


class TestMaterialPresets:
    """Tests for named colors and convenience constructors."""

    @pytest.mark.parametrize(
        ("name", "albedo"),
        [
            ("red", (0.8, 0.2, 0.2)),
            ("green", (0.2, 0.8, 0.2)),
            ("blue", (0.2, 0.2, 0.8)),
            ("white", (0.8, 0.8, 0.8)),
            ("gray", (0.5, 0.5, 0.5)),
        ],
    )
    def test_color_presets(self, name, albedo):
        """Test the diffuse presets have the expected albedo."""
        from raycaster.materials import Material

        material = getattr(Material, name)()
        assert material.albedo == albedo
        assert material.reflectivity == 0.0

    def test_mirror(self):
        """Test the mirror preset is highly reflective."""
        from raycaster.materials import Material

        mirror = Material.mirror()
        assert mirror.albedo == (0.9, 0.9, 0.9)
        assert mirror.reflectivity == 0.9

    def test_with_specular(self):
        """Test with_specular sets specular and shininess."""
        from raycaster.materials import Material

        material = Material.with_specular((0.9, 0.9, 0.9), specular=0.5, shininess=32.0)
        assert material.specular == 0.5
        assert material.shininess == 32.0
        assert material.reflectivity == 0.0

    def test_with_reflection(self):
        """Test with_reflection sets only the reflectivity."""
        from raycaster.materials import Material

        material = Material.with_reflection((0.3, 0.3, 0.3), 0.7)
        assert material.reflectivity == 0.7
        assert material.specular == 0.0


class TestSurfaceMaterial:
    """Tests for the device-side material struct."""

    def test_struct_fields(self):
        """Test SurfaceMaterial carries all four coefficients through a kernel."""
        from raycaster.materials import SurfaceMaterial

        albedo = ti.field(dtype=ti.math.vec3, shape=())
        coefficients = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            material = SurfaceMaterial(
                albedo=ti.math.vec3(0.1, 0.2, 0.3),
                specular=0.4,
                shininess=8.0,
                reflectivity=0.6,
            )
            albedo[None] = material.albedo
            coefficients[None] = ti.math.vec3(
                material.specular, material.shininess, material.reflectivity
            )

        test_kernel()
        a = albedo[None]
        c = coefficients[None]
        assert abs(a[0] - 0.1) < 1e-6
        assert abs(a[2] - 0.3) < 1e-6
        assert abs(c[0] - 0.4) < 1e-6
        assert abs(c[1] - 8.0) < 1e-6
        assert abs(c[2] - 0.6) < 1e-6
