import numpy as np
import pytest

from polrts.mathutils import (
    IDENTITY,
    PI,
    Ray,
    calc_normal,
    deg,
    direction_matrix,
    normal_matrix,
    res_to_screen,
    scaling_matrix,
    transform_point,
    translation_matrix,
)


def test_translation_moves_point():
    m = translation_matrix((1.5, -2.0, 3.0))
    result = transform_point(m, (4.0, 5.0, 6.0))
    np.testing.assert_allclose(result, [5.5, 3.0, 9.0])


def test_scaling_then_translation():
    m = translation_matrix((1.0, 2.0, 3.0)) @ scaling_matrix((2.0, 3.0, 4.0))
    result = transform_point(m, (1.0, 1.0, 1.0))
    np.testing.assert_allclose(result, [1.0 + 2.0, 2.0 + 3.0, 3.0 + 4.0])


def test_direction_matrix_maps_axes():
    direction = np.array([0.0, 1.0, 0.0])
    up = np.array([0.0, 0.0, 1.0])
    m = direction_matrix(direction, up)
    np.testing.assert_allclose(transform_point(m, (1.0, 0.0, 0.0)), direction)
    np.testing.assert_allclose(transform_point(m, (0.0, 0.0, 1.0)), up)
    side = transform_point(m, (0.0, 1.0, 0.0))
    assert np.linalg.norm(side) == pytest.approx(1.0)
    assert side @ direction == pytest.approx(0.0)
    assert side @ up == pytest.approx(0.0)


def test_normal_matrix_of_identity():
    np.testing.assert_allclose(normal_matrix(IDENTITY), np.identity(4))


def test_normal_matrix_is_inverse_transpose():
    m = translation_matrix((3.0, 1.0, 2.0)) @ direction_matrix(
        (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)
    ) @ scaling_matrix((2.0, 4.0, 0.5))
    n = normal_matrix(m)
    np.testing.assert_allclose(n[:3, :3] @ m[:3, :3].T, np.identity(3), atol=1e-12)


def test_normal_matrix_keeps_normals_perpendicular():
    m = scaling_matrix((1.0, 3.0, 1.0))
    tangent = np.array([1.0, 1.0, 0.0])
    normal = np.array([1.0, -1.0, 0.0])
    new_tangent = transform_point(m, tangent)
    new_normal = transform_point(normal_matrix(m), normal)
    assert new_tangent @ new_normal == pytest.approx(0.0)


def test_normal_matrix_singular_raises():
    with pytest.raises(ValueError):
        normal_matrix(scaling_matrix((1.0, 0.0, 1.0)))


def test_transform_point_four_vector():
    m = translation_matrix((1.0, 2.0, 3.0))
    result = transform_point(m, (1.0, 1.0, 1.0, 0.0))
    np.testing.assert_allclose(result, [1.0, 1.0, 1.0, 0.0])


def test_transform_point_bad_shape():
    with pytest.raises(ValueError):
        transform_point(IDENTITY, (1.0, 2.0))


def test_res_to_screen_corners():
    assert res_to_screen(0, 0, 800, 600) == pytest.approx((-1.0, 1.0))
    assert res_to_screen(800, 600, 800, 600) == pytest.approx((1.0, -1.0))
    assert res_to_screen(400, 300, 800, 600) == pytest.approx((0.0, 0.0))


def test_calc_normal_is_unit_and_perpendicular():
    a = np.array([0.0, 0.0, 0.0])
    b = np.array([2.0, 0.0, 1.0])
    c = np.array([0.0, 3.0, 1.0])
    n = calc_normal(a, b, c)
    assert np.linalg.norm(n) == pytest.approx(1.0)
    assert n @ (b - a) == pytest.approx(0.0)
    assert n @ (c - a) == pytest.approx(0.0)


def test_deg():
    assert deg(180) == pytest.approx(PI)
    assert deg(0) == 0.0


def test_ray_defaults_and_values():
    ray = Ray()
    np.testing.assert_array_equal(ray.origin, np.zeros(3))
    np.testing.assert_array_equal(ray.direction, np.zeros(3))
    ray = Ray((1, 2, 3), (0, 0, 1))
    np.testing.assert_array_equal(ray.origin, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(ray.direction, [0.0, 0.0, 1.0])


def test_ray_rejects_bad_shape():
    with pytest.raises(ValueError):
        Ray((1.0, 2.0), (0.0, 0.0, 1.0))