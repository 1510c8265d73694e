# Copyright 2024 Gergely Bencsik
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import numpy as np
from spurtrain.defs import *
from spurtrain.function_generators import *
import pytest as pytest


def test_rotation():
    """
    Test the 2D rotation matrix built from scipy.
    Multiplying on the right with the transpose of the rotation matrix rotates
    row vectors counter-clockwise.
    """
    rot = rotation_matrix_2d(PI / 2)
    assert rot == pytest.approx(np.array([[0, -1], [1, 0]]), abs=1e-12)
    assert np.array([RIGHT, UP, LEFT]) @ rot.transpose() == pytest.approx(
        np.array([UP, LEFT, DOWN]), rel=1e-12, abs=1e-12
    )


@pytest.mark.parametrize("angle", [0, 2 * PI, -4 * PI])
def test_rotate_identity_returns_same_object(angle):
    points = np.array([[1.0, 2.0], [3.0, -1.0]])
    assert rotate_points(points, angle) is points


@pytest.mark.parametrize("angle", [0.1, PI / 3, -2.5, 7.0])
def test_rotate_points(angle):
    points = np.array([[1.0, 0.0], [0.0, 2.0], [-3.0, 4.0]])
    rotated = rotate_points(points, angle)
    r0, w0 = cartesian_to_polar(points[:, 0], points[:, 1])
    r1, w1 = cartesian_to_polar(rotated[:, 0], rotated[:, 1])
    assert r1 == pytest.approx(r0)
    assert normalize_angle(w1 - w0) == pytest.approx(
        np.full(3, normalize_angle(angle))
    )
    assert rotate_points(rotated, -angle) == pytest.approx(points)


def test_rotate_around_origin():
    point = np.array((2.0, 1.0))
    assert rotate_points(point, PI, origin=np.array((1.0, 1.0))) == pytest.approx(
        np.array((0.0, 1.0))
    )


def test_reflect_across_ray():
    assert reflect_across_ray(RIGHT, PI / 4) == pytest.approx(UP)
    assert reflect_across_ray(UP, 0) == pytest.approx(DOWN)
    points = np.array([[1.0, 0.3], [-2.0, 5.0]])
    twice = reflect_across_ray(reflect_across_ray(points, 0.7), 0.7)
    assert twice == pytest.approx(points)


def test_polar_roundtrip():
    p = polar_to_cartesian(2.0, PI / 6)
    assert p == pytest.approx(np.array((np.sqrt(3), 1.0)))
    r, w = cartesian_to_polar(p[0], p[1])
    assert r == pytest.approx(2.0)
    assert w == pytest.approx(PI / 6)


def test_involute_circle():
    r = 3.0
    assert involute_circle(0, r=r) == pytest.approx(np.array((r, 0)))
    t = np.linspace(0, 1.5, 11)
    points = involute_circle(t, r=r)
    assert points.shape == (11, 2)
    # the string is unwound by r*t, tangent to the base circle
    assert np.linalg.norm(points, axis=1) == pytest.approx(r * np.sqrt(1 + t**2))
    # polar angle of the involute is the involute function of the pressure angle
    alpha = np.arctan(t[1:])
    assert np.arctan2(points[1:, 1], points[1:, 0]) == pytest.approx(
        involute_function(alpha)
    )


@pytest.mark.parametrize(
    "angle, expected", [(0, 0), (PI, PI), (-PI, PI), (3 * PI / 2, -PI / 2)]
)
def test_normalize_angle(angle, expected):
    assert normalize_angle(angle) == pytest.approx(expected)
