"""
Copyright 2024 Gergely Bencsik
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at
    http://www.apache.org/licenses/LICENSE-2.0
Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import numpy as np
from spurtrain.defs import *
from scipy.spatial.transform import Rotation as scp_Rotation


def rotation_matrix_2d(angle):
    """Counter-clockwise rotation matrix in the XY plane."""
    return scp_Rotation.from_euler("z", angle).as_matrix()[:2, :2]


def cartesian_to_polar(x, y):
    """
    Returns r (distance to origin) and w (angle from x axis, in radians).
    w is in (-pi, pi] following the atan2 convention.
    """
    return np.sqrt(x * x + y * y), np.arctan2(y, x)


def polar_to_cartesian(r, w):
    return np.array((r * np.cos(w), r * np.sin(w)))


def rotate_points(points, angle, origin=ORIGIN):
    """
    Rotate an array of points around origin by angle (counter-clockwise positive).

    When the angle is a whole number of revolutions the input object is returned
    as-is, so repeated no-op rotations never accumulate floating point drift.
    """
    if angle % (2 * PI) == 0:
        return points
    points = np.asarray(points, dtype=float)
    # multiplying on the right with the transpose of the rotation matrix
    return (points - origin) @ rotation_matrix_2d(angle).transpose() + origin


def reflect_across_ray(points, angle):
    """Reflect an array of points in the line through the origin which makes
    angle with the x axis."""
    points = np.asarray(points, dtype=float)
    c2 = np.cos(2 * angle)
    s2 = np.sin(2 * angle)
    reflect_mat = np.array([[c2, s2], [s2, -c2]])
    return points @ reflect_mat.transpose()


def involute_circle(t, r=1, angle=0):
    """
    Returns the x-y values of the involute function.
    t: input angle (unwind angle of the string), float or 1d array
    r: base circle radius
    angle: offset angle, angle of the starting point of the involute on the base circle
    """
    t = np.asarray(t, dtype=float)
    points = np.stack(
        [r * (np.cos(t) + t * np.sin(t)), r * (np.sin(t) - t * np.cos(t))], axis=-1
    )
    return rotate_points(points, angle)


def involute_function(alpha):
    """inv(alpha) = tan(alpha) - alpha, the polar angle of the involute point
    where its pressure angle is alpha."""
    return np.tan(alpha) - alpha


def normalize_angle(angle):
    """Wrap an angle into (-pi, pi]."""
    return -((PI - angle) % (2 * PI)) + PI
