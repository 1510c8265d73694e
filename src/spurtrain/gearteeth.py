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
from spurtrain.curve import generate_involute_curve


def generate_tooth_flanks(
    pitch_angle: float,
    r_base: float,
    r_max: float,
    alpha: float,
    step: float = INVOLUTE_STEP,
) -> np.ndarray:
    """Generate both flanks of one tooth.

    The first flank is the involute starting on the base circle on the x axis,
    the second is its mirror image in the tooth centerline at pitch_angle/4 + alpha.
    The returned points run from the root of the first flank, over the tip, down to
    the root of the mirrored flank.
    """
    involute_points_1 = generate_involute_curve(r_base, r_max, step=step)
    involute_points_2 = reflect_across_ray(involute_points_1, pitch_angle / 4 + alpha)
    return np.concatenate([involute_points_1, involute_points_2[::-1]], axis=0)


def generate_tooth_profile(
    pitch_angle: float,
    r_base: float,
    r_max: float,
    r_min: float,
    alpha: float,
    step: float = INVOLUTE_STEP,
) -> np.ndarray:
    """Generate the closed polygon of one tooth and the gap next to it.

    The polygon is a wedge of the gear spanning one pitch angle. It starts with the
    involute flanks, then goes straight down to the root circle, along a straight
    chord of the root circle to the end of the pitch angle, and back to the origin.
    The root is not a true arc.

    The polygon is finally rotated by -alpha, so that the tooth spans
    [0, pitch_angle/2] on the pitch circle and the gap spans
    [pitch_angle/2, pitch_angle].

    Parameters
    ----------
    pitch_angle : float
        Angle of one tooth + gap.
    r_base : float
        Base circle radius.
    r_max : float
        Tip (addendum) circle radius.
    r_min : float
        Root (dedendum) circle radius.
    alpha : float
        Involute polar angle at the pitch circle.
    step : float, optional
        Involute sampling step.

    Returns
    -------
    np.ndarray
        Polygon points, shape (n, 2). The last point connects back to the first.
    """
    flank_points = generate_tooth_flanks(pitch_angle, r_base, r_max, alpha, step=step)
    root_points = np.array(
        [
            polar_to_cartesian(r_min, pitch_angle * 0.5 + 2 * alpha),
            polar_to_cartesian(r_min, pitch_angle),
            ORIGIN,
        ]
    )
    profile = np.concatenate([flank_points, root_points], axis=0)
    return rotate_points(profile, -alpha)
