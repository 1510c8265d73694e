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


def calc_center_distance(gear1: "Gear", gear2: "Gear") -> float:
    """
    Distance of gear centers when their pitch circles are tangent.
    Both gears are expected to have the same module.
    """
    return gear1.module * (gear1.number_of_teeth + gear2.number_of_teeth) / 2


def calc_mesh_placement_vector(gear: "Gear", pinion: "Gear", angle: float):
    """Center of gear when meshed with pinion in the direction of angle."""
    distance_ref = calc_center_distance(gear, pinion)
    return pinion.center + distance_ref * np.array((np.cos(angle), np.sin(angle)))


def calc_ratio(gear: "Gear", pinion: "Gear" = None):
    """
    Speed ratio and signed rotation speed of gear driven by pinion.

    Returns
    -------
    tuple
        (ratio, rotation_speed). Ratio is teeth of pinion / teeth of gear, rotation
        speed is -ratio times the rotation speed of the pinion, since meshed gears
        rotate in opposite directions. Without a pinion both are 1.
    """
    if pinion is None:
        return 1.0, 1.0
    ratio = pinion.number_of_teeth / gear.number_of_teeth
    return ratio, -1 * pinion.rotation_speed * ratio


def calc_mesh_angle(gear: "Gear", pinion: "Gear", angle: float, ratio: float):
    """
    Rotation increment that locks the teeth of gear into the teeth of pinion.

    The first term turns the first tooth gap of gear to face the pinion along the
    line of centers. The second term pretends the pinion was rotated from angle to
    its current rotation while meshed, and drives gear along accordingly.
    """
    return PI + angle + (angle - pinion.rotation) * ratio


def calc_tooth_phase(gear: "Gear", direction: float, offset: float = 0):
    """Phase of the gear teeth in the direction (world angle) in units of pitch,
    measured from the center of a tooth at the pitch circle. Range [0, 1)."""
    tooth_center = gear.rotation + gear.pitch_angle / 4
    return ((direction - tooth_center) / gear.pitch_angle + offset) % 1


def calc_mesh_phase_error(gear: "Gear"):
    """
    Calculate how far the teeth of gear are from interlocking with its pinion.

    At the pitch point a tooth center of one gear should face a gap center of the
    other. Rolling the gears without slip keeps the sum of their tooth phases at the
    pitch point constant, and the sum is a whole number when the teeth interlock.

    Returns
    -------
    float
        Phase error in units of pitch, in (-0.5, 0.5]. 0 for perfect interlock,
        +-0.5 for tooth tip facing tooth tip. Always 0 for a root gear.
    """
    pinion = gear.pinion
    if pinion is None:
        return 0.0
    phase_of_pinion = calc_tooth_phase(pinion, gear.angle)
    # gap center of gear is half a pitch from the tooth center
    phase_of_gear = calc_tooth_phase(gear, gear.angle + PI, offset=-0.5)
    phase_sum = (phase_of_pinion + phase_of_gear) % 1
    if phase_sum > 0.5:
        phase_sum -= 1
    return phase_sum


def calc_undercut_limit(pressure_angle: float):
    """Minimum number of teeth without undercut with a standard rack."""
    if pressure_angle == 0:
        return np.inf
    return 2 / np.sin(pressure_angle) ** 2
