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

import dataclasses
import warnings
import numpy as np
from spurtrain.defs import *
from spurtrain.function_generators import rotate_points
from spurtrain.gearmath import calc_undercut_limit
from spurtrain.exceptions import InvalidParameter

# If a dataclass tends to be user input, it should be named param.
# If a dataclass tends to be generated or manipulated by functions,
# it should be named data.


@dataclasses.dataclass
class GearInputParam:
    """User input of a spur gear.

    Attributes
    ----------
    number_of_teeth : int
        Number of teeth.
    module : float
        Module of the gear (pitch circle diameter per tooth).
    pressure_angle : float
        Pressure angle in radians. Default is 20 degrees.
    addendum_coefficient : float
        Addendum height relative to the module. Default is 1.0.
    dedendum_coefficient : float
        Dedendum height relative to the module. Default is 1.2.
    involute_step : float
        Unwind angle step used when sampling the tooth flanks.
    """

    number_of_teeth: int
    module: float = 3.0
    pressure_angle: float = 20 * DEG2RAD
    addendum_coefficient: float = 1.0
    dedendum_coefficient: float = 1.2
    involute_step: float = INVOLUTE_STEP


@dataclasses.dataclass(frozen=True)
class GearParam:
    """Derived dimensions of a spur gear. Immutable once computed.

    Attributes
    ----------
    num_teeth : int
        Number of teeth.
    module : float
        Module of the gear.
    pressure_angle : float
        Pressure angle in radians.
    pitch_angle : float
        Angle of one tooth + gap, 2*pi/num_teeth.
    pitch_circle_radius : float
        Radius of the circle where meshing gears touch.
    base_circle_radius : float
        Radius of the circle the involute is unwound from.
    addendum : float
        Tooth height above the pitch circle.
    dedendum : float
        Tooth depth below the pitch circle.
    max_radius : float
        Tip radius.
    min_radius : float
        Root radius.
    alpha : float
        Polar angle of the involute at the pitch circle (involute function of the
        pressure angle). Used to align the tooth symmetry to the pitch point.
    """

    num_teeth: int
    module: float
    pressure_angle: float
    pitch_angle: float
    pitch_circle_radius: float
    base_circle_radius: float
    addendum: float
    dedendum: float
    max_radius: float
    min_radius: float
    alpha: float

    # shorthands
    @property
    def rp(self):
        return self.pitch_circle_radius

    @property
    def rb(self):
        return self.base_circle_radius

    @property
    def ra(self):
        return self.max_radius

    @property
    def rd(self):
        return self.min_radius

    @property
    def undercut_limit(self):
        """Lowest number of teeth generated without undercut
        with a standard rack at this pressure angle."""
        return calc_undercut_limit(self.pressure_angle)


def generate_gear_params(
    num_teeth: int,
    module: float = 3.0,
    pressure_angle: float = 20 * DEG2RAD,
    addendum_coefficient: float = 1.0,
    dedendum_coefficient: float = 1.2,
) -> GearParam:
    """Calculate all radii and angles of a gear from its tooth count, module and
    pressure angle.

    Raises
    ------
    InvalidParameter
        If the tooth count is not a positive integer, the module is not positive or
        the pressure angle is outside of (0, pi/2).
    """
    if num_teeth < 1 or int(num_teeth) != num_teeth:
        raise InvalidParameter(
            f"number of teeth must be a positive integer, got {num_teeth}"
        )
    if not module > 0:
        raise InvalidParameter(f"module must be positive, got {module}")
    if not 0 < pressure_angle < PI / 2:
        raise InvalidParameter(
            f"pressure angle must be in (0, pi/2) radians, got {pressure_angle}"
        )
    num_teeth = int(num_teeth)

    pitch_angle = 2 * PI / num_teeth
    pitch_circle_radius = module * num_teeth / 2
    base_circle_radius = pitch_circle_radius * np.cos(pressure_angle)
    addendum = addendum_coefficient * module
    dedendum = dedendum_coefficient * module
    alpha = (
        np.sqrt(pitch_circle_radius**2 - base_circle_radius**2) / base_circle_radius
        - pressure_angle
    )

    params = GearParam(
        num_teeth=num_teeth,
        module=module,
        pressure_angle=pressure_angle,
        pitch_angle=pitch_angle,
        pitch_circle_radius=pitch_circle_radius,
        base_circle_radius=base_circle_radius,
        addendum=addendum,
        dedendum=dedendum,
        max_radius=pitch_circle_radius + addendum,
        min_radius=pitch_circle_radius - dedendum,
        alpha=alpha,
    )
    if num_teeth < params.undercut_limit:
        # accepted, the root is drawn with straight segments without undercut
        warnings.warn(
            f"{num_teeth} teeth is below the undercut limit "
            f"({params.undercut_limit:.1f}) for this pressure angle",
            RuntimeWarning,
            stacklevel=2,
        )
    return params


@dataclasses.dataclass
class GearTransformData:
    """Data class for the planar placement of a gear.

    Attributes
    ----------
    center : np.ndarray
        Center displacement of the gear.
    angle : float
        Rotation of the gear around its own center in radians.
    """

    center: np.ndarray = dataclasses.field(default_factory=lambda: ORIGIN.copy())
    angle: float = 0

    @property
    def x(self):
        return self.center[0]

    @property
    def y(self):
        return self.center[1]

    @property
    def rotation(self):
        return self.angle

    @property
    def affine_matrix(self):
        rot = np.array(
            [
                [np.cos(self.angle), -np.sin(self.angle)],
                [np.sin(self.angle), np.cos(self.angle)],
            ]
        )
        return np.block([[rot, self.center[:, np.newaxis]], [0, 0, 1]])

    def __mul__(self, other):
        if isinstance(other, GearTransformData):
            return self.__class__(
                center=self.center + rotate_points(other.center, self.angle),
                angle=self.angle + other.angle,
            )
        else:
            return NotImplemented


def apply_gear_transform(points: np.ndarray, data: GearTransformData) -> np.ndarray:
    """Apply GearTransform to a set of points: rotation around the gear's own
    center first, then the translation."""
    return rotate_points(points, data.angle) + data.center


class GearTransform(GearTransformData):
    """A callable class for applying a gear transformation to a set of points.
    Inherited from GearTransformData."""

    def __call__(self, points) -> np.ndarray:
        return apply_gear_transform(points, self)
