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

from spurtrain.function_generators import *
from spurtrain.defs import *
from spurtrain.spurtrain_base_classes import *
from spurtrain.gearteeth import generate_tooth_profile
from spurtrain.gearmath import *
from spurtrain.exceptions import *

import dataclasses
import logging
from typing import Callable, Iterator, List, Optional


def generate_boundary(
    tooth_profile: np.ndarray, params: GearParam
) -> List[np.ndarray]:
    """
    Create gear boundary by repeating the tooth profile around the full circle.

    Returns one closed polygon per tooth, polygon i rotated by i * pitch_angle.
    The polygons are not unioned, they overlap along their radial edges.
    """
    return [
        rotate_points(tooth_profile, i * params.pitch_angle)
        for i in range(params.num_teeth)
    ]


def generate_gear_outline(
    params: GearParam, step: float = INVOLUTE_STEP
) -> List[np.ndarray]:
    """Perform all steps to generate the outline of a gear from its parameters."""
    tooth_profile = generate_tooth_profile(
        params.pitch_angle,
        params.base_circle_radius,
        params.max_radius,
        params.min_radius,
        params.alpha,
        step=step,
    )
    return generate_boundary(tooth_profile, params)


class Gear:
    """A spur gear in a tree of meshed gears.

    The gear owns its geometry and its child gears. It also refers to its
    pinion, the gear that drives it, which is only read for placement and
    phase-locking. The pinion reference keeps the pinion alive, removal only
    cascades down through child_gears.

    Parameters
    ----------
    number_of_teeth: int
        Number of teeth of the gear.
    module: float, optional
        Module of the gear. Default is 3.0.
    pressure_angle: float, optional
        Pressure angle in radians. Default is 20 * PI / 180 (20deg in radians).
        Fixed for the lifetime of the gear.
    center: np.ndarray, optional
        Center of the gear. Only meaningful for root gears, attached gears are
        placed by their pinion. Default is ORIGIN.
    rotation: float, optional
        Rotation of the gear around its own center in radians. Default is 0.
    addendum_coefficient: float, optional
        Addendum height coefficient. Default is 1.0.
    dedendum_coefficient: float, optional
        Dedendum height coefficient. Default is 1.2.
    involute_step: float, optional
        Involute sampling step of the tooth flanks. Default is 0.05.

    Methods
    -------
    add_gear(number_of_teeth, angle)
        Creates a new gear meshed to this one in the direction of angle.
    attach_gear(gear, angle)
        Meshes an existing root gear to this one.
    drive_by(angle)
        Rotates this gear as if the root of the tree turned by angle.
    reset(number_of_teeth=None, module=None)
        Recomputes the geometry, optionally with a new tooth count or module.
    """

    def __init__(
        self,
        number_of_teeth: int,
        module: float = 3.0,
        pressure_angle: float = 20 * DEG2RAD,
        center: np.ndarray = ORIGIN,
        rotation: float = 0.0,
        addendum_coefficient: float = 1.0,
        dedendum_coefficient: float = 1.2,
        involute_step: float = INVOLUTE_STEP,
    ):
        self.inputparam = GearInputParam(
            number_of_teeth=number_of_teeth,
            module=module,
            pressure_angle=pressure_angle,
            addendum_coefficient=addendum_coefficient,
            dedendum_coefficient=dedendum_coefficient,
            involute_step=involute_step,
        )
        self.params: GearParam = None
        self.outline: List[np.ndarray] = None
        self.calc_params()

        self.transform = GearTransform(
            center=np.array(center, dtype=float), angle=rotation
        )
        # azimuth of this gear around its pinion, set when attached
        self.angle = 0.0
        self.child_gears: List["Gear"] = []
        self._pinion: Optional["Gear"] = None
        self._rebuild_callbacks: List[Callable[["Gear"], None]] = []
        self.ratio = 1.0
        self.rotation_speed = 1.0
        self.calc_ratio()

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(number_of_teeth={self.number_of_teeth}, "
            f"module={self.module}, center=({self.x:.4g}, {self.y:.4g}), "
            f"rotation={self.rotation:.4g})"
        )

    @property
    def number_of_teeth(self):
        return self.inputparam.number_of_teeth

    @property
    def module(self):
        return self.inputparam.module

    @property
    def pressure_angle(self):
        return self.inputparam.pressure_angle

    @property
    def pitch_angle(self):
        return self.params.pitch_angle

    @property
    def pitch_radius(self):
        return self.params.pitch_circle_radius

    @property
    def rp(self):
        return self.pitch_radius

    @property
    def tooth_profile(self):
        return self.outline[0]

    @property
    def center(self):
        return self.transform.center

    @property
    def x(self):
        return self.transform.center[0]

    @property
    def y(self):
        return self.transform.center[1]

    @property
    def rotation(self):
        return self.transform.angle

    @rotation.setter
    def rotation(self, value):
        self.transform.angle = value

    @property
    def pinion(self) -> Optional["Gear"]:
        """The gear driving this one, None for the root of a tree."""
        return self._pinion

    @property
    def root(self) -> "Gear":
        gear = self
        while gear.pinion is not None:
            gear = gear.pinion
        return gear

    @property
    def depth(self) -> int:
        """Number of meshes between this gear and the root."""
        depth = 0
        gear = self
        while gear.pinion is not None:
            gear = gear.pinion
            depth += 1
        return depth

    def walk(self) -> Iterator["Gear"]:
        """Iterate over this gear and all of its descendants, pinions first."""
        yield self
        for child in self.child_gears:
            yield from child.walk()

    def calc_params(self):
        """Derives the gear parameters and builds the outline geometry."""
        self.params = generate_gear_params(
            self.inputparam.number_of_teeth,
            self.inputparam.module,
            self.inputparam.pressure_angle,
            addendum_coefficient=self.inputparam.addendum_coefficient,
            dedendum_coefficient=self.inputparam.dedendum_coefficient,
        )
        outline = generate_gear_outline(self.params, step=self.inputparam.involute_step)
        for polygon in outline:
            polygon.setflags(write=False)
        self.outline = outline

    @property
    def outline_transformed(self) -> List[np.ndarray]:
        """Outline polygons placed in the world with the gear's transform."""
        return [self.transform(polygon) for polygon in self.outline]

    def on_geometry_rebuilt(self, callback: Callable[["Gear"], None]):
        """Register a callback to be called with this gear whenever reset()
        rebuilt its geometry. Can be used as a decorator."""
        self._rebuild_callbacks.append(callback)
        return callback

    def remove_geometry_callback(self, callback: Callable[["Gear"], None]):
        """Unregister a callback added with on_geometry_rebuilt()."""
        self._rebuild_callbacks = [
            item for item in self._rebuild_callbacks if item != callback
        ]

    def reset(self, number_of_teeth: int = None, module: float = None):
        """Recomputes parameters and geometry of this gear.

        Tooth count and module can be changed, pressure angle is fixed. The ratio
        chain, placement and phase of this gear and its descendants are updated.

        Raises
        ------
        ModuleMismatch
            If the new module differs from the module of the pinion or a child gear.
        InvalidParameter
            If the new tooth count or module is invalid.
        """
        if number_of_teeth is None:
            number_of_teeth = self.number_of_teeth
        if module is None:
            module = self.module
        neighbours = [self.pinion, *self.child_gears]
        for gear in neighbours:
            if gear is not None and gear.module != module:
                raise ModuleMismatch(
                    f"module {module} does not match module {gear.module} "
                    f"of meshed gear {gear}"
                )

        previous_inputparam = dataclasses.replace(self.inputparam)
        self.inputparam.number_of_teeth = number_of_teeth
        self.inputparam.module = module
        try:
            self.calc_params()
        except InvalidParameter:
            self.inputparam = previous_inputparam
            raise
        self.update_subtree()
        logging.log(logging.DEBUG, f"Gear geometry rebuilt: {self}")
        for callback in list(self._rebuild_callbacks):
            callback(self)
        return self

    def set_position(self, x: float, y: float, move_children: bool = True):
        """Move the gear center to (x, y). Descendants are shifted along by default,
        so they stay meshed."""
        offset = np.array((x, y), dtype=float) - self.transform.center
        if move_children:
            for gear in self.walk():
                gear.transform.center = gear.transform.center + offset
        else:
            self.transform.center = self.transform.center + offset

    def calc_ratio(self):
        self.ratio, self.rotation_speed = calc_ratio(self, self.pinion)

    def position_gear(self, move_children: bool = True):
        """Position this gear relative to its pinion so their pitch circles touch
        in the direction of self.angle."""
        if self.pinion is not None:
            center = calc_mesh_placement_vector(self, self.pinion, self.angle)
            self.set_position(center[0], center[1], move_children=move_children)

    def rotate_gear(self):
        """Rotate this gear so its teeth interlock with the teeth of its pinion."""
        if self.pinion is not None:
            self.rotation += calc_mesh_angle(self, self.pinion, self.angle, self.ratio)

    def update_subtree(self):
        """Recompute ratio, placement and phase of this gear and its descendants,
        pinions first."""
        for gear in self.walk():
            gear.calc_ratio()
            if gear.pinion is not None:
                gear.position_gear(move_children=False)
                gear.rotation = 0.0
                gear.rotate_gear()

    def drive_by(self, angle: float):
        """Rotate this gear as if the root of its tree was turned by angle.
        Does not rotate any other gear."""
        self.rotation += angle * self.rotation_speed

    def attach_gear(self, gear: "Gear", angle: float) -> "Gear":
        """Mesh an existing root gear (with its descendants) to this gear.

        Arguments
        ---------
        gear: Gear
            The gear to become a child of this gear. Must not have a pinion.
        angle: float
            Direction (world angle) of the center of gear seen from this gear.

        Raises
        ------
        CycleOrDuplicateAttachment
            If gear is this gear, already has a pinion, or is an ancestor of this gear.
        ModuleMismatch
            If the modules of the gears differ.
        """
        if gear is self:
            raise CycleOrDuplicateAttachment("a gear cannot be its own pinion")
        if gear.pinion is not None or any(gear is child for child in self.child_gears):
            raise CycleOrDuplicateAttachment(f"{gear} is already attached")
        if self.root is gear:
            raise CycleOrDuplicateAttachment(
                f"{gear} is an ancestor of {self}, attaching would close a loop"
            )
        if gear.module != self.module:
            raise ModuleMismatch(
                f"cannot mesh module {gear.module} gear with module {self.module} gear"
            )

        self.child_gears.append(gear)
        gear._pinion = self
        gear.angle = angle
        gear.calc_ratio()
        gear.position_gear()
        gear.rotation = 0.0
        gear.rotate_gear()
        # existing descendants follow the new ratio chain and phase
        for child in gear.child_gears:
            child.update_subtree()
        logging.log(
            logging.DEBUG,
            f"Attached {gear} to {self} at angle {angle:.4g}, ratio {gear.ratio:.4g}",
        )
        return gear

    def add_gear(self, number_of_teeth: int, angle: float) -> "Gear":
        """Create a new gear meshed to this gear.

        The new gear shares module, pressure angle and tooth shape settings with this
        gear. Its center is placed in the direction of angle, and it is rotated so
        the teeth interlock.

        Returns
        -------
        Gear
            The new child gear.
        """
        new_gear = self.__class__(
            number_of_teeth,
            module=self.module,
            pressure_angle=self.pressure_angle,
            addendum_coefficient=self.inputparam.addendum_coefficient,
            dedendum_coefficient=self.inputparam.dedendum_coefficient,
            involute_step=self.inputparam.involute_step,
        )
        return self.attach_gear(new_gear, angle)

    def remove_gear(self, gear: "Gear") -> "Gear":
        """Detach a child gear (with its descendants) from this gear."""
        if not any(gear is child for child in self.child_gears):
            raise ValueError(f"{gear} is not a child of {self}")
        self.child_gears = [child for child in self.child_gears if child is not gear]
        gear._pinion = None
        for descendant in gear.walk():
            descendant.calc_ratio()
        logging.log(logging.DEBUG, f"Detached {gear} from {self}")
        return gear

    def detach(self) -> "Gear":
        """Remove this gear from its pinion. The gear becomes the root of its own
        tree, keeping its current position and rotation."""
        pinion = self.pinion
        if pinion is None:
            return self
        return pinion.remove_gear(self)


def get_outline(gear: Gear) -> List[np.ndarray]:
    """Closed polygon loops of the gear in its own frame, one per tooth."""
    return gear.outline


def get_transform(gear: Gear) -> GearTransform:
    """Snapshot of the world placement of the gear: center (x, y) and rotation."""
    return GearTransform(center=gear.center.copy(), angle=gear.rotation)
