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

from spurtrain.defs import *
from spurtrain.spurtrain_base_classes import GearTransform
from spurtrain.spurtrain_core import Gear
from build123d import *
import numpy as np
import time
import logging
import warnings
import weakref


class GearBuilder:
    """A class for building build123d Part objects from gear outlines.

    The outline polygons of the gear are converted to faces, fused into one sketch
    and extruded in the gear's own frame, on the XY plane. The gear's transform is
    applied after conversion to represent the placed part.

    Parameters
    ----------
    gear : Gear
        The gear object to build.
    height : float, optional
        Extrusion depth along Z. The default is 2.0.
    color : int, optional
        Hex RGB color code of the part, e.g. 0x3881F0. The default is None, which
        picks a color from the default palette.
    rebuild_on_reset : bool, optional
        If True, the solid is rebuilt whenever the gear's geometry is reset.
        The hook does not keep the builder alive, release() removes it early.
        The default is True.
    """

    def __init__(
        self,
        gear: Gear,
        height: float = 2.0,
        color: int = None,
        rebuild_on_reset: bool = True,
    ):
        self.gear = gear
        self.height = height
        self.color = choose_color() if color is None else color
        self.build_part()
        self._reset_hook = None
        if rebuild_on_reset:
            self._reset_hook = gear.on_geometry_rebuilt(weak_reset_hook(self))

    def build_part(self):
        start = time.time()
        r_max = self.gear.params.max_radius
        faces = [
            outline_to_face(polygon, r_max=r_max) for polygon in self.gear.outline
        ]
        sketch = Sketch() + faces
        solid = extrude(sketch, amount=self.height)
        self.solid = fix_attempt(solid)
        self.solid.color = Color(self.color)
        self.part = Part() + self.solid
        self.part.color = Color(self.color)
        logging.log(
            logging.INFO, f"Gear solid build time: {time.time()-start:.5f} seconds"
        )
        self.update_part()
        return self.part

    def update_part(self):
        """Re-apply the current transform of the gear to the built part."""
        self.part_transformed = apply_transform_part(self.part, self.gear.transform)
        self.part_transformed.color = Color(self.color)
        return self.part_transformed

    def on_gear_reset(self, gear: Gear):
        self.build_part()

    def release(self):
        """Stop following geometry resets of the gear."""
        if self._reset_hook is not None:
            self.gear.remove_geometry_callback(self._reset_hook)
            self._reset_hook = None


def weak_reset_hook(builder: GearBuilder):
    """Rebuild hook that does not keep the builder alive. Once the builder is
    collected, the hook removes itself from the gear on the next reset."""
    method_ref = weakref.WeakMethod(builder.on_gear_reset)

    def hook(gear: Gear):
        method = method_ref()
        if method is None:
            gear.remove_geometry_callback(hook)
        else:
            method(gear)

    return hook


def outline_to_face(points: np.ndarray, r_max: float = None, tol: float = DELTA):
    """Convert a closed polygon of 2D points into a planar build123d face.

    Points farther than r_max from the origin are dropped. The flank sample that
    overshoots the tip circle folds back onto the flank and would make the wire
    cross itself.
    """
    if r_max is not None:
        points = points[np.linalg.norm(points, axis=1) <= r_max * (1 + tol)]
    # consecutive coincident points would make zero length edges
    keep = np.ones(points.shape[0], dtype=bool)
    keep[1:] = np.linalg.norm(np.diff(points, axis=0), axis=1) > tol
    points = points[keep]
    if np.linalg.norm(points[-1] - points[0]) <= tol:
        points = points[:-1]
    return Polygon(*[(p[0], p[1]) for p in points], align=None)


def apply_transform_part(part: Part, transform: GearTransform):
    part = Rotation(0, 0, transform.angle * RAD2DEG) * part
    part = part.translate(Vector(transform.x, transform.y, 0))
    return part


def transform2Location(transform: GearTransform):
    loc = Location(
        Vector(transform.x, transform.y, 0),
        (0, 0, transform.angle * RAD2DEG),
    )
    return loc


def choose_color(palette=COLORS, rng: np.random.Generator = None) -> int:
    """Pick a color code from palette.

    The random source can be injected for a reproducible choice, e.g.
    ``choose_color(rng=np.random.default_rng(42))``.
    """
    if len(palette) == 0:
        raise ValueError("color palette is empty")
    if rng is None:
        rng = np.random.default_rng()
    return palette[int(rng.integers(len(palette)))]


def fix_attempt(solid):
    valid = solid.is_valid
    # method in older build123d releases, property in newer ones
    if callable(valid):
        valid = valid()
    if not valid:
        warnings.warn("Invalid solid found", RuntimeWarning, stacklevel=2)
        solid = solid.fix()
    return solid
