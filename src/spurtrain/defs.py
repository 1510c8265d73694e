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

DEG2RAD = np.pi / 180
RAD2DEG = 180 / np.pi
PI = np.pi

# numerical comparison global 'small value'
DELTA = 1e-9

# Dimension and shape conventions
# Everything in this package lives in the gear plane, so points are 2D row vectors,
# shape(2). Point sequences (polygons, curves) are arrays of shape (n, 2).
VSHAPE = 2

# Geometry: directions
ORIGIN = np.array((0.0, 0.0))
"""The center of the coordinate system."""
UP = np.array((0.0, 1.0))
"""One unit step in the positive Y direction."""
DOWN = np.array((0.0, -1.0))
"""One unit step in the negative Y direction."""
RIGHT = np.array((1.0, 0.0))
"""One unit step in the positive X direction."""
LEFT = np.array((-1.0, 0.0))
"""One unit step in the negative X direction."""

# involute sampling step, in radians of unwind angle
INVOLUTE_STEP = 0.05

# default display palette, picked from by the rendering side
COLORS = (
    0x96A365,
    0x93A35A,
    0x9AE2F0,
    0xD861BB,
    0xA939A7,
    0xF6D1CB,
    0xE5D1D0,
    0x3881F0,
    0x064DBF,
    0xF6D061,
    0xF5D44F,
    0xC73A4A,
    0xDC4530,
)
