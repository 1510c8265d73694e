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
from spurtrain.function_generators import involute_circle
from spurtrain.exceptions import InvalidParameter


class InvoluteCurve:
    """
    Sampled involute of a circle, from the base circle out to a limiting radius.

    The curve is a lazy, finite sequence of 2D points: iterating it steps the unwind
    angle t from 0 by `step` and yields points until one reaches or exceeds r_max,
    then yields the exact endpoint lying on r_max. Every iteration starts over from
    t=0, so the object can be iterated any number of times.

    Parameters
    ----------
    r_base : float
        Base circle radius.
    r_max : float
        Radius where the curve ends. Must not be smaller than r_base.
    step : float, optional
        Unwind angle increment between samples. Default is INVOLUTE_STEP.
    """

    def __init__(self, r_base: float, r_max: float, step: float = INVOLUTE_STEP):
        if not r_base > 0:
            raise InvalidParameter(f"base radius must be positive, got {r_base}")
        if r_max < r_base:
            raise InvalidParameter(
                f"max radius {r_max} is smaller than base radius {r_base}"
            )
        if not step > 0:
            raise InvalidParameter(f"involute step must be positive, got {step}")
        self.r_base = r_base
        self.r_max = r_max
        self.step = step

    def __call__(self, t):
        return involute_circle(t, r=self.r_base)

    @property
    def t_end(self):
        """Unwind angle where the involute crosses r_max."""
        return np.sqrt((self.r_max / self.r_base) ** 2 - 1)

    def __iter__(self):
        t = 0.0
        point = self(t)
        # first point goes in before any radius check, so there are always 2 points
        yield point
        while np.linalg.norm(point) < self.r_max:
            t += self.step
            point = self(t)
            yield point
        yield self(self.t_end)

    def points(self) -> np.ndarray:
        return np.array(list(self))


def generate_involute_curve(r_base, r_max, step=INVOLUTE_STEP) -> np.ndarray:
    return InvoluteCurve(r_base, r_max, step=step).points()
