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

"""Gear tree store and its persisted form."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import numpy as np
import yaml
from pydantic import BaseModel, Field, model_validator

from spurtrain.defs import *
from spurtrain.spurtrain_core import Gear


class GearRecord(BaseModel):
    """Persisted form of one gear."""

    number_of_teeth: int = Field(ge=1, description="Number of teeth")
    module: float = Field(gt=0, description="Gear module")
    pressure_angle: float = Field(
        default=20 * DEG2RAD, gt=0, lt=PI / 2, description="Pressure angle in radians"
    )
    pinion: Optional[int] = Field(
        default=None, ge=0, description="Index of the driving gear, None for the root"
    )
    angle: float = Field(default=0.0, description="Azimuth around the pinion")


class GearTrainRecord(BaseModel):
    """Persisted form of a gear tree. Gears are listed pinions first."""

    center: Tuple[float, float] = (0.0, 0.0)
    rotation: float = Field(default=0.0, description="Rotation of the root gear")
    gears: List[GearRecord] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_tree(self) -> "GearTrainRecord":
        if self.gears[0].pinion is not None:
            raise ValueError("the first gear must be the root of the train")
        for index, gear in enumerate(self.gears[1:], start=1):
            if gear.pinion is None:
                raise ValueError(f"gear {index} has no pinion, only one root is allowed")
            if gear.pinion >= index:
                raise ValueError(
                    f"gear {index} refers to pinion {gear.pinion}, "
                    "pinions must be listed before the gears they drive"
                )
        return self


class GearTrain:
    """A tree of meshed gears, owned from its root gear.

    Parameters
    ----------
    root: Gear
        Root (driving) gear. If it has a pinion, the tree is cut there.
    """

    def __init__(self, root: Gear):
        self.root = root.detach()

    def __len__(self):
        return sum(1 for _ in self.root.walk())

    def __iter__(self) -> Iterator[Gear]:
        return self.root.walk()

    @property
    def gears(self) -> List[Gear]:
        """All gears of the tree, pinions before the gears they drive."""
        return list(self.root.walk())

    def find(self, index: int) -> Gear:
        return self.gears[index]

    def index_of(self, gear: Gear) -> int:
        for index, item in enumerate(self.root.walk()):
            if item is gear:
                return index
        raise ValueError(f"{gear} is not part of this gear train")

    def drive(self, angle: float):
        """Turn the root by angle and every other gear accordingly."""
        for gear in self.root.walk():
            gear.drive_by(angle)

    def detach(self, gear: Gear) -> Gear:
        """Remove gear and its descendants from the train."""
        if gear is self.root:
            raise ValueError("the root of a gear train cannot be detached")
        self.index_of(gear)
        return gear.detach()

    def to_record(self) -> GearTrainRecord:
        gears = self.gears
        index_map = {id(gear): index for index, gear in enumerate(gears)}
        records = []
        for gear in gears:
            pinion = gear.pinion
            records.append(
                GearRecord(
                    number_of_teeth=gear.number_of_teeth,
                    module=gear.module,
                    pressure_angle=gear.pressure_angle,
                    pinion=None if pinion is None else index_map[id(pinion)],
                    angle=gear.angle,
                )
            )
        return GearTrainRecord(
            center=(float(self.root.x), float(self.root.y)),
            rotation=float(self.root.rotation),
            gears=records,
        )

    @classmethod
    def from_record(cls, record: GearTrainRecord) -> "GearTrain":
        """Rebuild the tree by attaching the recorded gears in order."""
        root_record = record.gears[0]
        root = Gear(
            root_record.number_of_teeth,
            module=root_record.module,
            pressure_angle=root_record.pressure_angle,
            center=np.array(record.center),
            rotation=record.rotation,
        )
        gears = [root]
        for gear_record in record.gears[1:]:
            pinion = gears[gear_record.pinion]
            gear = Gear(
                gear_record.number_of_teeth,
                module=gear_record.module,
                pressure_angle=gear_record.pressure_angle,
            )
            gears.append(pinion.attach_gear(gear, gear_record.angle))
        logging.log(logging.DEBUG, f"Gear train rebuilt with {len(gears)} gears")
        return cls(root)

    def to_dict(self) -> dict:
        return self.to_record().model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> "GearTrain":
        return cls.from_record(GearTrainRecord.model_validate(data))

    def save_yaml(self, path):
        data = self.to_dict()
        with open(Path(path), "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)

    @classmethod
    def load_yaml(cls, path) -> "GearTrain":
        with open(Path(path)) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)
