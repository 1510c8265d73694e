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

from spurtrain import *
from spurtrain.spurtrain_build123d import GearBuilder, choose_color
from ocp_vscode import show
import logging

# These examples are meant to showcase the functionality of the library,
# and serve as manual testing templates for the developer.

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s"
)


def simple_pair():
    gear1 = Gear(number_of_teeth=20)
    gear1.add_gear(10, angle=0)
    return GearTrain(gear1)


def clock_train():
    """Branching train, a few gears hanging off a central driver."""
    driver = Gear(number_of_teeth=40, module=1.5)
    idler = driver.add_gear(17, angle=PI / 5)
    idler.add_gear(31, angle=PI / 2)
    driver.add_gear(12, angle=-2 * PI / 3)
    reducer = driver.add_gear(60, angle=PI)
    reducer.add_gear(20, angle=PI * 1.3)
    return GearTrain(driver)


def build_train(train: GearTrain, height=3.0, seed=0):
    rng = np.random.default_rng(seed)
    builders = [
        GearBuilder(gear, height=height, color=choose_color(rng=rng))
        for gear in train
    ]
    return builders


if __name__ == "__main__":
    train = clock_train()
    # a quarter turn of the driver, all others follow by their ratios
    train.drive(PI / 2)
    for gear in train:
        print(f"{gear}, speed {gear.rotation_speed:.4f}")
    builders = build_train(train)
    show(*[builder.part_transformed for builder in builders])
