import numpy as np
import yaml
from pydantic import ValidationError
from spurtrain.defs import *
from spurtrain.gearmath import calc_mesh_phase_error
from spurtrain.spurtrain_core import Gear
from spurtrain.geartrain import GearTrain, GearTrainRecord
from spurtrain.exceptions import ModuleMismatch
import pytest as pytest


def make_train():
    root = Gear(20, module=2, center=np.array((5.0, 1.0)), rotation=0.1)
    a = root.add_gear(10, angle=0.4)
    a.add_gear(33, angle=PI / 2)
    a.add_gear(18, angle=-PI / 3)
    root.add_gear(45, angle=PI)
    return GearTrain(root)


def test_train_walk():
    train = make_train()
    gears = train.gears
    assert len(train) == 5
    assert gears[0] is train.root
    assert [gear.number_of_teeth for gear in gears] == [20, 10, 33, 18, 45]
    assert train.find(2) is gears[2]
    assert train.index_of(gears[3]) == 3
    with pytest.raises(ValueError):
        train.index_of(Gear(12))


def test_train_drive():
    train = make_train()
    rotations = [gear.rotation for gear in train]
    train.drive(0.75)
    for gear, rotation in zip(train, rotations):
        assert gear.rotation == pytest.approx(rotation + 0.75 * gear.rotation_speed)
    for gear in train.gears[1:]:
        assert calc_mesh_phase_error(gear) == pytest.approx(0, abs=1e-9)


def test_train_detach():
    train = make_train()
    a = train.find(1)
    with pytest.raises(ValueError):
        train.detach(train.root)
    assert train.detach(a) is a
    assert len(train) == 2
    assert len(GearTrain(a)) == 3


def test_record():
    train = make_train()
    record = train.to_record()
    assert record.center == (5.0, 1.0)
    assert record.rotation == pytest.approx(0.1)
    assert [gear.pinion for gear in record.gears] == [None, 0, 1, 1, 0]
    assert record.gears[2].angle == pytest.approx(PI / 2)
    assert set(record.gears[0].model_dump()) == {
        "number_of_teeth",
        "module",
        "pressure_angle",
        "pinion",
        "angle",
    }


def test_record_roundtrip_driven():
    train = make_train()
    train.drive(2.5)
    rebuilt = GearTrain.from_record(train.to_record())
    for gear, gear_rebuilt in zip(train, rebuilt):
        assert gear_rebuilt.number_of_teeth == gear.number_of_teeth
        assert gear_rebuilt.center == pytest.approx(gear.center)
        assert gear_rebuilt.rotation == pytest.approx(gear.rotation)
        assert gear_rebuilt.rotation_speed == pytest.approx(gear.rotation_speed)


def test_yaml_roundtrip(tmp_path):
    train = make_train()
    train.drive(-0.3)
    path = tmp_path / "train.yaml"
    train.save_yaml(path)

    with open(path) as f:
        data = yaml.safe_load(f)
    assert data["gears"][0]["number_of_teeth"] == 20
    assert data["gears"][1]["pinion"] == 0

    loaded = GearTrain.load_yaml(path)
    assert len(loaded) == len(train)
    for gear, gear_loaded in zip(train, loaded):
        assert gear_loaded.center == pytest.approx(gear.center)
        assert gear_loaded.rotation == pytest.approx(gear.rotation)


@pytest.mark.parametrize(
    "gears",
    [
        [],
        [{"number_of_teeth": 20, "module": 3, "pinion": 0}],
        [
            {"number_of_teeth": 20, "module": 3},
            {"number_of_teeth": 10, "module": 3},
        ],
        [
            {"number_of_teeth": 20, "module": 3},
            {"number_of_teeth": 10, "module": 3, "pinion": 2},
            {"number_of_teeth": 12, "module": 3, "pinion": 0},
        ],
        [{"number_of_teeth": 0, "module": 3}],
        [{"number_of_teeth": 20, "module": 0}],
        [{"number_of_teeth": 20, "module": 3, "pressure_angle": PI / 2}],
        [{"number_of_teeth": 20, "module": 3, "pressure_angle": 0.0}],
    ],
)
def test_invalid_record(gears):
    with pytest.raises(ValidationError):
        GearTrainRecord.model_validate({"gears": gears})


def test_record_module_mismatch():
    record = GearTrainRecord.model_validate(
        {
            "gears": [
                {"number_of_teeth": 20, "module": 3},
                {"number_of_teeth": 10, "module": 2, "pinion": 0, "angle": 0.0},
            ]
        }
    )
    with pytest.raises(ModuleMismatch):
        GearTrain.from_record(record)
