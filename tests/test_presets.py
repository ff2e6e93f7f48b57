import json
import logging

import pytest

from simcore.presets import get_scene, list_templates, load_template
from simcore.simulation import Simulation


def test_earth_moon_scene():
    scene = get_scene("earth_moon")
    sim = Simulation(scene.make_settings())
    names = sim.add_bodies(scene.bodies)
    assert names == ["Earth", "Moon", "Spacecraft"]
    assert sim.get_body("Earth").frozen is True
    assert sim.get_body("Moon").velocity == (0.0, 1000.0, 0.0)


def test_sun_earth_stays_bound():
    scene = get_scene("sun_earth")
    sim = Simulation(scene.make_settings())
    sim.add_bodies(scene.bodies)
    sim.run(24)
    assert sim.settings.target_time_step == 3600
    earth = next(b for b in sim.telemetry().bodies if b.name == "Earth")
    assert earth.primary_body == "Sun"
    assert earth.escaping is False


def test_bundled_template():
    assert ("three_body.json", "Binary with a visitor") in list_templates()
    scene = load_template("three_body.json")
    assert [b["name"] for b in scene.bodies] == ["Star A", "Star B", "Visitor"]
    settings = scene.make_settings()
    assert settings.target_time_step == 600
    assert settings.min_force == 0
    assert settings.position_update == "reference"


def test_bad_entries_are_skipped(tmp_path, caplog):
    path = tmp_path / "scene.json"
    path.write_text(json.dumps({
        "bodies": [
            {"name": "Good", "mass": 5, "position": [1, 2, 3], "frozen": True},
            {"name": "NoMass"},
            {"name": "BadVector", "mass": 1, "velocity": [1, 2]},
            {"name": "BadColor", "mass": 1, "color": "red", "size": "2"},
        ]
    }))
    with caplog.at_level(logging.WARNING, logger="simcore.presets"):
        scene = load_template(str(path))
    assert scene.name == "scene"
    assert [b["name"] for b in scene.bodies] == ["Good", "BadColor"]
    assert scene.bodies[0]["frozen"] is True
    assert scene.bodies[1]["color"] == (255, 255, 0)
    assert scene.bodies[1]["size"] == 2.0
    assert len(caplog.records) == 2


def test_unreadable_template(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert load_template(str(path)) is None


def test_unknown_scene():
    with pytest.raises(KeyError):
        get_scene("no_such_scene")
