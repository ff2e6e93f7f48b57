import logging

import pytest

from simcore.config import SimulationSettings
from simcore.errors import InvalidParameterError


def test_defaults():
    s = SimulationSettings()
    assert s.timestep_mode == "fixed"
    assert s.target_time_step == 300
    assert s.min_force == 0.1
    assert s.position_update == "reference"
    assert s.history_limit == 3000
    assert s.adaptive_time is False


@pytest.mark.parametrize("field", ["timestep_mode", "position_update"])
def test_unknown_modes_rejected(field):
    with pytest.raises(InvalidParameterError):
        SimulationSettings(**{field: "bogus"})


def test_values_are_clamped():
    s = SimulationSettings(min_force=-1, speed_limit_max_reduction=2, history_limit=0,
                           speed_limit_threshold=500, speed_limit_cap=100)
    assert s.min_force == 0.0
    assert s.speed_limit_max_reduction == 1.0
    assert s.history_limit == 1
    assert s.speed_limit_cap == 500


def test_copy_is_independent():
    s = SimulationSettings()
    t = s.copy(min_force=0)
    assert t.min_force == 0
    assert s.min_force == 0.1


def test_from_mapping(caplog):
    with caplog.at_level(logging.WARNING, logger="simcore.config"):
        s = SimulationSettings.from_mapping({
            "target_time_step": "60",
            "history_limit": 10.0,
            "min_force": "none",
            "adaptive_time": 1,
            "timestep_mode": "realtime",
            "colour": "blue",
        })
    assert s.target_time_step == 60.0
    assert s.history_limit == 10
    assert s.min_force == 0.1
    assert s.adaptive_time is True
    assert s.timestep_mode == "realtime"
    assert len(caplog.records) == 2


@pytest.mark.parametrize("raw, expected", [
    ("false", False),
    ("False", False),
    ("no", False),
    (0, False),
    ("true", True),
    ("on", True),
    (True, True),
])
def test_from_mapping_parses_flags(raw, expected):
    s = SimulationSettings.from_mapping({"adaptive_time": raw, "guard_degenerate": raw})
    assert s.adaptive_time is expected
    assert s.guard_degenerate is expected


def test_from_mapping_ignores_unreadable_flags(caplog):
    with caplog.at_level(logging.WARNING, logger="simcore.config"):
        s = SimulationSettings.from_mapping({"adaptive_time": "maybe"})
    assert s.adaptive_time is False
    assert "non-boolean" in caplog.records[0].getMessage()
