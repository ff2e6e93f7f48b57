import math

import pytest

from simcore.errors import BodyNotFoundError, InvalidParameterError
from simcore.registry import BodyRegistry


def test_create_body_defaults():
    reg = BodyRegistry()
    name = reg.create_body()
    body = reg.get(name)
    assert name == "Body 1"
    assert body.size == 1.0
    assert body.mass == 10.0
    assert body.position == (0.0, 0.0, 0.0)
    assert body.velocity == (0.0, 0.0, 0.0)
    assert body.frozen is False
    assert body.primary_body == name


def test_name_collision_is_renamed():
    reg = BodyRegistry()
    first = reg.create_body(name="X", mass=1)
    second = reg.create_body(name="X", mass=2)
    assert first == "X"
    assert second == "Body 2"
    assert len(reg) == 2
    assert reg.get("X").mass == 1
    assert reg.get("Body 2").mass == 2


def test_generated_name_skips_taken_names():
    reg = BodyRegistry()
    reg.create_body(name="Body 2")
    assert reg.create_body() == "Body 3"
    assert reg.names() == ["Body 2", "Body 3"]


def test_get_unknown_name():
    reg = BodyRegistry()
    with pytest.raises(BodyNotFoundError) as exc_info:
        reg.get("Nope")
    assert isinstance(exc_info.value, KeyError)
    assert "Nope" in str(exc_info.value)


def test_iteration_is_ordered_and_restartable():
    reg = BodyRegistry()
    for name in ("c", "a", "b"):
        reg.create_body(name=name)
    assert [name for name, _ in reg.items()] == ["c", "a", "b"]
    assert [name for name, _ in reg] == ["c", "a", "b"]
    assert all(body.name == name for name, body in reg)


@pytest.mark.parametrize("mass", [0, -1, math.nan, math.inf])
def test_invalid_mass_rejected(mass):
    reg = BodyRegistry()
    with pytest.raises(InvalidParameterError):
        reg.create_body(mass=mass)
    assert len(reg) == 0


@pytest.mark.parametrize("size", [0, -5, math.inf])
def test_invalid_size_rejected(size):
    with pytest.raises(InvalidParameterError):
        BodyRegistry().create_body(size=size)


def test_vectors_are_stored_as_float_triples():
    reg = BodyRegistry()
    name = reg.create_body(position=[1, 2, 3], velocity=(4, 5, 6), frozen=1)
    body = reg.get(name)
    assert body.position == (1.0, 2.0, 3.0)
    assert isinstance(body.position, tuple)
    assert body.velocity == (4.0, 5.0, 6.0)
    assert body.frozen is True


@pytest.mark.parametrize("kwargs", [
    {"mass": "heavy"},
    {"mass": None},
    {"size": [1, 2]},
    {"position": (1, 2)},
    {"velocity": ("a", 0, 0)},
    {"position": 5},
])
def test_malformed_values_raise_invalid_parameter(kwargs):
    reg = BodyRegistry()
    with pytest.raises(InvalidParameterError):
        reg.create_body(**kwargs)
    assert len(reg) == 0
