import math

import pytest

from simcore.constants import EARTH_MASS, G
from simcore.errors import NumericDegeneracyError
from simcore.telemetry import all_finite, total_momentum


def test_one_step_from_closed_form(make_sim):
    sim = make_sim(target_time_step=60, min_force=0)
    sim.create_body(name="Earth", mass=EARTH_MASS, frozen=True)
    sim.create_body(name="Probe", mass=1000, position=(-3.844e8, 0, 0), velocity=(0, 1000, 0))

    dt = sim.step()

    a = G * EARTH_MASS / 3.844e8 ** 2
    probe = sim.get_body("Probe")
    assert dt == 60
    assert probe.velocity[0] == pytest.approx(a * 60, rel=1e-6)
    assert probe.velocity[1] == 1000
    # reference mode: x += v*dt + a*dt/2 with the updated velocity
    assert probe.position[0] == pytest.approx(-3.844e8 + a * 60 * 60 + 0.5 * a * 60, rel=1e-12)
    assert probe.position[1] == pytest.approx(60000)


def test_exact_position_update_squares_dt(make_sim):
    sim = make_sim(target_time_step=10, min_force=0, position_update="exact")
    sim.create_body(name="Sun", mass=1e20, frozen=True)
    sim.create_body(name="P", mass=1, position=(1e6, 0, 0))

    a = -G * 1e20 / 1e12
    sim.step()

    p = sim.get_body("P")
    assert p.velocity[0] == pytest.approx(a * 10)
    assert p.position[0] == pytest.approx(1e6 + a * 10 * 10 + 0.5 * a * 100)


def test_frozen_body_never_moves(make_sim):
    sim = make_sim(target_time_step=30, min_force=0)
    sim.create_body(name="Anchor", mass=1e22, position=(1, 2, 3), velocity=(4, 5, 6), frozen=True)
    sim.create_body(name="A", mass=5e21, position=(1e7, 0, 0), velocity=(0, 500, 0))
    sim.create_body(name="B", mass=1e3, position=(0, -2e7, 1e6))

    sim.run(200)

    anchor = sim.get_body("Anchor")
    assert anchor.position == (1.0, 2.0, 3.0)
    assert anchor.velocity == (4.0, 5.0, 6.0)
    assert sim.get_body("A").position != (1e7, 0.0, 0.0)


def test_updates_use_start_of_step_snapshot(make_sim):
    sim = make_sim(target_time_step=1, min_force=0)
    sim.create_body(name="L", mass=1e12, position=(-1000, 0, 0))
    sim.create_body(name="R", mass=1e12, position=(1000, 0, 0))

    sim.step()

    left, right = sim.get_body("L"), sim.get_body("R")
    assert left.position[0] == -right.position[0]
    assert left.velocity[0] == -right.velocity[0]


def test_two_body_momentum_is_conserved(make_sim):
    sim = make_sim(target_time_step=1, min_force=0)
    sim.create_body(name="Heavy", mass=6e24, velocity=(0, -0.5, 0))
    sim.create_body(name="Light", mass=5e22, position=(4e8, 0, 0), velocity=(0, 1000, 0))
    start = total_momentum(sim.registry)
    scale = 5e22 * 1000

    sim.run(2000)

    end = total_momentum(sim.registry)
    for before, after in zip(start, end):
        assert abs(after - before) <= 1e-9 * scale


def test_clock_advances_and_records_durations(make_sim, fake_clock):
    sim = make_sim(target_time_step=120, history_limit=5)
    sim.create_body(name="A")

    sim.run(12)

    assert sim.clock.steps == 12
    assert sim.clock.elapsed == 12 * 120
    assert sim.clock.time_step == 120
    assert len(sim.clock.step_durations) == 5
    assert sim.clock.last_step_duration == pytest.approx(fake_clock.tick)
    assert sim.clock.average_step_duration() == pytest.approx(fake_clock.tick)


def test_fastest_speed_is_tracked(make_sim):
    sim = make_sim(min_force=0)
    sim.create_body(name="Slow", velocity=(3, 4, 0))
    sim.create_body(name="Fast", velocity=(0, 0, 20), position=(1e9, 0, 0))

    sim.step()

    assert sim.clock.fastest_speed == pytest.approx(20, rel=1e-6)


def test_coincident_bodies_poison_state(make_sim):
    # Degenerate pairs are not guarded by default: NaN flows into the state
    sim = make_sim(min_force=0)
    sim.create_body(name="A", mass=1)
    sim.create_body(name="B", mass=1)
    sim.create_body(name="Far", mass=1, position=(1e3, 0, 0))

    sim.run(3)

    assert not all_finite(sim.registry)
    assert all(math.isnan(c) for c in sim.get_body("A").position)
    assert sim.clock.steps == 3


def test_guarded_coincidence_raises_before_mutation(make_sim):
    sim = make_sim(min_force=0, guard_degenerate=True)
    sim.create_body(name="A", mass=1)
    sim.create_body(name="B", mass=1)

    with pytest.raises(NumericDegeneracyError):
        sim.step()
    assert all_finite(sim.registry)
    assert sim.clock.steps == 0
