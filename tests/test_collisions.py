import math
import numpy as np
from hypothesis import given, settings, strategies as st

from gravitywell import Simulation
from gravitywell.presets import create_body
from gravitywell.physics_utils import merge_bodies, find_body_collision
from gravitywell import constants as C


def _still_sim(**kwargs):
    """Simulation without gravity so placed bodies stay where they are put."""
    return Simulation(g_constant=0.0, seed=3, **kwargs)


def test_overlapping_planets_merge_into_one():
    sim = _still_sim()
    a = sim.place_body("earth", 300.0, 0.0)
    b = sim.place_body("mars", 310.0, 0.0)
    assert len(sim.bodies) == 3

    report = sim.advance_tick()

    assert len(sim.bodies) == 2
    assert all(body is not a and body is not b for body in sim.bodies)
    merged = sim.bodies[-1]
    assert report.merged is merged
    assert report.merged_from == (a, b)
    assert len(sim.explosions) == 1
    assert len(sim.explosions[0]) == C.EXPLOSION_PARTICLES


def test_merged_body_properties():
    a = create_body("earth", (0.0, 0.0), (1.0, 2.0), name="A")
    b = create_body("jupiter", (10.0, 5.0), (-3.0, 0.5), name="B")
    a.update_trail()
    merged = merge_bodies(a, b)

    assert merged.mass == a.mass + b.mass
    assert merged.size == math.sqrt(a.size ** 2 + b.size ** 2)
    assert merged.kind == "jupiter"
    assert merged.color == b.color
    assert merged.name == "B+A"
    assert len(merged.trail) == 0
    assert np.allclose(merged.pos, (a.mass * a.pos + b.mass * b.pos) / (a.mass + b.mass))


def test_merge_tie_keeps_first_identity():
    a = create_body("earth", (0.0, 0.0), name="A")
    b = create_body("earth", (1.0, 0.0), name="B")
    assert merge_bodies(a, b).name == "A+B"


finite = st.floats(-1e3, 1e3, allow_nan=False, allow_infinity=False)
positive = st.floats(1e-3, 1e4, allow_nan=False, allow_infinity=False)


@given(positive, positive, finite, finite, finite, finite)
@settings(max_examples=50)
def test_merge_conserves_mass_and_momentum(m1, m2, vx1, vy1, vx2, vy2):
    a = create_body("earth", (0.0, 0.0), (vx1, vy1))
    b = create_body("mars", (1.0, 1.0), (vx2, vy2))
    a.mass, b.mass = m1, m2

    merged = merge_bodies(a, b)

    assert merged.mass == m1 + m2
    expected_vel = (m1 * a.vel + m2 * b.vel) / (m1 + m2)
    assert np.array_equal(merged.vel, expected_vel)


def test_sun_merge_keeps_sun_first():
    sim = _still_sim()
    sim.place_body("earth", 30.0, 0.0)
    sim.place_body("mars", 0.0, 400.0)

    sim.advance_tick()

    assert len(sim.bodies) == 2
    assert sim.bodies[0].kind == "sun"
    assert sim.bodies[0].name == "Sun+Earth 1"
    assert sim.bodies[0].mass == C.SUN_MASS + 3.0
    assert sim.bodies[1].name == "Mars 2"


def test_only_one_merge_per_tick():
    sim = _still_sim()
    sim.place_body("earth", 300.0, 0.0)
    sim.place_body("earth", 305.0, 0.0)
    sim.place_body("earth", 310.0, 0.0)

    sim.advance_tick()
    assert len(sim.bodies) == 3
    assert find_body_collision(sim.bodies) is not None

    sim.advance_tick()
    assert len(sim.bodies) == 2
    assert sim.bodies[1].mass == 9.0
    assert len(sim.explosions) == 2


def test_satellites_follow_merged_reference():
    sim = _still_sim()
    planet = sim.place_body("jupiter", 300.0, 0.0)
    moon = sim.place_body("moon", 300.0, 80.0)
    assert moon.reference is planet
    sim.place_body("mars", 320.0, 0.0)

    sim.advance_tick()

    assert moon in sim.satellites
    assert moon.reference is sim.bodies[-1]
    assert moon.orbit_radius == math.hypot(
        moon.pos[0] - moon.reference.pos[0], moon.pos[1] - moon.reference.pos[1]
    )


def test_satellite_hitting_planet_is_destroyed():
    sim = _still_sim()
    planet = sim.place_body("mars", 300.0, 0.0)
    moon = sim.place_body("moon", 310.0, 0.0)
    assert moon.reference is planet

    report = sim.advance_tick()

    assert sim.satellites == []
    assert report.destroyed_satellites == [moon]
    assert planet in sim.bodies
    assert planet.mass == 1.0
    assert len(sim.explosions) == 1


def test_satellites_colliding_destroy_each_other():
    sim = _still_sim()
    sim.set_orbit_rate_factor(0.0)
    m1 = sim.place_body("moon", 300.0, 0.0)
    m2 = sim.place_body("moon", 305.0, 0.0)

    report = sim.advance_tick()

    assert sim.satellites == []
    assert report.destroyed_satellites == [m1, m2]
    assert len(sim.bodies) == 1
    group = sim.explosions[0]
    # particles have moved one tick from the midpoint
    offsets = [np.hypot(*(p.pos - (302.5, 0.0))) for p in group.particles]
    assert all(2.0 - 1e-9 <= d < 5.0 + 1e-9 for d in offsets)


def test_distant_bodies_do_not_collide():
    sim = _still_sim()
    sim.place_body("earth", 300.0, 0.0)
    sim.place_body("earth", 400.0, 0.0)
    report = sim.advance_tick()
    assert not report.any
    assert len(sim.bodies) == 3
    assert sim.explosions == []
