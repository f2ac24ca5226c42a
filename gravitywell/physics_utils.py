"""Collision detection and resolution.

Three scans run each tick, in this order: massive body pairs, satellite
against massive body, satellite pairs. Each scan resolves at most one
collision per call; remaining overlaps are picked up on the next tick.
"""
from dataclasses import dataclass, field
import logging
import math

from .physics import MassiveBody
from .particles import spawn_explosion

logger = logging.getLogger(__name__)


@dataclass
class CollisionReport:
    """What the collision scans of one tick did."""

    merged: MassiveBody | None = None
    merged_from: tuple = ()
    destroyed_satellites: list = field(default_factory=list)

    @property
    def any(self) -> bool:
        return self.merged is not None or bool(self.destroyed_satellites)


def _separation(a, b):
    return math.hypot(b.pos[0] - a.pos[0], b.pos[1] - a.pos[1])


def _collides(a, b):
    return _separation(a, b) < (a.size + b.size) / 2


def _midpoint(a, b):
    return (a.pos[0] + b.pos[0]) / 2, (a.pos[1] + b.pos[1]) / 2


def merge_bodies(body1, body2):
    """Perfectly inelastic merge of two massive bodies.

    Position and velocity are mass weighted, sizes combine by area and the
    heavier body (``body1`` on a tie) gives the kind, colour and leading name.
    The result starts with an empty trail.
    """
    heavy, light = (body1, body2) if body1.mass >= body2.mass else (body2, body1)
    total_mass = body1.mass + body2.mass
    new_pos = (body1.mass * body1.pos + body2.mass * body2.pos) / total_mass
    new_vel = (body1.mass * body1.vel + body2.mass * body2.vel) / total_mass
    merged = MassiveBody(
        heavy.kind,
        total_mass,
        math.sqrt(body1.size ** 2 + body2.size ** 2),
        new_pos,
        new_vel,
        color=heavy.color,
        name=f"{heavy.name}+{light.name}",
        max_trail_length=heavy.max_trail_length,
    )
    return merged


def find_body_collision(bodies):
    """First colliding pair ``(i, j)`` with ``i < j``, or ``None``."""
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            if _collides(bodies[i], bodies[j]):
                return i, j
    return None


def resolve_body_collision(state):
    """Merge the first colliding pair of massive bodies, if any.

    Both inputs are removed. The merged body is appended, unless the pair
    involves the sun at index 0, in which case it takes that slot so the sun
    is never removed. Satellites orbiting either input are rebound to the
    merged body.
    """
    pair = find_body_collision(state.bodies)
    if pair is None:
        return None, ()
    i, j = pair
    b1, b2 = state.bodies[i], state.bodies[j]

    state.explosions.append(spawn_explosion(state.rng, *_midpoint(b1, b2)))
    merged = merge_bodies(b1, b2)

    remaining = [b for k, b in enumerate(state.bodies) if k not in (i, j)]
    if i == 0:
        remaining.insert(0, merged)
    else:
        remaining.append(merged)
    state.bodies = remaining

    for sat in state.satellites:
        if sat.reference is b1 or sat.reference is b2:
            sat.bind_to(merged)
    logger.info("Merged %s and %s (mass %.3f)", b1.name, b2.name, merged.mass)
    return merged, (b1, b2)


def resolve_satellite_body_collision(state):
    """Destroy the first satellite overlapping any massive body."""
    for k, sat in enumerate(state.satellites):
        for body in state.bodies:
            if _collides(sat, body):
                state.explosions.append(
                    spawn_explosion(state.rng, float(sat.pos[0]), float(sat.pos[1]))
                )
                del state.satellites[k]
                logger.info("%s crashed into %s", sat.name, body.name)
                return [sat]
    return []


def resolve_satellite_pair_collision(state):
    """Destroy the first pair of overlapping satellites."""
    sats = state.satellites
    for i in range(len(sats)):
        for j in range(i + 1, len(sats)):
            a, b = sats[i], sats[j]
            if _collides(a, b):
                state.explosions.append(spawn_explosion(state.rng, *_midpoint(a, b)))
                state.satellites = [s for k, s in enumerate(sats) if k not in (i, j)]
                logger.info("%s and %s destroyed each other", a.name, b.name)
                return [a, b]
    return []


def detect_and_handle_collisions(state):
    """Run the three collision scans on ``state`` and report the outcome."""
    report = CollisionReport()
    report.merged, report.merged_from = resolve_body_collision(state)
    report.destroyed_satellites.extend(resolve_satellite_body_collision(state))
    report.destroyed_satellites.extend(resolve_satellite_pair_collision(state))
    return report
