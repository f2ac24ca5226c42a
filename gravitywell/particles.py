"""Short-lived explosion particles spawned by collisions.

Particles move in straight lines (no forces) and expire after a fixed number
of ticks. An :class:`ExplosionGroup` disappears once its last particle has
expired.
"""
import logging
import math

import numpy as np

from . import constants as C

logger = logging.getLogger(__name__)


class Particle:
    """A single explosion particle.

    Attributes:
        pos (np.ndarray): Current 2D position [x, y].
        vel (np.ndarray): Displacement per tick [vx, vy].
        radius (float): Draw radius.
        age (int): Ticks lived so far.
        max_life (int): Age at which the particle is removed.
        color (tuple): Base RGB colour.
    """

    __slots__ = ("pos", "vel", "radius", "age", "max_life", "color")

    def __init__(self, pos, vel, radius, max_life=C.EXPLOSION_LIFETIME, color=C.EXPLOSION_COLOR):
        self.pos = np.array(pos, dtype=float)
        self.vel = np.array(vel, dtype=float)
        self.radius = float(radius)
        self.age = 0
        self.max_life = int(max_life)
        self.color = color

    @property
    def alpha(self) -> float:
        """Linear fade from 1 at birth to 0 at ``max_life``."""
        return max(0.0, 1.0 - self.age / self.max_life)

    @property
    def expired(self) -> bool:
        return self.age >= self.max_life

    def update(self) -> bool:
        """Move one tick and age by one. Returns True while still alive."""
        self.pos += self.vel
        self.age += 1
        return not self.expired


class ExplosionGroup:
    """An ordered set of particles sharing one origin."""

    def __init__(self, particles):
        self.particles = list(particles)

    def __len__(self):
        return len(self.particles)

    @property
    def finished(self) -> bool:
        return not self.particles

    def update(self):
        self.particles = [p for p in self.particles if p.update()]


def spawn_explosion(rng, x, y, count=C.EXPLOSION_PARTICLES, max_life=C.EXPLOSION_LIFETIME):
    """Create an :class:`ExplosionGroup` of ``count`` particles at ``(x, y)``.

    Each particle draws, in order, an angle in ``[0, 2*pi)``, a speed and a
    radius from ``rng`` (a :class:`numpy.random.Generator`), so a seeded
    generator reproduces the same burst.
    """
    speed_lo, speed_hi = C.EXPLOSION_SPEED_RANGE
    radius_lo, radius_hi = C.EXPLOSION_RADIUS_RANGE
    particles = []
    for _ in range(count):
        angle = rng.uniform(0.0, C.TWO_PI)
        speed = rng.uniform(speed_lo, speed_hi)
        radius = rng.uniform(radius_lo, radius_hi)
        vel = (math.cos(angle) * speed, math.sin(angle) * speed)
        particles.append(Particle((x, y), vel, radius, max_life))
    logger.debug("Explosion of %d particles at (%.1f, %.1f)", count, x, y)
    return ExplosionGroup(particles)


def advance_explosions(state):
    """Advance all explosion groups of ``state`` and drop finished ones."""
    for group in state.explosions:
        group.update()
    state.explosions = [g for g in state.explosions if not g.finished]
