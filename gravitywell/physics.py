"""Body state for the orbital sandbox.

:class:`MassiveBody` is a sun or planet that both exerts and feels gravity.
:class:`Satellite` is a moon that follows an analytic circular orbit around a
reference :class:`MassiveBody` and exerts no pull of its own.
"""
from collections import deque
import math

import numpy as np

from . import constants as C


def _as_vec2(value):
    v = np.asarray(value, dtype=float).reshape(-1)
    if v.size < 2:
        v = np.pad(v, (0, 2 - v.size))
    return v[:2].copy()


class Body:
    """State shared by massive bodies and satellites."""

    def __init__(
        self,
        kind,
        mass,
        size,
        pos,
        vel,
        color=C.WHITE,
        name=None,
        max_trail_length=C.DEFAULT_TRAIL_LENGTH,
    ):
        """Create a body.

        Parameters
        ----------
        kind : str
            Catalog key of the body; used as the display identity.
        mass : float
            Mass in simulation units. Must be strictly positive.
        size : float
            Visual diameter, also used as the collision diameter.
        pos, vel : array-like
            Initial position and velocity in world units.
        """
        if mass <= 0 or size <= 0:
            raise ValueError(f"mass and size must be positive (got {mass}, {size})")
        self.kind = kind
        self.mass = float(mass)
        self.size = float(size)
        self.pos = _as_vec2(pos)
        self.vel = _as_vec2(vel)
        self.acc = np.zeros(2, dtype=np.float64)
        self.color = tuple(color)
        self.name = name if name else kind.capitalize()
        self.max_trail_length = int(max_trail_length)
        self.trail = deque(maxlen=self.max_trail_length)

    def update_trail(self):
        self.trail.append((float(self.pos[0]), float(self.pos[1])))

    def clear_trail(self):
        self.trail.clear()

    def set_trail_length(self, length):
        clamped = max(C.MIN_TRAIL_LENGTH, min(int(length), C.MAX_TRAIL_LENGTH))
        self.max_trail_length = clamped
        self.trail = deque(self.trail, maxlen=self.max_trail_length)

    def distance_to(self, x, y):
        return math.hypot(self.pos[0] - x, self.pos[1] - y)


class MassiveBody(Body):
    """A sun or planet-class body."""

    def __repr__(self):
        return (
            f"MassiveBody(name={self.name!r}, mass={self.mass}, size={self.size}, "
            f"pos={self.pos.tolist()}, vel={self.vel.tolist()})"
        )


class Satellite(Body):
    """A moon-class body bound to a reference :class:`MassiveBody`.

    ``orbit_radius`` and ``theta`` describe the satellite position relative to
    ``reference``. They are recomputed whenever the reference changes.
    """

    def __init__(self, kind, mass, size, pos, vel, reference, **kwargs):
        super().__init__(kind, mass, size, pos, vel, **kwargs)
        self.reference = reference
        self.orbit_radius = 0.0
        self.theta = 0.0
        self.bind_to(reference)

    def bind_to(self, reference):
        """Make ``reference`` the orbited body, keeping the current position."""
        dx = self.pos[0] - reference.pos[0]
        dy = self.pos[1] - reference.pos[1]
        self.reference = reference
        self.orbit_radius = math.hypot(dx, dy)
        self.theta = wrap_angle(math.atan2(dy, dx))

    def orbit_position(self):
        """Point on the current orbit circle for the current phase."""
        ref = self.reference.pos
        return (
            ref[0] + self.orbit_radius * math.cos(self.theta),
            ref[1] + self.orbit_radius * math.sin(self.theta),
        )

    def __repr__(self):
        return (
            f"Satellite(name={self.name!r}, reference={self.reference.name!r}, "
            f"orbit_radius={self.orbit_radius}, theta={self.theta})"
        )


def wrap_angle(theta):
    """Wrap an angle into ``[0, 2*pi)``."""
    wrapped = theta % C.TWO_PI
    # -1e-17 % 2pi rounds up to exactly 2pi
    if wrapped >= C.TWO_PI:
        wrapped = 0.0
    return wrapped


def circular_orbit_velocity(central_mass, dx, dy, g_constant=C.DEFAULT_G):
    """Return ``(vx, vy)`` for a circular orbit at offset ``(dx, dy)``.

    The speed is ``sqrt(G * M / r)`` directed perpendicular to the radius
    vector, counter-clockwise in world coordinates. A zero radius has no
    defined direction and yields ``(0.0, 0.0)``.
    """
    r = math.hypot(dx, dy)
    if r <= 0:
        return 0.0, 0.0
    v = math.sqrt(g_constant * central_mass / r)
    return -v * dy / r, v * dx / r
