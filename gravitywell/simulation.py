from dataclasses import dataclass, field
import logging
import math

import numpy as np

from . import constants as C
from .presets import BODY_KINDS, PLACEABLE_KINDS, create_body
from .physics import MassiveBody, Satellite, circular_orbit_velocity
from .integrators import integrate
from .satellites import bind_satellite, track_satellites
from .physics_utils import detect_and_handle_collisions
from .particles import advance_explosions

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Everything the engine mutates during a tick."""

    g_constant: float = C.DEFAULT_G
    orbit_rate: float = C.DEFAULT_ORBIT_RATE
    dt: float = C.TIME_STEP
    trail_length: int = C.DEFAULT_TRAIL_LENGTH
    seed: int | None = None
    bodies: list = field(default_factory=list)
    satellites: list = field(default_factory=list)
    explosions: list = field(default_factory=list)
    tick: int = 0
    next_id: int = 1
    rng: np.random.Generator = field(init=False)

    def __post_init__(self):
        self.rng = np.random.default_rng(self.seed)

    @property
    def sun(self):
        return self.bodies[0] if self.bodies else None

    @property
    def elapsed(self) -> float:
        return self.tick * self.dt


@dataclass(frozen=True)
class BodyView:
    name: str
    kind: str
    color: tuple
    position: tuple
    size: float
    mass: float
    trail: tuple


@dataclass(frozen=True)
class SatelliteView:
    name: str
    kind: str
    color: tuple
    position: tuple
    size: float
    reference: str
    trail: tuple


@dataclass(frozen=True)
class ParticleView:
    position: tuple
    radius: float
    color: tuple
    alpha: float


@dataclass(frozen=True)
class SimulationSnapshot:
    """Read-only copy of the state after a tick, for renderers and HUDs."""

    tick: int
    elapsed: float
    bodies: tuple
    satellites: tuple
    particles: tuple


def _pos(body):
    return float(body.pos[0]), float(body.pos[1])


class Simulation:
    """Step-driven orbital sandbox engine.

    The engine owns a :class:`SimulationState` and exposes the operations an
    external scheduler and input layer need. It performs no drawing and no
    I/O; call :meth:`advance_tick` once per frame and read :meth:`snapshot`.
    """

    def __init__(
        self,
        g_constant: float = C.DEFAULT_G,
        orbit_rate: float = C.DEFAULT_ORBIT_RATE,
        *,
        dt: float = C.TIME_STEP,
        seed: int | None = None,
        trail_length: int = C.DEFAULT_TRAIL_LENGTH,
    ):
        self.state = SimulationState(
            g_constant=g_constant,
            orbit_rate=orbit_rate,
            dt=dt,
            trail_length=trail_length,
            seed=seed,
        )
        self.reset()

    # ------------------------------------------------------------------
    @property
    def bodies(self):
        return self.state.bodies

    @property
    def satellites(self):
        return self.state.satellites

    @property
    def explosions(self):
        return self.state.explosions

    @property
    def tick(self) -> int:
        return self.state.tick

    @property
    def elapsed(self) -> float:
        return self.state.elapsed

    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Drop everything but a fresh sun at rest at the origin."""
        state = self.state
        state.satellites = []
        state.explosions = []
        state.tick = 0
        state.next_id = 1
        sun = create_body(
            "sun", (0.0, 0.0), (0.0, 0.0), name="Sun", max_trail_length=state.trail_length
        )
        state.bodies = [sun]
        logger.info("Simulation reset")

    def advance_tick(self):
        """Advance the whole simulation by one fixed step.

        Order: integrator, satellite tracker, collision scans, explosions.
        Returns the :class:`~gravitywell.physics_utils.CollisionReport` of
        the tick.
        """
        state = self.state
        integrate(state)
        track_satellites(state)
        report = detect_and_handle_collisions(state)
        advance_explosions(state)
        state.tick += 1
        return report

    def place_body(self, kind: str, x: float, y: float):
        """Add a body of catalog ``kind`` at world position ``(x, y)``.

        The body starts on a circular orbit around the sun. Moons become
        satellites bound to the nearest qualifying body. Returns the new body,
        or ``None`` for an unknown kind or a position on top of the sun.
        """
        try:
            known = kind in BODY_KINDS
        except TypeError:
            known = False
        if not known:
            logger.warning("Unknown body kind %r; nothing placed", kind)
            return None

        state = self.state
        sun = state.sun
        dx = x - sun.pos[0]
        dy = y - sun.pos[1]
        r = math.hypot(dx, dy)
        if r < C.MIN_PLACEMENT_RADIUS:
            logger.warning(
                "Rejected %s at (%.2f, %.2f): %.3g from the sun is below %.3g",
                kind, x, y, r, C.MIN_PLACEMENT_RADIUS,
            )
            return None

        vx, vy = circular_orbit_velocity(sun.mass, dx, dy, state.g_constant)
        name = f"{kind.capitalize()} {state.next_id}"
        body = create_body(
            kind,
            (x, y),
            (vx, vy),
            reference=sun,
            name=name,
            max_trail_length=state.trail_length,
        )
        state.next_id += 1

        if isinstance(body, Satellite):
            bind_satellite(state, body)
            state.satellites.append(body)
        else:
            state.bodies.append(body)
        logger.debug("Placed %s at (%.1f, %.1f) v=(%.3f, %.3f)", name, x, y, vx, vy)
        return body

    def populate_random(
        self,
        planets: int = 1,
        moons: int = 1,
        speed_jitter: tuple | None = C.POPULATE_SPEED_JITTER,
    ) -> list:
        """Scatter random planets and moons around the sun.

        Kinds, radii, angles and speed factors come from the state's seeded
        generator. Each planet's circular speed is scaled by a factor drawn
        from ``speed_jitter``, which makes the orbits mildly eccentric; pass
        ``None`` for exact circular orbits. Moons follow their analytic orbit
        and ignore the factor.
        """
        rng = self.state.rng
        planet_kinds = [k for k in PLACEABLE_KINDS if not BODY_KINDS[k].satellite]
        moon_kinds = [k for k in PLACEABLE_KINDS if BODY_KINDS[k].satellite]
        r_lo, r_hi = C.POPULATE_RADIUS_RANGE
        sun_x, sun_y = _pos(self.state.sun)
        placed = []
        for kinds, count in ((planet_kinds, planets), (moon_kinds, moons)):
            for _ in range(count):
                kind = kinds[int(rng.integers(len(kinds)))]
                r = rng.uniform(r_lo, r_hi)
                angle = rng.uniform(0.0, C.TWO_PI)
                factor = rng.uniform(*speed_jitter) if speed_jitter else 1.0
                body = self.place_body(
                    kind, sun_x + r * math.cos(angle), sun_y + r * math.sin(angle)
                )
                if isinstance(body, MassiveBody):
                    body.vel *= factor
                if body is not None:
                    placed.append(body)
        return placed

    # ------------------------------------------------------------------
    def set_gravitational_constant(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"gravitational constant must be finite and >= 0, got {value}")
        self.state.g_constant = value

    def set_orbit_rate_factor(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"orbit rate factor must be finite, got {value}")
        self.state.orbit_rate = value

    def clear_trails(self) -> None:
        for body in self.state.bodies + self.state.satellites:
            body.clear_trail()

    def set_trail_length(self, length: int) -> None:
        """Clamp and apply a new trail length to every body and satellite."""
        clamped = max(C.MIN_TRAIL_LENGTH, min(int(length), C.MAX_TRAIL_LENGTH))
        self.state.trail_length = clamped
        for body in self.state.bodies + self.state.satellites:
            body.set_trail_length(clamped)

    # ------------------------------------------------------------------
    def snapshot(self) -> SimulationSnapshot:
        """Immutable view of the current state."""
        state = self.state
        bodies = tuple(
            BodyView(
                b.name, b.kind, b.color, _pos(b), b.size, b.mass, tuple(b.trail)
            )
            for b in state.bodies
        )
        satellites = tuple(
            SatelliteView(
                s.name, s.kind, s.color, _pos(s), s.size, s.reference.name, tuple(s.trail)
            )
            for s in state.satellites
        )
        particles = tuple(
            ParticleView(_pos(p), p.radius, p.color, p.alpha)
            for group in state.explosions
            for p in group.particles
        )
        return SimulationSnapshot(state.tick, state.elapsed, bodies, satellites, particles)
