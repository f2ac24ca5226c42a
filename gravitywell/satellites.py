"""Analytic orbit tracking for satellites.

Satellites do not feel gravity directly. Each tick they advance their phase
on a circle around their reference body, and a closer massive body can
capture them, which gives the look of a gravitational hand-off without
integrating satellite forces.
"""
import logging
import math

from . import constants as C
from .physics import wrap_angle

logger = logging.getLogger(__name__)


def find_capture(bodies, satellite, x, y):
    """First body in ``bodies`` strictly closer to ``(x, y)`` than the orbit radius.

    The current reference is skipped. Ties go to the earlier body in list
    order, which is not necessarily the nearest one. Returns ``(body,
    distance)`` or ``(None, None)``.
    """
    for body in bodies:
        if body is satellite.reference:
            continue
        d = body.distance_to(x, y)
        if d < satellite.orbit_radius:
            return body, d
    return None, None


def bind_satellite(state, satellite):
    """Run the nearest-reference search for a freshly placed satellite."""
    x, y = float(satellite.pos[0]), float(satellite.pos[1])
    body, _ = find_capture(state.bodies, satellite, x, y)
    if body is not None:
        satellite.bind_to(body)
        logger.debug("%s placed in orbit around %s", satellite.name, body.name)
    return satellite.reference


def track_satellites(state):
    """Advance every satellite of ``state`` by one tick."""
    step = state.orbit_rate / C.TICKS_PER_UNIT_TIME
    for sat in state.satellites:
        sat.theta = wrap_angle(sat.theta + step)
        cx, cy = sat.orbit_position()

        body, dist = find_capture(state.bodies, sat, cx, cy)
        if body is not None:
            logger.debug(
                "%s captured by %s (%.2f < %.2f)",
                sat.name, body.name, dist, sat.orbit_radius,
            )
            sat.reference = body
            sat.orbit_radius = dist
            sat.theta = wrap_angle(math.atan2(cy - body.pos[1], cx - body.pos[0]))
            cx, cy = sat.orbit_position()

        sat.vel[0] = (cx - sat.pos[0]) / state.dt
        sat.vel[1] = (cy - sat.pos[1]) / state.dt
        sat.pos[0] = cx
        sat.pos[1] = cy
        sat.update_trail()
