"""pygame drawing of simulation snapshots.

Everything here reads a :class:`~gravitywell.simulation.SimulationSnapshot`;
nothing touches the engine state. Bodies are drawn as filled discs in their
catalog colour, scaled by ``size`` and the camera zoom.
"""

import pygame
import pygame.gfxdraw
from . import constants as C


def _screen_point(camera, pos):
    """Integer pixel for ``pos``, or ``None`` when it cannot be drawn."""
    x, y = camera.world_to_screen(pos)
    # NaN fails both comparisons
    if not (abs(x) < C.SAFE_COORD_LIMIT and abs(y) < C.SAFE_COORD_LIMIT):
        return None
    return int(x), int(y)


def draw_trail(screen, camera, trail, color):
    if len(trail) < 2:
        return
    points = [pt for pt in (_screen_point(camera, p) for p in trail) if pt is not None]
    if len(points) < 2:
        return
    pygame.draw.aalines(screen, color, False, points)


def draw_disc(screen, camera, pos, diameter, color):
    point = _screen_point(camera, pos)
    if point is None:
        return
    x, y = point
    radius = int(max(1, diameter * camera.zoom / 2))
    pygame.gfxdraw.filled_circle(screen, x, y, radius, color)
    pygame.gfxdraw.aacircle(screen, x, y, radius, color)


def draw_particles(screen, camera, particles):
    for p in particles:
        point = _screen_point(camera, p.position)
        if point is None:
            continue
        x, y = point
        radius = int(max(1, p.radius * camera.zoom))
        alpha = int(255 * p.alpha)
        pygame.gfxdraw.filled_circle(screen, x, y, radius, (*p.color, alpha))


def draw_labels(screen, camera, bodies, font):
    for b in bodies:
        point = _screen_point(camera, b.position)
        if point is None:
            continue
        x, y = point
        label = font.render(b.name, True, C.WHITE)
        screen.blit(label, (x + int(b.size * camera.zoom / 2) + 2, y))


def draw_snapshot(screen, snapshot, camera, show_trails=True, font=None):
    """Render bodies, satellites and explosion particles of ``snapshot``."""
    if show_trails:
        for b in snapshot.bodies + snapshot.satellites:
            draw_trail(screen, camera, b.trail, b.color)
    for b in snapshot.bodies:
        draw_disc(screen, camera, b.position, b.size, b.color)
    for s in snapshot.satellites:
        draw_disc(screen, camera, s.position, s.size, s.color)
    draw_particles(screen, camera, snapshot.particles)
    if font is not None:
        draw_labels(screen, camera, snapshot.bodies, font)
