import numpy as np
from . import constants as C


def compute_acceleration(
    positions: np.ndarray,
    masses: np.ndarray,
    x: float,
    y: float,
    exclude_index: int | None = None,
    g_constant: float = C.DEFAULT_G,
    softening_sq: float = C.SOFTENING_FACTOR_SQ,
) -> tuple[float, float]:
    """Softened gravitational acceleration at ``(x, y)``.

    Sums ``G * m_j * (dx, dy) / d**3`` over every row of ``positions`` except
    ``exclude_index``, with ``d**2 = dx**2 + dy**2 + softening_sq``. The
    softening keeps the result finite at zero separation.
    """
    n = len(masses)
    if n == 0:
        return 0.0, 0.0

    dx = positions[:, 0] - x
    dy = positions[:, 1] - y
    m = masses
    if exclude_index is not None:
        keep = np.arange(n) != exclude_index
        dx, dy, m = dx[keep], dy[keep], m[keep]
        if m.size == 0:
            return 0.0, 0.0

    dist_sq = dx * dx + dy * dy + softening_sq
    factors = g_constant * m / (dist_sq * np.sqrt(dist_sq))
    return float(np.sum(factors * dx)), float(np.sum(factors * dy))


def acceleration(state, x, y, exclude_index=None):
    """Acceleration at ``(x, y)`` due to the massive bodies of ``state``."""
    if not state.bodies:
        return 0.0, 0.0
    positions = np.array([b.pos for b in state.bodies], dtype=float)
    masses = np.array([b.mass for b in state.bodies], dtype=float)
    return compute_acceleration(
        positions, masses, x, y, exclude_index, state.g_constant
    )


def rk4_step_arrays(
    positions,
    velocities,
    masses,
    dt,
    g_constant,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """One RK4 step per body against a frozen snapshot of the others.

    Every stage of body ``i`` reads the other bodies at their start-of-step
    positions; only body ``i`` itself is offset between stages. Returns the
    new positions, new velocities and the start-of-step accelerations.
    """
    n = len(masses)
    pos_new = positions.astype(float, copy=True)
    vel_new = velocities.astype(float, copy=True)
    acc_start = np.zeros_like(pos_new)

    def accel(i, x, y):
        return compute_acceleration(positions, masses, x, y, i, g_constant)

    for i in range(n):
        x, y = float(positions[i, 0]), float(positions[i, 1])
        vx, vy = float(velocities[i, 0]), float(velocities[i, 1])

        a1x, a1y = accel(i, x, y)
        k1 = (dt * vx, dt * vy, dt * a1x, dt * a1y)

        v2x, v2y = vx + k1[2] / 2, vy + k1[3] / 2
        a2x, a2y = accel(i, x + k1[0] / 2, y + k1[1] / 2)
        k2 = (dt * v2x, dt * v2y, dt * a2x, dt * a2y)

        v3x, v3y = vx + k2[2] / 2, vy + k2[3] / 2
        a3x, a3y = accel(i, x + k2[0] / 2, y + k2[1] / 2)
        k3 = (dt * v3x, dt * v3y, dt * a3x, dt * a3y)

        v4x, v4y = vx + k3[2], vy + k3[3]
        a4x, a4y = accel(i, x + k3[0], y + k3[1])
        k4 = (dt * v4x, dt * v4y, dt * a4x, dt * a4y)

        pos_new[i, 0] = x + (k1[0] + 2 * k2[0] + 2 * k3[0] + k4[0]) / 6
        pos_new[i, 1] = y + (k1[1] + 2 * k2[1] + 2 * k3[1] + k4[1]) / 6
        vel_new[i, 0] = vx + (k1[2] + 2 * k2[2] + 2 * k3[2] + k4[2]) / 6
        vel_new[i, 1] = vy + (k1[3] + 2 * k2[3] + 2 * k3[3] + k4[3]) / 6
        acc_start[i] = (a1x, a1y)

    return pos_new, vel_new, acc_start


def integrate(state):
    """Advance every massive body of ``state`` by ``state.dt``.

    New states are computed from one snapshot and committed afterwards, so the
    order of bodies does not change the result. Trails are extended with the
    committed positions.
    """
    bodies = state.bodies
    if not bodies:
        return

    positions = np.array([b.pos for b in bodies], dtype=float)
    velocities = np.array([b.vel for b in bodies], dtype=float)
    masses = np.array([b.mass for b in bodies], dtype=float)

    new_pos, new_vel, acc = rk4_step_arrays(
        positions, velocities, masses, state.dt, state.g_constant
    )

    for body, p, v, a in zip(bodies, new_pos, new_vel, acc):
        body.pos = p
        body.vel = v
        body.acc = a
        body.update_trail()
