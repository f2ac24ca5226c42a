import time
import numpy as np

from gravitywell.integrators import compute_acceleration, rk4_step_arrays
from gravitywell.simulation import Simulation
from gravitywell.constants import DEFAULT_G, SOFTENING_FACTOR_SQ, TIME_STEP


def compute_acceleration_python(positions, masses, x, y, exclude_index, g_constant=DEFAULT_G):
    ax = ay = 0.0
    for j in range(len(masses)):
        if j == exclude_index:
            continue
        dx = positions[j, 0] - x
        dy = positions[j, 1] - y
        d_sq = dx * dx + dy * dy + SOFTENING_FACTOR_SQ
        f = g_constant * masses[j] / (d_sq * np.sqrt(d_sq))
        ax += f * dx
        ay += f * dy
    return ax, ay


if __name__ == "__main__":
    rng = np.random.default_rng(0)
    N = 60
    positions = rng.uniform(-400.0, 400.0, (N, 2))
    velocities = rng.uniform(-5.0, 5.0, (N, 2))
    masses = rng.uniform(1.0, 10.0, N)

    t0 = time.time()
    baseline = [compute_acceleration_python(positions, masses, *positions[i], i) for i in range(N)]
    t1 = time.time()
    vectorised = [compute_acceleration(positions, masses, *positions[i], i) for i in range(N)]
    t2 = time.time()
    assert np.allclose(baseline, vectorised)
    print(f"Python loop : {t1 - t0:.4f}s")
    print(f"Vectorised  : {t2 - t1:.4f}s")

    t0 = time.time()
    for _ in range(100):
        rk4_step_arrays(positions, velocities, masses, TIME_STEP, DEFAULT_G)
    print(f"RK4 step ({N} bodies): {(time.time() - t0) / 100 * 1000:.2f} ms")

    sim = Simulation(seed=0)
    sim.populate_random(planets=20, moons=20)
    t0 = time.time()
    for _ in range(600):
        sim.advance_tick()
    elapsed = time.time() - t0
    print(f"Full tick   : {elapsed / 600 * 1000:.2f} ms ({len(sim.bodies)} bodies left)")
