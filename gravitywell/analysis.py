import numpy as np
from collections import deque
from . import constants as C
import contextlib
import csv
import os


def system_energy(bodies, g_constant=C.DEFAULT_G, softening_sq=C.SOFTENING_FACTOR_SQ):
    """Return kinetic, softened potential and total energy of massive bodies."""
    kinetic = 0.0
    potential = 0.0
    for b in bodies:
        kinetic += 0.5 * b.mass * float(np.dot(b.vel, b.vel))
    for i, bi in enumerate(bodies):
        for bj in bodies[i + 1:]:
            d = bj.pos - bi.pos
            potential -= g_constant * bi.mass * bj.mass / np.sqrt(np.dot(d, d) + softening_sq)
    return kinetic, float(potential), kinetic + float(potential)


def total_momentum(bodies):
    p = np.zeros(2, dtype=float)
    for b in bodies:
        p += b.mass * b.vel
    return p


def center_of_mass(bodies):
    """Centre-of-mass position and velocity, or ``(None, None)`` if empty."""
    if not bodies:
        return None, None
    masses = np.array([b.mass for b in bodies], dtype=float)
    positions = np.array([b.pos for b in bodies], dtype=float)
    velocities = np.array([b.vel for b in bodies], dtype=float)
    total = masses.sum()
    return masses @ positions / total, masses @ velocities / total


class EnergyMonitor:
    """Track the relative drift of the total energy over time."""

    def __init__(self, max_points=500):
        self.history = deque(maxlen=max_points)
        self.initial_energy = None

    def set_initial_energy(self, bodies, g_constant):
        _, _, self.initial_energy = system_energy(bodies, g_constant)
        self.history.clear()

    def update(self, bodies, g_constant):
        if self.initial_energy is None or abs(self.initial_energy) < 1e-12:
            return
        _, _, current_energy = system_energy(bodies, g_constant)
        drift = ((current_energy - self.initial_energy) / abs(self.initial_energy)) * 100
        self.history.append(drift)

    @property
    def latest(self):
        return self.history[-1] if self.history else 0.0

    def export_csv(self, file, delimiter=","):
        """Write the drift history as ``tick,energy_drift_percent`` rows.

        ``file`` is a path or an open text file; paths are opened and closed
        here.
        """
        if isinstance(file, (str, bytes, os.PathLike)):
            target = open(file, "w", newline="")
        else:
            target = contextlib.nullcontext(file)
        with target as f:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(["tick", "energy_drift_percent"])
            writer.writerows(enumerate(self.history))
