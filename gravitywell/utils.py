"""Helpers for HUD readouts."""


def time_to_display(elapsed: float) -> str:
    """Elapsed simulation time as whole days, e.g. ``"Day: 12"``."""
    if elapsed < 0:
        return "Day: N/A"
    return f"Day: {elapsed:.0f}"


def mass_to_display(mass: float) -> str:
    if mass == 0:
        return "0 M⊕"
    if mass >= 1000:
        return f"{mass/1000:.2f}k M⊕"
    if mass >= 0.1:
        return f"{mass:.2f} M⊕"
    return f"{mass:.2e} M⊕"


def distance_to_display(dist: float) -> str:
    if dist == 0:
        return "0 u"
    if abs(dist) >= 1e3:
        return f"{dist/1e3:.2f} ku"
    return f"{dist:.1f} u"
