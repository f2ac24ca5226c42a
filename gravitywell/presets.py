"""Catalog of placeable body kinds.

Each entry is an immutable template; :func:`create_body` builds a fresh body
from it so no two bodies share mutable state.
"""
from dataclasses import dataclass

from . import constants as C
from .physics import MassiveBody, Satellite


@dataclass(frozen=True)
class BodyKind:
    key: str
    mass: float
    size: float
    color: tuple
    satellite: bool = False


BODY_KINDS = {
    "sun": BodyKind("sun", C.SUN_MASS, 80.0, (255, 204, 0)),
    "mars": BodyKind("mars", 1.0, 20.0, (193, 68, 14)),
    "earth": BodyKind("earth", 3.0, 30.0, (100, 149, 237)),
    "jupiter": BodyKind("jupiter", 10.0, 60.0, (216, 202, 157)),
    "saturn": BodyKind("saturn", 8.0, 50.0, (227, 192, 123)),
    "neptune": BodyKind("neptune", 5.0, 40.0, (63, 84, 186)),
    "moon": BodyKind("moon", 0.1, 15.0, (200, 200, 200), satellite=True),
}

# Kinds a user may place; the sun only comes from a reset.
PLACEABLE_KINDS = [k for k in BODY_KINDS if k != "sun"]


def create_body(
    kind,
    pos,
    vel=(0.0, 0.0),
    *,
    reference=None,
    name=None,
    max_trail_length=C.DEFAULT_TRAIL_LENGTH,
):
    """Instantiate a body of catalog ``kind``.

    Satellite kinds need a ``reference`` massive body. Raises ``KeyError``
    for an unknown kind.
    """
    if kind not in BODY_KINDS:
        raise KeyError(f"Body kind '{kind}' not found")
    template = BODY_KINDS[kind]
    if template.satellite:
        if reference is None:
            raise ValueError(f"'{kind}' is a satellite kind and needs a reference body")
        return Satellite(
            template.key,
            template.mass,
            template.size,
            pos,
            vel,
            reference,
            color=template.color,
            name=name,
            max_trail_length=max_trail_length,
        )
    return MassiveBody(
        template.key,
        template.mass,
        template.size,
        pos,
        vel,
        color=template.color,
        name=name,
        max_trail_length=max_trail_length,
    )
