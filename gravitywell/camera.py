import numpy as np
from . import constants as C
from .analysis import center_of_mass


class Camera:
    """Manage view transformation and focus handling."""

    def __init__(self, zoom=C.ZOOM_BASE, pan_offset=None):
        self.zoom = float(zoom)
        self.pan_offset = (
            np.array(pan_offset, dtype=float) if pan_offset is not None else C.INITIAL_PAN_OFFSET.astype(float).copy()
        )

    def world_to_screen(self, pos):
        """Convert a world position to screen coordinates."""
        pos = np.asarray(pos, dtype=float)
        return pos[:2] * self.zoom + self.pan_offset

    def screen_to_world(self, screen_pos):
        """Convert a screen pixel to a world ``(x, y)`` tuple."""
        world = (np.asarray(screen_pos, dtype=float) - self.pan_offset) / self.zoom
        return float(world[0]), float(world[1])

    def zoom_at(self, factor, pivot):
        """Scale the zoom by ``factor`` keeping the ``pivot`` pixel fixed."""
        before = self.screen_to_world(pivot)
        self.zoom = float(np.clip(self.zoom * factor, C.MIN_ZOOM, C.MAX_ZOOM))
        self.pan_offset = np.asarray(pivot, dtype=float) - np.array(before) * self.zoom

    def update_focus(self, focus_body, bodies, screen_center, smoothing=0.1):
        """Smoothly update the camera pan to follow the focus target."""
        if focus_body is None:
            return
        if focus_body == "COM":
            com_pos, _ = center_of_mass(bodies)
            if com_pos is None:
                return
            target_pos = com_pos[:2]
        else:
            target_pos = np.asarray(focus_body.pos, dtype=float)[:2]

        target = screen_center - target_pos * self.zoom
        self.pan_offset += (target - self.pan_offset) * smoothing
