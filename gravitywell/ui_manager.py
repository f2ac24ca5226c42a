import math

import pygame
import pygame_gui

from . import constants as C
from .presets import PLACEABLE_KINDS
from .utils import time_to_display, mass_to_display, distance_to_display

PADDING = 10
ROW_GAP = 6


class ControlPanel:
    """Side panel with the body picker, playback buttons and tunable sliders.

    Widgets are stacked top to bottom; ``_next_rect`` hands out the next free
    row of the panel.
    """

    def __init__(
        self,
        manager: pygame_gui.UIManager,
        default_kind: str,
        g_constant: float = C.DEFAULT_G,
        orbit_rate: float = C.DEFAULT_ORBIT_RATE,
        trail_length: int = C.DEFAULT_TRAIL_LENGTH,
    ):
        self.manager = manager
        self._width = C.UI_SIDEBAR_WIDTH
        self._cursor = PADDING
        self.panel = pygame_gui.elements.UIPanel(
            pygame.Rect(C.WIDTH - self._width, 0, self._width, C.HEIGHT - C.UI_BOTTOM_HEIGHT),
            manager=manager,
            object_id="#sandbox_panel",
        )
        self._label("Gravity Well", height=28, object_id="#title_label")

        self.kind = default_kind
        self.kind_menu = pygame_gui.elements.UIDropDownMenu(
            PLACEABLE_KINDS,
            default_kind,
            self._next_rect(26),
            manager=manager,
            container=self.panel,
        )

        row = self._next_rect(26)
        button_width = (row.width - 2 * ROW_GAP) // 3
        self.play_button, self.reset_button, self.step_button = (
            pygame_gui.elements.UIButton(
                pygame.Rect(row.x + k * (button_width + ROW_GAP), row.y, button_width, row.height),
                text,
                manager,
                container=self.panel,
            )
            for k, text in enumerate(("Play", "Reset", "Step"))
        )

        self.gravity_label, self.gravity_slider = self._slider(
            f"G: {g_constant:.1f}", g_constant, (0.0, 200.0)
        )
        self.orbit_label, self.orbit_slider = self._slider(
            f"Moon rate: {orbit_rate:.2f}", orbit_rate, (-5.0, 5.0)
        )
        self.trail_label, self.trail_slider = self._slider(
            f"Trail: {trail_length}", trail_length, (C.MIN_TRAIL_LENGTH, C.MAX_TRAIL_LENGTH)
        )
        self.time_label = self._label(time_to_display(0.0))
        self.info_box = pygame_gui.elements.UITextBox(
            "", self._next_rect(200), manager, container=self.panel
        )

    def _next_rect(self, height):
        rect = pygame.Rect(PADDING, self._cursor, self._width - 2 * PADDING, height)
        self._cursor += height + ROW_GAP
        return rect

    def _label(self, text, height=20, object_id=None):
        return pygame_gui.elements.UILabel(
            self._next_rect(height),
            text,
            self.manager,
            container=self.panel,
            object_id=object_id,
        )

    def _slider(self, caption, start, value_range):
        label = self._label(caption)
        slider = pygame_gui.elements.UIHorizontalSlider(
            self._next_rect(20),
            start_value=start,
            value_range=value_range,
            manager=self.manager,
            container=self.panel,
        )
        return label, slider

    def set_playing(self, playing: bool):
        self.play_button.set_text("Pause" if playing else "Play")

    def update_gravity_label(self, value: float):
        self.gravity_label.set_text(f"G: {value:.1f}")

    def update_orbit_label(self, value: float):
        self.orbit_label.set_text(f"Moon rate: {value:.2f}")

    def update_trail_label(self, value: float):
        self.trail_label.set_text(f"Trail: {int(value)}")

    def update_status(self, snapshot, energy_drift=None, momentum=None, focus=None):
        """Refresh the elapsed-time readout and the body summary.

        Each listed body shows its mass and its distance from the first body
        (the sun).
        """
        self.time_label.set_text(time_to_display(snapshot.elapsed))
        lines = [f"Bodies: {len(snapshot.bodies)}  Moons: {len(snapshot.satellites)}"]
        if focus is not None:
            lines.append(f"Focus: {focus}")
        if snapshot.bodies:
            sx, sy = snapshot.bodies[0].position
            for b in snapshot.bodies[:8]:
                dist = math.hypot(b.position[0] - sx, b.position[1] - sy)
                lines.append(
                    f"{b.name}: {mass_to_display(b.mass)}, {distance_to_display(dist)}"
                )
        if energy_drift is not None:
            lines.append(f"Energy drift: {energy_drift:.3e} %")
        if momentum is not None:
            lines.append(f"|p|: {momentum:.3f}")
        self.info_box.set_text("<br>".join(lines))
