import numpy as np

from gravitywell.camera import Camera
from gravitywell.presets import create_body
from gravitywell import constants as C


def test_world_screen_round_trip():
    cam = Camera(zoom=2.0, pan_offset=(100.0, 50.0))
    assert np.allclose(cam.world_to_screen((10.0, -5.0)), [120.0, 40.0])
    assert cam.screen_to_world((120.0, 40.0)) == (10.0, -5.0)


def test_zoom_keeps_pivot_fixed():
    cam = Camera(zoom=1.0, pan_offset=(0.0, 0.0))
    pivot = (300.0, 200.0)
    before = cam.screen_to_world(pivot)
    cam.zoom_at(1.1, pivot)
    assert cam.zoom == 1.1
    assert np.allclose(cam.screen_to_world(pivot), before)


def test_zoom_is_clamped():
    cam = Camera()
    cam.zoom_at(1e6, (0, 0))
    assert cam.zoom == C.MAX_ZOOM
    cam.zoom_at(1e-9, (0, 0))
    assert cam.zoom == C.MIN_ZOOM


def test_focus_moves_toward_body():
    cam = Camera(zoom=1.0, pan_offset=(0.0, 0.0))
    body = create_body("earth", (100.0, 0.0))
    center = np.array([400.0, 300.0])
    cam.update_focus(body, [body], center, smoothing=1.0)
    assert np.allclose(cam.world_to_screen(body.pos), center)

    cam.update_focus(None, [body], center)
    cam.update_focus("COM", [], center)
    assert np.allclose(cam.pan_offset, [300.0, 300.0])
