import random

import pytest

from arcade_duel.camera import Camera, HitStop, target_zoom
from arcade_duel.config import (
    WIDTH, FIGHTER_W, CAMERA_SMOOTHING, ZOOM_MIN, ZOOM_MAX, ZOOM_CLOSE, ZOOM_FAR, ZOOM_NEUTRAL,
    SHAKE_DECAY,
)
from arcade_duel.fighter import Fighter, Direction


def make_pair(x1=100, x2=600):
    return (Fighter(1, 'a', x1, Direction.RIGHT, (0, 0, 0)),
            Fighter(2, 'b', x2, Direction.LEFT, (0, 0, 0)))


class TestZoom:

    def test_step_function(self):
        assert target_zoom(50) == ZOOM_CLOSE
        assert target_zoom(300) == ZOOM_NEUTRAL
        assert target_zoom(600) == ZOOM_FAR

    def test_eases_instead_of_snapping(self):
        cam = Camera()
        p1, p2 = make_pair(300, 350)
        cam.update(p1, p2)
        assert cam.zoom == pytest.approx(ZOOM_NEUTRAL + (ZOOM_CLOSE - ZOOM_NEUTRAL) * CAMERA_SMOOTHING)
        for _ in range(200):
            cam.update(p1, p2)
        assert cam.zoom == pytest.approx(ZOOM_CLOSE, abs=1e-3)

    def test_zoom_is_clamped(self):
        cam = Camera()
        cam.zoom = 5.0
        p1, p2 = make_pair(300, 350)
        cam.update(p1, p2)
        assert cam.zoom <= ZOOM_MAX
        cam.zoom = 0.1
        cam.update(p1, p2)
        assert cam.zoom >= ZOOM_MIN


class TestTracking:

    def test_moves_toward_midpoint(self):
        cam = Camera()
        p1, p2 = make_pair(100, 600)
        target_x = (100 + 600) / 2 + FIGHTER_W / 2 - WIDTH / 2
        cam.update(p1, p2)
        assert cam.x == pytest.approx(target_x * CAMERA_SMOOTHING)

    def test_grounded_fight_keeps_vertical_offset(self):
        cam = Camera()
        p1, p2 = make_pair()
        cam.update(p1, p2)
        assert cam.y == 0

    def test_reset(self):
        cam = Camera()
        cam.x, cam.y, cam.zoom, cam.shake = 40, -3, 1.3, 7
        cam.reset()
        assert (cam.x, cam.y, cam.zoom, cam.shake) == (0, 0, ZOOM_NEUTRAL, 0)


class TestShake:

    def test_decays_geometrically(self):
        cam = Camera()
        cam.add_shake(10)
        cam.decay_shake()
        assert cam.shake == pytest.approx(10 * SHAKE_DECAY)

    def test_snaps_to_zero(self):
        cam = Camera()
        cam.add_shake(0.52)
        cam.decay_shake()
        assert cam.shake == 0

    def test_add_shake_keeps_larger(self):
        cam = Camera()
        cam.add_shake(10)
        cam.add_shake(4)
        assert cam.shake == 10

    def test_offset_bounded_by_shake(self):
        cam = Camera()
        assert cam.sample_offset(random.Random(1)) == (0.0, 0.0)
        cam.add_shake(6)
        rng = random.Random(1)
        for _ in range(50):
            ox, oy = cam.sample_offset(rng)
            assert abs(ox) <= 6 and abs(oy) <= 6


class TestHitStop:

    def test_counts_down(self):
        hs = HitStop()
        assert not hs.frozen
        hs.trigger(2)
        assert hs.frozen
        hs.step()
        hs.step()
        assert not hs.frozen
        hs.step()
        assert hs.frames == 0

    def test_trigger_keeps_longer_freeze(self):
        hs = HitStop()
        hs.trigger(10)
        hs.trigger(6)
        assert hs.frames == 10
