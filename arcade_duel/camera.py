import random

from .config import (
    WIDTH, FIGHTER_W, FIGHTER_H, GROUND_Y, CAMERA_SMOOTHING, ZOOM_MIN, ZOOM_MAX,
    ZOOM_CLOSE, ZOOM_NEUTRAL, ZOOM_FAR, ZOOM_CLOSE_DIST, ZOOM_FAR_DIST,
    SHAKE_DECAY, SHAKE_EPSILON,
)
from .fighter import Fighter


def target_zoom(distance: float) -> float:
    if distance < ZOOM_CLOSE_DIST:
        return ZOOM_CLOSE
    if distance > ZOOM_FAR_DIST:
        return ZOOM_FAR
    return ZOOM_NEUTRAL


class Camera:
    """World offset + zoom that eases toward the fighters' midpoint."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.x = 0.0
        self.y = 0.0
        self.zoom = ZOOM_NEUTRAL
        self.shake = 0.0

    def add_shake(self, amount: float):
        self.shake = max(self.shake, amount)

    def decay_shake(self):
        self.shake *= SHAKE_DECAY
        if self.shake < SHAKE_EPSILON:
            self.shake = 0.0

    def update(self, p1: Fighter, p2: Fighter):
        mid_x = (p1.x + p2.x) / 2 + FIGHTER_W / 2
        mid_y = (p1.y + p2.y) / 2
        dist = abs(p1.x - p2.x)

        tx = mid_x - WIDTH / 2
        # Pan up only while someone is airborne.
        ty = min(0.0, mid_y - (GROUND_Y - FIGHTER_H)) * 0.5
        tz = target_zoom(dist)

        self.x += (tx - self.x) * CAMERA_SMOOTHING
        self.y += (ty - self.y) * CAMERA_SMOOTHING
        self.zoom += (tz - self.zoom) * CAMERA_SMOOTHING
        self.zoom = max(ZOOM_MIN, min(ZOOM_MAX, self.zoom))

        self.decay_shake()

    def sample_offset(self, rng: random.Random | None = None) -> tuple[float, float]:
        """Per-frame jitter for the renderer. Never feeds back into the fight."""
        if self.shake <= 0:
            return (0.0, 0.0)
        r = rng or random
        return ((r.random() - 0.5) * 2 * self.shake, (r.random() - 0.5) * 2 * self.shake)


class HitStop:
    """Global freeze counter set on impact."""

    def __init__(self):
        self.frames = 0

    @property
    def frozen(self) -> bool:
        return self.frames > 0

    def trigger(self, frames: int):
        self.frames = max(self.frames, int(frames))

    def step(self):
        if self.frames > 0:
            self.frames -= 1

    def reset(self):
        self.frames = 0
