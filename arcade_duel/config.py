import os
import json
from dataclasses import dataclass, replace

import pygame

# =====================
# CONFIG
# =====================
WIDTH, HEIGHT = 800, 450
FPS = 60

# Ground line: where the fighters' FEET touch.
GROUND_Y = 380

# Horizontal play-field extent. Wider than the canvas so the camera can pan.
STAGE_MIN_X = -200
STAGE_MAX_X = WIDTH + 200

# Gameplay box (hitbox/body box).
FIGHTER_W, FIGHTER_H = 50, 100

P1_START_X = 100
P2_START_X = 600

P1_NAME = 'Kyo-Clone'
P2_NAME = 'Iori-Clone'

P1_COLOR = (239, 68, 68)
P2_COLOR = (139, 92, 246)

MAX_HP = 200
MAX_ENERGY = 100

# =====================
# PHYSICS
# =====================
GRAVITY = 0.6
FRICTION = 0.85  # knockback bleed-off while in hitstun
MOVE_SPEED = 6
JUMP_VY = -14
PUSH_STEP = 2  # per-frame separation when bodies overlap

# =====================
# COMBAT
# =====================
HIT_STUN_FRAMES = 15
KNOCKBACK_VX = 10
SHAKE_PER_DAMAGE = 0.4
SPARK_COLOR = (255, 255, 255)
SPARK_COUNT = 5

# Energy meter fills on contact (no move spends it yet).
ENERGY_ON_HIT_DIVISOR = 2
ENERGY_ON_DAMAGE_DIVISOR = 4


@dataclass(frozen=True)
class AttackProfile:
    damage: int
    startup: int           # frames before the box appears
    active: int            # frames the box can connect
    recovery: int
    hit_stop: int          # global freeze on contact
    width: int
    height: int
    y_offset: int
    color: tuple[int, int, int] = (251, 191, 36)

    @property
    def total_frames(self) -> int:
        return self.startup + self.active + self.recovery

    @property
    def lock_frames(self) -> int:
        # State duration set on a player-started attack (matches the arcade build).
        return self.active + self.recovery

    def in_active_window(self, frame: int) -> bool:
        return self.startup <= frame < self.startup + self.active


# Authored frame data. Keys are ActionState values ('attack_light' / 'attack_heavy').
ATTACK_DB: dict[str, AttackProfile] = {
    'attack_light': AttackProfile(damage=12, startup=5, active=10, recovery=8, hit_stop=6,
                                  width=60, height=20, y_offset=30, color=(251, 191, 36)),
    'attack_heavy': AttackProfile(damage=25, startup=12, active=15, recovery=20, hit_stop=10,
                                  width=80, height=40, y_offset=40, color=(249, 115, 22)),
}

# =====================
# CAMERA
# =====================
CAMERA_SMOOTHING = 0.1
ZOOM_MIN = 0.8
ZOOM_MAX = 1.4
ZOOM_CLOSE = 1.2
ZOOM_NEUTRAL = 1.0
ZOOM_FAR = 0.9
ZOOM_CLOSE_DIST = 200
ZOOM_FAR_DIST = 450
SHAKE_DECAY = 0.9
SHAKE_EPSILON = 0.5

# =====================
# AI
# =====================
AI_CLOSE_RANGE = 80
AI_MID_RANGE = 200
AI_LIGHT_CHANCE = 0.05
AI_HEAVY_CHANCE = 0.02
AI_DASH_CHANCE = 0.02
AI_APPROACH_FACTOR = 0.7
AI_LIGHT_LOCK = 20
AI_HEAVY_LOCK = 30

# =====================
# ROUND
# =====================
ROUND_SECONDS = 99
COMBO_WINDOW_FRAMES = 90
HEALTH_PUBLISH_INTERVAL = 5
INTRO_FRAMES = 120  # "READY... FIGHT!" banner

# =====================
# CONTROLS
# =====================
DEFAULT_CONTROLS: dict[str, int] = {
    'left': pygame.K_a,
    'right': pygame.K_d,
    'jump': pygame.K_w,
    'light': pygame.K_j,
    'heavy': pygame.K_k,
}

# =====================
# ATTACK TUNING (runtime)
# =====================
# Optional JSON overrides, e.g. {"attack_light": {"damage": 10, "startup": 4}}
ATTACK_TUNING_PATH = 'attack_tuning.json'


def load_attack_db(path: str = ATTACK_TUNING_PATH) -> dict[str, AttackProfile]:
    """Return the attack table with any per-field overrides from `path` applied.

    A missing file is the normal case. A broken file or bad field falls back
    to the built-in profile for that move.
    """
    db = dict(ATTACK_DB)
    if not path or not os.path.isfile(path):
        return db
    try:
        with open(path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except (OSError, ValueError) as e:
        print(f'[WARN] Failed to load attack tuning {path}: {e}')
        return db
    if not isinstance(overrides, dict):
        print(f'[WARN] Attack tuning {path} is not an object; using defaults')
        return db

    fields = set(AttackProfile.__dataclass_fields__)
    for key, values in overrides.items():
        base = db.get(key)
        if base is None or not isinstance(values, dict):
            print(f'[WARN] Ignoring unknown attack tuning entry: {key}')
            continue
        changes = {k: v for k, v in values.items() if k in fields}
        try:
            changes = {k: tuple(int(c) for c in v) if k == 'color' else int(v)
                       for k, v in changes.items()}
            if 'color' in changes and len(changes['color']) != 3:
                raise ValueError(f'color needs 3 channels, got {changes["color"]}')
        except (TypeError, ValueError) as e:
            print(f'[WARN] Bad value in attack tuning for {key}: {e}')
            continue
        db[key] = replace(base, **changes)
    print(f'[INFO] Loaded attack tuning from {path}')
    return db


# =====================
# SETTINGS (environment)
# =====================
@dataclass(frozen=True)
class Settings:
    api_key: str | None
    model: str = 'gemini-2.5-flash'
    timeout_s: float = 15.0

    @classmethod
    def from_env(cls) -> 'Settings':
        key = os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY') or None
        model = os.environ.get('ARCADE_DUEL_MODEL', 'gemini-2.5-flash')
        try:
            timeout_s = float(os.environ.get('ARCADE_DUEL_COMMENTARY_TIMEOUT', '15'))
        except ValueError:
            timeout_s = 15.0
        return cls(api_key=key, model=model, timeout_s=timeout_s)
