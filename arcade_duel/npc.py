import random

from .config import (
    MOVE_SPEED, AI_CLOSE_RANGE, AI_MID_RANGE, AI_LIGHT_CHANCE, AI_HEAVY_CHANCE,
    AI_DASH_CHANCE, AI_APPROACH_FACTOR, AI_LIGHT_LOCK, AI_HEAVY_LOCK,
)
from .fighter import Fighter, ActionState


class NPCController:
    """Distance-band opponent script.

    Every eligible frame re-rolls each chance on its own (light, then heavy,
    then dash); they are not one weighted pick. Pass a seeded `rng` for
    repeatable fights.
    """

    def __init__(self, rng: random.Random | None = None, *,
                 close_range: float = AI_CLOSE_RANGE,
                 mid_range: float = AI_MID_RANGE,
                 light_chance: float = AI_LIGHT_CHANCE,
                 heavy_chance: float = AI_HEAVY_CHANCE,
                 dash_chance: float = AI_DASH_CHANCE,
                 approach_factor: float = AI_APPROACH_FACTOR,
                 light_lock: int = AI_LIGHT_LOCK,
                 heavy_lock: int = AI_HEAVY_LOCK):
        self.rng = rng or random.Random()
        self.close_range = close_range
        self.mid_range = mid_range
        self.light_chance = light_chance
        self.heavy_chance = heavy_chance
        self.dash_chance = dash_chance
        self.approach_factor = approach_factor
        self.light_lock = light_lock
        self.heavy_lock = heavy_lock

    def update(self, me: Fighter, opp: Fighter):
        if me.is_locked or me.is_dead:
            return

        dist = abs(opp.x - me.x)
        # Facing is judged before we turn around this frame.
        facing = me.is_facing(opp)
        me.face(opp)

        if dist < self.close_range and facing:
            # Close range: swing or hold ground
            if self.rng.random() < self.light_chance:
                me.start_attack(ActionState.ATTACK_LIGHT, self.light_lock)
            elif self.rng.random() < self.heavy_chance:
                me.start_attack(ActionState.ATTACK_HEAVY, self.heavy_lock)
            else:
                me.vx = 0.0
                me.state = ActionState.IDLE
        elif dist < self.mid_range:
            # Mid range: occasional dash in, otherwise wait
            if self.rng.random() < self.dash_chance:
                me.vx = me.direction.value * MOVE_SPEED
                me.state = ActionState.WALK
            else:
                me.vx = 0.0
                me.state = ActionState.IDLE
        else:
            # Far: close the gap
            me.vx = me.direction.value * MOVE_SPEED * self.approach_factor
            me.state = ActionState.WALK
