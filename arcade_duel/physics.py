from .config import (
    GRAVITY, FRICTION, GROUND_Y, FIGHTER_W, FIGHTER_H, STAGE_MIN_X, STAGE_MAX_X, PUSH_STEP,
)
from .fighter import Fighter, ActionState
from .geometry import boxes_overlap


def clamp_to_stage(fighter: Fighter):
    if fighter.x < STAGE_MIN_X:
        fighter.x = STAGE_MIN_X
    if fighter.x + FIGHTER_W > STAGE_MAX_X:
        fighter.x = STAGE_MAX_X - FIGHTER_W


def integrate(fighter: Fighter):
    """Advance one frame: gravity, position, ground and wall clamps, hitbox sync."""
    fighter.vy += GRAVITY
    fighter.x += fighter.vx
    fighter.y += fighter.vy

    # Land
    if fighter.y + FIGHTER_H >= GROUND_Y:
        fighter.y = GROUND_Y - FIGHTER_H
        fighter.vy = 0.0
        fighter.is_grounded = True
        if fighter.state is ActionState.JUMP:
            fighter.state = ActionState.IDLE

    # Knockback slides to a stop during hitstun
    if fighter.state is ActionState.HIT:
        fighter.vx *= FRICTION

    clamp_to_stage(fighter)
    fighter.sync_hitbox()


def resolve_pushboxes(p1: Fighter, p2: Fighter):
    """Nudge overlapping fighters apart along X, a fixed step per frame.

    Not an exact separation: a deep overlap takes a few frames to clear.
    """
    if not boxes_overlap(p1.hitbox, p2.hitbox):
        return
    if p1.x < p2.x:
        p1.x -= PUSH_STEP
        p2.x += PUSH_STEP
    else:
        p1.x += PUSH_STEP
        p2.x -= PUSH_STEP
    clamp_to_stage(p1)
    clamp_to_stage(p2)
    p1.sync_hitbox()
    p2.sync_hitbox()
