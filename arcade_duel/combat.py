from dataclasses import dataclass

from .config import (
    FIGHTER_W, FIGHTER_H, HIT_STUN_FRAMES, KNOCKBACK_VX, SHAKE_PER_DAMAGE,
    ENERGY_ON_HIT_DIVISOR, ENERGY_ON_DAMAGE_DIVISOR, AttackProfile,
)
from .fighter import Fighter, ActionState, Direction
from .geometry import Box, boxes_overlap


@dataclass(frozen=True)
class HitEvent:
    attacker_id: int
    defender_id: int
    state: ActionState
    damage: int
    hit_stop: int
    shake: float
    contact_x: float
    contact_y: float
    knockout: bool


def attack_profile(fighter: Fighter, attack_db: dict[str, AttackProfile]) -> AttackProfile | None:
    if not fighter.is_attacking:
        return None
    return attack_db.get(fighter.state.value)


def current_attack_frame(fighter: Fighter, profile: AttackProfile) -> int:
    """Frames elapsed since the attack started, counted down from state_timer."""
    return profile.lock_frames - fighter.state_timer


def spawn_attack_box(fighter: Fighter, profile: AttackProfile) -> Box:
    # In front of the body per facing.
    if fighter.direction is Direction.RIGHT:
        x = fighter.x + FIGHTER_W
    else:
        x = fighter.x - profile.width
    return Box(x, fighter.y + profile.y_offset, profile.width, profile.height)


def resolve_attack(attacker: Fighter, defender: Fighter,
                   attack_db: dict[str, AttackProfile]) -> HitEvent | None:
    """Spawn the attack box on the first active frame and test it once.

    The box stays on the attacker until the attack state ends; its presence is
    what stops a second check (and a second hit) from the same swing.
    """
    profile = attack_profile(attacker, attack_db)
    if profile is None:
        return None
    if attacker.attack_box is not None:
        return None
    frame = current_attack_frame(attacker, profile)
    if not profile.in_active_window(frame):
        return None

    attacker.attack_box = spawn_attack_box(attacker, profile)

    if not boxes_overlap(attacker.attack_box, defender.hitbox):
        return None
    if defender.state in (ActionState.HIT, ActionState.DEAD):
        return None

    state = attacker.state
    defender.take_hit(profile.damage, attacker.direction.value * KNOCKBACK_VX, HIT_STUN_FRAMES)
    attacker.gain_energy(profile.damage // ENERGY_ON_HIT_DIVISOR)
    defender.gain_energy(profile.damage // ENERGY_ON_DAMAGE_DIVISOR)

    return HitEvent(
        attacker_id=attacker.id,
        defender_id=defender.id,
        state=state,
        damage=profile.damage,
        hit_stop=profile.hit_stop,
        shake=profile.damage * SHAKE_PER_DAMAGE,
        contact_x=defender.x + FIGHTER_W / 2,
        contact_y=defender.y + FIGHTER_H / 3,
        knockout=defender.is_dead,
    )
