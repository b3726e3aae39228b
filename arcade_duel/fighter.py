import copy
from enum import Enum

from .config import (
    FIGHTER_W, FIGHTER_H, GROUND_Y, MAX_HP, MAX_ENERGY, MOVE_SPEED, JUMP_VY,
    AttackProfile,
)
from .geometry import Box


class Direction(Enum):
    LEFT = -1
    RIGHT = 1


class ActionState(Enum):
    IDLE = 'idle'
    WALK = 'walk'
    JUMP = 'jump'
    CROUCH = 'crouch'
    ATTACK_LIGHT = 'attack_light'
    ATTACK_HEAVY = 'attack_heavy'
    HIT = 'hit'
    BLOCK = 'block'
    DEAD = 'dead'


ATTACK_STATES = (ActionState.ATTACK_LIGHT, ActionState.ATTACK_HEAVY)

# Locked states run their timer out; no new input is read (no cancels).
LOCKED_STATES = (ActionState.HIT,) + ATTACK_STATES


class Fighter:
    def __init__(self, fighter_id: int, name: str, x: float, direction: Direction,
                 color: tuple[int, int, int]):
        self.id = fighter_id
        self.name = name
        self.color = color  # presentation hint only
        self.max_hp = MAX_HP
        self.max_energy = MAX_ENERGY
        self.reset(x, direction)

    def reset(self, x: float, direction: Direction):
        self.x = float(x)
        self.y = float(GROUND_Y - FIGHTER_H)
        self.vx = 0.0
        self.vy = 0.0
        self.is_grounded = True
        self.hp = self.max_hp
        self.energy = 0
        self.direction = direction
        self.state = ActionState.IDLE
        self.state_timer = 0
        self.hitbox = Box(self.x, self.y, FIGHTER_W, FIGHTER_H)
        self.attack_box: Box | None = None

    def __repr__(self):
        return f'Fighter({self.id}, {self.name!r}, state={self.state.value}, hp={self.hp})'

    @property
    def is_locked(self) -> bool:
        return self.state in LOCKED_STATES

    @property
    def is_attacking(self) -> bool:
        return self.state in ATTACK_STATES

    @property
    def is_dead(self) -> bool:
        return self.state is ActionState.DEAD

    def snapshot(self) -> 'Fighter':
        """Detached copy for readers; mutating it never touches the live fighter."""
        return copy.deepcopy(self)

    def sync_hitbox(self):
        self.hitbox = Box(self.x, self.y, FIGHTER_W, FIGHTER_H)

    def face(self, other: 'Fighter'):
        self.direction = Direction.LEFT if self.x > other.x else Direction.RIGHT

    def is_facing(self, other: 'Fighter') -> bool:
        if self.x > other.x:
            return self.direction is Direction.LEFT
        if self.x < other.x:
            return self.direction is Direction.RIGHT
        return False

    def tick_lock(self):
        """Run down a locked state; back to Idle (and drop the attack box) at zero."""
        self.state_timer -= 1
        if self.state_timer <= 0:
            self.state_timer = 0
            self.state = ActionState.IDLE
            self.attack_box = None

    def start_attack(self, state: ActionState, lock_frames: int):
        self.state = state
        self.state_timer = lock_frames
        self.vx = 0.0
        self.attack_box = None

    def take_hit(self, damage: int, knockback_vx: float, stun_frames: int):
        self.hp = max(0, self.hp - damage)
        self.state = ActionState.HIT
        self.state_timer = stun_frames
        self.vx = knockback_vx
        # An interrupted attack never comes back.
        self.attack_box = None
        if self.hp <= 0:
            self.knock_out()

    def knock_out(self):
        self.hp = 0
        self.state = ActionState.DEAD
        self.state_timer = 0
        self.attack_box = None

    def gain_energy(self, amount: int):
        self.energy = max(0, min(self.max_energy, self.energy + amount))


class KeyState:
    """Raw key id -> pressed flag.

    Host key events write it; the simulation reads it once per frame without
    consuming anything, so a held key keeps acting every frame.
    """

    def __init__(self):
        self.state: dict[int, bool] = {}

    def press(self, key):
        self.state[key] = True

    def release(self, key):
        self.state[key] = False

    def reset(self):
        self.state.clear()

    def __getitem__(self, key):
        return self.state.get(key, False)


def apply_controls(fighter: Fighter, keys, controls: dict, attack_db: dict[str, AttackProfile]):
    """Player branch of the action-state machine for an unlocked fighter.

    Branch order is fixed so opposing keys resolve the same way every time:
    left beats right, and light beats heavy.
    """
    if fighter.is_locked or fighter.is_dead:
        return

    # Movement
    moving = False
    if keys[controls['left']]:
        fighter.vx = -MOVE_SPEED
        fighter.direction = Direction.LEFT
        moving = True
    elif keys[controls['right']]:
        fighter.vx = MOVE_SPEED
        fighter.direction = Direction.RIGHT
        moving = True
    else:
        fighter.vx = 0.0

    fighter.state = ActionState.WALK if moving else ActionState.IDLE

    # Jump
    if keys[controls['jump']] and fighter.is_grounded:
        fighter.vy = JUMP_VY
        fighter.is_grounded = False
        fighter.state = ActionState.JUMP

    # Attacks
    if keys[controls['light']]:
        fighter.start_attack(ActionState.ATTACK_LIGHT, attack_db[ActionState.ATTACK_LIGHT.value].lock_frames)
    elif keys[controls['heavy']]:
        fighter.start_attack(ActionState.ATTACK_HEAVY, attack_db[ActionState.ATTACK_HEAVY.value].lock_frames)
