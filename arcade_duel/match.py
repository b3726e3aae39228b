"""Round orchestration: one `tick()` per simulation frame.

The host (pygame loop, test, anything else) owns the schedule and calls
`tick(keys)`; this module never drives itself. Readers get `snapshot()`
copies, never the live fighters.
"""
import copy
import random
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Callable

from .camera import Camera, HitStop
from .combat import HitEvent, resolve_attack
from .config import (
    FPS, ROUND_SECONDS, COMBO_WINDOW_FRAMES, HEALTH_PUBLISH_INTERVAL, SPARK_COLOR, SPARK_COUNT,
    P1_NAME, P2_NAME, P1_COLOR, P2_COLOR, P1_START_X, P2_START_X, DEFAULT_CONTROLS,
    ATTACK_DB, AttackProfile,
)
from .fighter import Fighter, ActionState, Direction, apply_controls
from .npc import NPCController
from .particles import ParticleSystem, Particle
from .physics import integrate, resolve_pushboxes


class Outcome(Enum):
    WIN = 'WIN'
    LOSE = 'LOSE'
    DRAW = 'DRAW'


class MatchPhase(Enum):
    IDLE = 'idle'
    FIGHTING = 'fighting'
    RESULT_READY = 'result_ready'
    CLOSED = 'closed'


def decide_outcome(p1_hp: int, p2_hp: int) -> Outcome:
    """Higher remaining HP wins; equal HP is a draw."""
    if p1_hp > p2_hp:
        return Outcome.WIN
    if p2_hp > p1_hp:
        return Outcome.LOSE
    return Outcome.DRAW


@dataclass(frozen=True)
class MatchStats:
    hits_landed: int
    damage_dealt: int
    blocks: int
    max_combo: int
    hits_taken: int
    damage_taken: int
    time_left: int
    result: Outcome

    def to_dict(self) -> dict:
        d = asdict(self)
        d['result'] = self.result.value
        return d


@dataclass
class StatsTally:
    """Running counters for the tracked side; frozen into MatchStats at round end."""
    hits_landed: int = 0
    damage_dealt: int = 0
    blocks: int = 0
    max_combo: int = 0
    hits_taken: int = 0
    damage_taken: int = 0

    def finalize(self, time_left: int, result: Outcome) -> MatchStats:
        return MatchStats(
            hits_landed=self.hits_landed,
            damage_dealt=self.damage_dealt,
            blocks=self.blocks,
            max_combo=self.max_combo,
            hits_taken=self.hits_taken,
            damage_taken=self.damage_taken,
            time_left=time_left,
            result=result,
        )


@dataclass(frozen=True)
class MatchSnapshot:
    p1: Fighter
    p2: Fighter
    particles: list[Particle]
    camera: Camera
    time_left: int
    combo: int
    hit_stop: int
    frame_count: int
    phase: MatchPhase
    stats: MatchStats | None = None
    hits: list[HitEvent] = field(default_factory=list)


class Match:
    def __init__(self,
                 controls: dict | None = None,
                 attack_db: dict[str, AttackProfile] | None = None,
                 rng: random.Random | None = None,
                 npc: NPCController | None = None,
                 on_health: Callable[[int, int], None] | None = None,
                 on_timer: Callable[[int], None] | None = None,
                 on_round_end: Callable[[MatchStats], None] | None = None):
        self.controls = controls or DEFAULT_CONTROLS
        self.attack_db = attack_db or ATTACK_DB
        self.rng = rng or random.Random()
        self.npc = npc or NPCController(self.rng)
        self.on_health = on_health
        self.on_timer = on_timer
        self.on_round_end = on_round_end

        self.p1 = Fighter(1, P1_NAME, P1_START_X, Direction.RIGHT, P1_COLOR)
        self.p2 = Fighter(2, P2_NAME, P2_START_X, Direction.LEFT, P2_COLOR)
        # Combo and stats follow the human side.
        self.tracked_id = self.p1.id

        self.particles = ParticleSystem(self.rng)
        self.camera = Camera()
        self.hit_stop = HitStop()

        self.phase = MatchPhase.IDLE
        self.time_left = ROUND_SECONDS
        self.frame_count = 0
        self.combo = 0
        self.combo_timer = 0
        self.tally = StatsTally()
        self.stats: MatchStats | None = None
        self.end_reason = ''
        self._round_over = False
        self._frame_hits: list[HitEvent] = []

    # -----------------------------------------------------------------------
    # Round lifecycle
    # -----------------------------------------------------------------------
    def start_round(self):
        """Start (or restart) a round from scratch."""
        if self.phase is MatchPhase.CLOSED:
            return
        self.p1.reset(P1_START_X, Direction.RIGHT)
        self.p2.reset(P2_START_X, Direction.LEFT)
        self.particles.clear()
        self.camera.reset()
        self.hit_stop.reset()
        self.time_left = ROUND_SECONDS
        self.frame_count = 0
        self.combo = 0
        self.combo_timer = 0
        self.tally = StatsTally()
        self.stats = None
        self.end_reason = ''
        self._round_over = False
        self._frame_hits = []
        self.phase = MatchPhase.FIGHTING
        print(f'[Match] Round start: {self.p1.name} vs {self.p2.name}')
        self._publish_health()
        self._publish_timer()

    @property
    def is_round_over(self) -> bool:
        return self._round_over

    @property
    def result_ready(self) -> bool:
        return self.phase is MatchPhase.RESULT_READY

    def end_round(self, reason: str) -> MatchStats | None:
        """Resolve the round. Runs once per round; later calls return the same stats."""
        if self._round_over:
            return self.stats
        self._round_over = True
        self.end_reason = reason

        result = decide_outcome(self.p1.hp, self.p2.hp)
        self.stats = self.tally.finalize(self.time_left, result)
        self.phase = MatchPhase.RESULT_READY
        print(f'[Match] Round over ({reason}): {result.value} '
              f'{self.p1.hp}-{self.p2.hp}, {self.time_left}s left')

        self._publish_health()
        if self.on_round_end is not None:
            self.on_round_end(self.stats)
        return self.stats

    def close(self):
        """Tear down: drop host callbacks and turn further ticks into no-ops."""
        self.phase = MatchPhase.CLOSED
        self.on_health = None
        self.on_timer = None
        self.on_round_end = None

    # -----------------------------------------------------------------------
    # Frame step
    # -----------------------------------------------------------------------
    def tick(self, keys):
        if self.phase is not MatchPhase.FIGHTING:
            return
        p1, p2 = self.p1, self.p2
        self._frame_hits = []

        # Impact freeze: only the camera (shake) keeps moving.
        if self.hit_stop.frozen:
            self.hit_stop.step()
            self.camera.update(p1, p2)
            return

        # Round clock
        if self.frame_count > 0 and self.frame_count % FPS == 0 and self.time_left > 0:
            self.time_left -= 1
            self._publish_timer()

        # Combo window
        if self.combo_timer > 0:
            self.combo_timer -= 1
            if self.combo_timer == 0:
                self.combo = 0

        # Player
        if p1.is_locked:
            p1.tick_lock()
        else:
            apply_controls(p1, keys, self.controls, self.attack_db)

        # CPU
        if p2.is_locked:
            p2.tick_lock()
        else:
            self.npc.update(p2, p1)

        integrate(p1)
        integrate(p2)
        resolve_pushboxes(p1, p2)

        # Fixed order: fighter 1's swing lands first on a trade.
        for attacker, defender in ((p1, p2), (p2, p1)):
            event = resolve_attack(attacker, defender, self.attack_db)
            if event is not None:
                self._apply_hit(event)

        self.particles.update()
        self.camera.update(p1, p2)

        if self.time_left <= 0:
            self.end_round('time')
        elif p1.hp <= 0 or p2.hp <= 0:
            self.end_round('ko')

        if self.frame_count % HEALTH_PUBLISH_INTERVAL == 0:
            self._publish_health()
        self.frame_count += 1

    def _apply_hit(self, event: HitEvent):
        self._frame_hits.append(event)
        self.hit_stop.trigger(event.hit_stop)
        self.camera.add_shake(event.shake)
        count = SPARK_COUNT * 2 if event.state is ActionState.ATTACK_HEAVY else SPARK_COUNT
        self.particles.spawn(event.contact_x, event.contact_y, SPARK_COLOR, count)

        t = self.tally
        if event.attacker_id == self.tracked_id:
            t.hits_landed += 1
            t.damage_dealt += event.damage
            self.combo += 1
            self.combo_timer = COMBO_WINDOW_FRAMES
            t.max_combo = max(t.max_combo, self.combo)
        else:
            t.hits_taken += 1
            t.damage_taken += event.damage
            self.combo = 0
            self.combo_timer = 0

        if event.knockout:
            self.end_round('ko')

    # -----------------------------------------------------------------------
    # Presentation boundary
    # -----------------------------------------------------------------------
    def _publish_health(self):
        if self.on_health is not None:
            self.on_health(self.p1.hp, self.p2.hp)

    def _publish_timer(self):
        if self.on_timer is not None:
            self.on_timer(self.time_left)

    def snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(
            p1=self.p1.snapshot(),
            p2=self.p2.snapshot(),
            particles=self.particles.snapshot(),
            camera=copy.copy(self.camera),
            time_left=self.time_left,
            combo=self.combo,
            hit_stop=self.hit_stop.frames,
            frame_count=self.frame_count,
            phase=self.phase,
            stats=self.stats,
            hits=list(self._frame_hits),
        )
