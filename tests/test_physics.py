import pytest

from arcade_duel.config import GRAVITY, GROUND_Y, FIGHTER_H, FIGHTER_W, STAGE_MIN_X, STAGE_MAX_X, PUSH_STEP, FRICTION
from arcade_duel.fighter import Fighter, ActionState, Direction
from arcade_duel.physics import integrate, resolve_pushboxes


def make_fighter(fid=1, x=100, direction=Direction.RIGHT):
    return Fighter(fid, f'F{fid}', x, direction, (255, 0, 0))


class TestIntegrate:

    def test_grounded_fighter_stays_on_ground(self):
        f = make_fighter()
        integrate(f)
        assert f.y + FIGHTER_H == GROUND_Y
        assert f.vy == 0
        assert f.is_grounded

    def test_airborne_applies_gravity_then_moves(self):
        f = make_fighter()
        f.y = 100.0
        f.vy = -5.0
        f.vx = 3.0
        f.is_grounded = False
        integrate(f)
        assert f.vy == pytest.approx(-5.0 + GRAVITY)
        assert f.y == pytest.approx(100.0 - 5.0 + GRAVITY)
        assert f.x == pytest.approx(103.0)

    def test_landing_ends_jump(self):
        f = make_fighter()
        f.state = ActionState.JUMP
        f.is_grounded = False
        f.y = GROUND_Y - FIGHTER_H - 1
        f.vy = 5.0
        integrate(f)
        assert f.is_grounded
        assert f.state is ActionState.IDLE
        assert f.y == GROUND_Y - FIGHTER_H

    def test_landing_keeps_attack_state(self):
        f = make_fighter()
        f.state = ActionState.ATTACK_LIGHT
        f.is_grounded = False
        f.y = GROUND_Y - FIGHTER_H - 1
        f.vy = 5.0
        integrate(f)
        assert f.state is ActionState.ATTACK_LIGHT

    def test_wall_clamps(self):
        f = make_fighter(x=STAGE_MAX_X - FIGHTER_W - 2)
        f.vx = 10
        integrate(f)
        assert f.x == STAGE_MAX_X - FIGHTER_W

        g = make_fighter(x=STAGE_MIN_X + 2)
        g.vx = -10
        integrate(g)
        assert g.x == STAGE_MIN_X

    def test_hitbox_follows_position(self):
        f = make_fighter()
        f.vx = 6
        integrate(f)
        assert f.hitbox.x == f.x
        assert f.hitbox.y == f.y

    def test_knockback_bleeds_off_in_hitstun(self):
        f = make_fighter()
        f.state = ActionState.HIT
        f.vx = 10.0
        integrate(f)
        assert f.x == pytest.approx(110.0)
        assert f.vx == pytest.approx(10.0 * FRICTION)


class TestResolvePushboxes:

    def test_overlap_pushes_apart_symmetrically(self):
        p1 = make_fighter(1, 100)
        p2 = make_fighter(2, 130, Direction.LEFT)
        resolve_pushboxes(p1, p2)
        assert p1.x == 100 - PUSH_STEP
        assert p2.x == 130 + PUSH_STEP
        assert p1.hitbox.x == p1.x
        assert p2.hitbox.x == p2.x

    def test_swapped_sides(self):
        p1 = make_fighter(1, 130)
        p2 = make_fighter(2, 100, Direction.LEFT)
        resolve_pushboxes(p1, p2)
        assert p1.x == 130 + PUSH_STEP
        assert p2.x == 100 - PUSH_STEP

    def test_no_overlap_no_push(self):
        p1 = make_fighter(1, 100)
        p2 = make_fighter(2, 150, Direction.LEFT)
        resolve_pushboxes(p1, p2)
        assert (p1.x, p2.x) == (100, 150)

    def test_repeated_frames_clear_the_overlap(self):
        p1 = make_fighter(1, 100)
        p2 = make_fighter(2, 110, Direction.LEFT)
        for _ in range(20):
            resolve_pushboxes(p1, p2)
        assert p2.x - p1.x >= FIGHTER_W
