import dataclasses
import random

import pygame
import pytest

from arcade_duel.app import DuelApp, GameStatus
from arcade_duel.camera import Camera
from arcade_duel.commentary import NO_KEY_MESSAGE
from arcade_duel.config import ATTACK_DB, HEIGHT, WIDTH, Settings
from arcade_duel.fighter import ActionState, Direction, Fighter
from arcade_duel.match import MatchPhase
from arcade_duel.render import draw_fighter


@pytest.fixture
def app():
    pygame.init()
    surf = pygame.Surface((WIDTH, HEIGHT))
    yield DuelApp(surf, settings=Settings(api_key=None), seed=3)
    pygame.quit()


def key_event(kind, key):
    return pygame.event.Event(kind, key=key)


class TestDuelApp:

    def test_starts_on_menu(self, app):
        assert app.status is GameStatus.MENU
        assert app.match is None
        app.draw()

    def test_enter_starts_a_round(self, app):
        assert app.handle_event(key_event(pygame.KEYDOWN, pygame.K_RETURN))
        assert app.status is GameStatus.PLAYING
        assert app.match.phase is MatchPhase.FIGHTING
        for _ in range(10):
            app.step()
            app.draw()
        assert app.snapshot.frame_count == 10

    def test_keys_reach_the_player(self, app):
        app.start_game()
        app.handle_event(key_event(pygame.KEYDOWN, app.controls['right']))
        app.step()
        assert app.match.p1.vx > 0
        app.handle_event(key_event(pygame.KEYUP, app.controls['right']))
        app.step()
        assert app.match.p1.vx == 0

    def test_escape_returns_to_menu_and_closes(self, app):
        app.start_game()
        match = app.match
        app.handle_event(key_event(pygame.KEYDOWN, pygame.K_ESCAPE))
        assert app.status is GameStatus.MENU
        assert app.match is None
        assert match.phase is MatchPhase.CLOSED

    def test_round_end_shows_result_and_commentary(self, app):
        app.start_game()
        match = app.match
        match.p2.knock_out()
        app.step()
        assert app.status is GameStatus.GAME_OVER
        assert app.match is None
        assert match.phase is MatchPhase.CLOSED
        assert app.last_stats.result.value == 'WIN'
        assert app.commentary.wait(5)
        assert app.commentary.text == NO_KEY_MESSAGE
        app.draw()

    def test_quit_event_stops_loop(self, app):
        assert not app.handle_event(pygame.event.Event(pygame.QUIT))

    def test_result_ready_tears_the_match_down(self, app):
        app.start_game()
        match = app.match
        match.end_round('time')
        assert match.result_ready
        app.step()
        assert app.match is None
        assert match.phase is MatchPhase.CLOSED


class TestRender:

    def test_attack_hand_uses_active_attack_table(self, app):
        tuned = dict(ATTACK_DB)
        tuned['attack_light'] = dataclasses.replace(ATTACK_DB['attack_light'], color=(0, 255, 0))
        f = Fighter(1, 'Kyo-Clone', 100, Direction.RIGHT, (255, 0, 0))
        f.start_attack(ActionState.ATTACK_LIGHT, tuned['attack_light'].lock_frames)
        surf = pygame.Surface((WIDTH, HEIGHT))
        # Camera at rest maps world to screen 1:1; the hand sits right of the body.
        draw_fighter(surf, f, Camera(), (0, 0), random.Random(0), tuned)
        assert tuple(surf.get_at((170, int(f.y) + 50)))[:3] == (0, 255, 0)

    def test_app_draws_with_its_own_attack_table(self, app):
        tuned = dict(ATTACK_DB)
        tuned['attack_light'] = dataclasses.replace(ATTACK_DB['attack_light'], color=(0, 255, 0))
        app.attack_db = tuned
        app.start_game()
        app.match.p1.start_attack(ActionState.ATTACK_LIGHT, tuned['attack_light'].lock_frames)
        app.snapshot = app.match.snapshot()
        app.draw()
        p1 = app.snapshot.p1
        assert tuple(app.screen.get_at((int(p1.x) + 70, int(p1.y) + 50)))[:3] == (0, 255, 0)
