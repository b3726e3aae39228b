import random
import sys
from enum import Enum

import pygame

from .commentary import CommentaryJob
from .config import WIDTH, HEIGHT, FPS, MAX_HP, ROUND_SECONDS, DEFAULT_CONTROLS, Settings, load_attack_db
from .fighter import KeyState
from .match import Match, MatchStats
from .render import Fonts, draw_frame, draw_hud, draw_menu, draw_game_over

START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)


class GameStatus(Enum):
    MENU = 'menu'
    PLAYING = 'playing'
    GAME_OVER = 'game_over'


class DuelApp:
    """Host for one local player vs the CPU.

    Owns the pygame loop and the HUD copies of health/timer. The Match only
    exists while PLAYING; leaving that state closes it so nothing ticks it
    after teardown.
    """

    def __init__(self, screen: pygame.Surface, *, settings: Settings | None = None,
                 attack_db: dict | None = None, controls: dict | None = None, seed: int | None = None):
        self.screen = screen
        self.clock = pygame.time.Clock()
        self.fonts = Fonts()
        self.settings = settings or Settings.from_env()
        self.attack_db = attack_db or load_attack_db()
        self.controls = controls or DEFAULT_CONTROLS
        self.rng = random.Random(seed)
        self.fx_rng = random.Random()

        self.status = GameStatus.MENU
        self.keys = KeyState()
        self.match: Match | None = None
        self.snapshot = None

        self.p1_hp = MAX_HP
        self.p2_hp = MAX_HP
        self.timer = ROUND_SECONDS
        self.last_stats: MatchStats | None = None
        self.commentary: CommentaryJob | None = None

    # -----------------------------------------------------------------------
    # Match callbacks (presentation boundary)
    # -----------------------------------------------------------------------
    def _set_health(self, p1_hp: int, p2_hp: int):
        self.p1_hp = p1_hp
        self.p2_hp = p2_hp

    def _set_timer(self, seconds: int):
        self.timer = seconds

    def _on_round_end(self, stats: MatchStats):
        self.last_stats = stats
        self.status = GameStatus.GAME_OVER
        opponent = self.match.p2.name if self.match is not None else 'CPU'
        self.commentary = CommentaryJob(stats, opponent, self.settings).start()

    # -----------------------------------------------------------------------
    # Status transitions
    # -----------------------------------------------------------------------
    def start_game(self):
        self._teardown()
        self.last_stats = None
        self.commentary = None
        self.match = Match(
            controls=self.controls,
            attack_db=self.attack_db,
            rng=self.rng,
            on_health=self._set_health,
            on_timer=self._set_timer,
            on_round_end=self._on_round_end,
        )
        self.status = GameStatus.PLAYING
        self.match.start_round()
        self.snapshot = self.match.snapshot()

    def _teardown(self):
        if self.match is not None:
            self.match.close()
            self.match = None
        self.keys.reset()

    # -----------------------------------------------------------------------
    # Loop
    # -----------------------------------------------------------------------
    def handle_event(self, event) -> bool:
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if self.status is GameStatus.PLAYING:
                if event.key == pygame.K_ESCAPE:
                    self._teardown()
                    self.status = GameStatus.MENU
                    return True
                self.keys.press(event.key)
            elif event.key in START_KEYS:
                self.start_game()
            elif event.key == pygame.K_ESCAPE:
                return False
        elif event.type == pygame.KEYUP:
            self.keys.release(event.key)
        return True

    def step(self):
        if self.status is GameStatus.PLAYING and self.match is not None:
            self.match.tick(self.keys)
            self.snapshot = self.match.snapshot()
            if self.match.result_ready:
                # Round ended inside this tick.
                self._teardown()

    def draw(self):
        if self.status is GameStatus.MENU:
            draw_menu(self.screen, self.fonts)
            return
        if self.snapshot is not None:
            draw_frame(self.screen, self.snapshot, self.fonts, self.fx_rng, self.attack_db)
        if self.status is GameStatus.PLAYING:
            p1, p2 = self.snapshot.p1, self.snapshot.p2
            draw_hud(self.screen, self.fonts, self.p1_hp, self.p2_hp, self.timer,
                     p1.name, p2.name, self.snapshot.combo)
        elif self.status is GameStatus.GAME_OVER and self.last_stats is not None:
            text = self.commentary.text if (self.commentary and self.commentary.done) else None
            draw_game_over(self.screen, self.fonts, self.last_stats, text)

    def run(self):
        running = True
        while running:
            self.clock.tick(FPS)
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                    break
            self.step()
            self.draw()
            pygame.display.flip()
        self._teardown()


def main() -> None:
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption('Arcade Duel')
    settings = Settings.from_env()
    if not settings.api_key:
        print('[INFO] No GEMINI_API_KEY set; post-match commentary disabled.')
    try:
        DuelApp(screen, settings=settings).run()
    finally:
        pygame.quit()
    sys.exit(0)
