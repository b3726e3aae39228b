"""pygame drawing. Reads MatchSnapshot copies only; never touches the live match."""
import os
import random

import pygame

from .config import WIDTH, HEIGHT, GROUND_Y, FIGHTER_W, FIGHTER_H, MAX_HP, INTRO_FRAMES, ATTACK_DB
from .fighter import ActionState, Direction

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
DARK = (34, 34, 34)
FLOOR_TOP = (51, 51, 51)
FLOOR_BOTTOM = (17, 17, 17)
DEAD_GREY = (68, 68, 68)
HAND = (221, 221, 221)
YELLOW = (250, 204, 21)
TEXT_RED = (220, 38, 38)
HP_FILL = (234, 179, 8)
HP_BACK = (127, 29, 29)

# Prefer an arcade font next to the package, then the pygame default.
FONT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'arcade.ttf')


def load_game_font(size: int) -> pygame.font.Font:
    if os.path.isfile(FONT_PATH):
        try:
            return pygame.font.Font(FONT_PATH, size)
        except (OSError, pygame.error) as e:
            print(f'[WARN] Failed to load font at {FONT_PATH}: {e}')
    return pygame.font.SysFont(None, size)


class Fonts:
    def __init__(self):
        self.small = load_game_font(24)
        self.mid = load_game_font(48)
        self.big = load_game_font(72)


def world_to_screen(x: float, y: float, camera, offset: tuple[float, float]) -> tuple[int, int]:
    # Camera x/y is the world offset at zoom 1; zoom scales about the canvas centre.
    sx = (x - camera.x - WIDTH / 2) * camera.zoom + WIDTH / 2 + offset[0]
    sy = (y - camera.y - HEIGHT / 2) * camera.zoom + HEIGHT / 2 + offset[1]
    return int(sx), int(sy)


def _screen_rect(x, y, w, h, camera, offset) -> pygame.Rect:
    sx, sy = world_to_screen(x, y, camera, offset)
    return pygame.Rect(sx, sy, max(1, int(w * camera.zoom)), max(1, int(h * camera.zoom)))


def draw_stage(surf: pygame.Surface, camera, offset):
    surf.fill(DARK)
    _, gy = world_to_screen(0, GROUND_Y, camera, offset)
    gy = max(0, min(HEIGHT, gy))
    floor_h = HEIGHT - gy
    if floor_h <= 0:
        return
    # Vertical gradient, a band at a time.
    for i in range(floor_h):
        t = i / max(1, floor_h - 1)
        c = tuple(int(a + (b - a) * t) for a, b in zip(FLOOR_TOP, FLOOR_BOTTOM))
        pygame.draw.line(surf, c, (0, gy + i), (WIDTH, gy + i))


def draw_fighter(surf: pygame.Surface, f, camera, offset, rng: random.Random,
                 attack_db: dict = ATTACK_DB):
    # Shadow
    shadow = pygame.Surface((int(FIGHTER_W * 1.5 * camera.zoom), int(20 * camera.zoom)), pygame.SRCALPHA)
    pygame.draw.ellipse(shadow, (0, 0, 0, 128), shadow.get_rect())
    sx, sy = world_to_screen(f.x + FIGHTER_W / 2, GROUND_Y - 5, camera, offset)
    surf.blit(shadow, (sx - shadow.get_width() // 2, sy - shadow.get_height() // 2))

    jitter = (0, 0)
    if f.state is ActionState.HIT:
        jitter = ((rng.random() - 0.5) * 5, (rng.random() - 0.5) * 5)
    body_off = (offset[0] + jitter[0], offset[1] + jitter[1])

    body = _screen_rect(f.x, f.y, FIGHTER_W, FIGHTER_H, camera, body_off)
    pygame.draw.rect(surf, DEAD_GREY if f.state is ActionState.DEAD else f.color, body)

    # Headband
    z = camera.zoom
    band = pygame.Rect(0, 0, int(40 * z), int(10 * z))
    band.top = body.top + int(10 * z)
    if f.direction is Direction.RIGHT:
        band.left = body.left + int(10 * z)
    else:
        band.right = body.right - int(10 * z)
    pygame.draw.rect(surf, WHITE, band)

    # Hands: extended while attacking
    if f.state in (ActionState.ATTACK_LIGHT, ActionState.ATTACK_HEAVY):
        color = attack_db[f.state.value].color
        hand = pygame.Rect(0, 0, int(40 * z), int(20 * z))
        hand.centery = body.centery
        if f.direction is Direction.RIGHT:
            hand.left = body.centerx + int(20 * z)
        else:
            hand.right = body.centerx - int(20 * z)
    else:
        color = HAND
        hand = pygame.Rect(0, 0, int(15 * z), int(15 * z))
        hand.top = body.centery
        if f.direction is Direction.RIGHT:
            hand.left = body.centerx + int(10 * z)
        else:
            hand.right = body.centerx - int(10 * z)
    pygame.draw.rect(surf, color, hand)

    if f.attack_box is not None and f.state in (ActionState.ATTACK_LIGHT, ActionState.ATTACK_HEAVY):
        b = f.attack_box
        r = _screen_rect(b.x, b.y, b.width, b.height, camera, offset)
        overlay = pygame.Surface(r.size, pygame.SRCALPHA)
        overlay.fill((255, 255, 0, 77))
        surf.blit(overlay, r.topleft)


def draw_particles(surf: pygame.Surface, particles, camera, offset):
    for p in particles:
        pos = world_to_screen(p.x, p.y, camera, offset)
        pygame.draw.circle(surf, p.color, pos, max(1, int(p.size * camera.zoom)))


def draw_health_bar(surf: pygame.Surface, x: int, y: int, hp: int, color, *, mirror: bool = False):
    BAR_W = 300
    BAR_H = 22
    BORDER = 3
    hp = max(0, min(MAX_HP, hp))
    pygame.draw.rect(surf, WHITE, (x - BORDER, y - BORDER, BAR_W + BORDER * 2, BAR_H + BORDER * 2))
    pygame.draw.rect(surf, HP_BACK, (x, y, BAR_W, BAR_H))
    fill_w = int(BAR_W * (hp / MAX_HP))
    # P2 drains toward the centre from the right, MK-symmetrical.
    fx = x + (BAR_W - fill_w) if mirror else x
    pygame.draw.rect(surf, color, (fx, y, fill_w, BAR_H))


def draw_hud(surf: pygame.Surface, fonts: Fonts, p1_hp: int, p2_hp: int, timer: int,
             p1_name: str, p2_name: str, combo: int = 0):
    draw_health_bar(surf, 30, 24, p1_hp, HP_FILL)
    draw_health_bar(surf, WIDTH - 330, 24, p2_hp, HP_FILL, mirror=True)

    t = fonts.mid.render(str(max(0, timer)).rjust(2, '0'), True, YELLOW)
    surf.blit(t, (WIDTH // 2 - t.get_width() // 2, 14))

    n1 = fonts.small.render(p1_name.upper(), True, WHITE)
    n2 = fonts.small.render(p2_name.upper(), True, WHITE)
    surf.blit(n1, (30, 54))
    surf.blit(n2, (WIDTH - 30 - n2.get_width(), 54))

    if combo >= 2:
        c = fonts.mid.render(f'{combo} HITS', True, YELLOW)
        surf.blit(c, (30, 90))


def draw_menu(surf: pygame.Surface, fonts: Fonts):
    surf.fill(BLACK)
    title = fonts.big.render('ARCADE DUEL', True, TEXT_RED)
    surf.blit(title, (WIDTH // 2 - title.get_width() // 2, HEIGHT // 3 - title.get_height() // 2))
    prompt = fonts.small.render('PRESS ENTER TO FIGHT', True, WHITE)
    surf.blit(prompt, (WIDTH // 2 - prompt.get_width() // 2, HEIGHT // 2 + 20))
    help_lines = ['A / D  MOVE     W  JUMP', 'J  LIGHT     K  HEAVY']
    for i, line in enumerate(help_lines):
        s = fonts.small.render(line, True, (160, 160, 160))
        surf.blit(s, (WIDTH // 2 - s.get_width() // 2, HEIGHT // 2 + 70 + i * 26))


def _wrap(text: str, font: pygame.font.Font, max_w: int) -> list[str]:
    lines: list[str] = []
    cur = ''
    for word in text.split():
        trial = f'{cur} {word}'.strip()
        if font.size(trial)[0] <= max_w or not cur:
            cur = trial
        else:
            lines.append(cur)
            cur = word
    if cur:
        lines.append(cur)
    return lines


def draw_game_over(surf: pygame.Surface, fonts: Fonts, stats, commentary: str | None):
    overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 230))
    surf.blit(overlay, (0, 0))

    result = getattr(stats.result, 'value', stats.result)
    banner = {'WIN': 'K.O. - YOU WIN', 'LOSE': 'YOU LOSE'}.get(result, 'DRAW GAME')
    b = fonts.big.render(banner, True, TEXT_RED)
    surf.blit(b, (WIDTH // 2 - b.get_width() // 2, 40))

    rows = [
        (f'HITS LANDED: {stats.hits_landed}', f'BLOCKS: {stats.blocks}'),
        (f'DAMAGE DEALT: {stats.damage_dealt}', f'TIME LEFT: {stats.time_left}s'),
        (f'BEST COMBO: {stats.max_combo}', f'DAMAGE TAKEN: {stats.damage_taken}'),
    ]
    for i, (left, right) in enumerate(rows):
        ls = fonts.small.render(left, True, (200, 200, 200))
        rs = fonts.small.render(right, True, (200, 200, 200))
        surf.blit(ls, (WIDTH // 2 - 260, 130 + i * 28))
        surf.blit(rs, (WIDTH // 2 + 40, 130 + i * 28))

    box = pygame.Rect(WIDTH // 2 - 300, 230, 600, 130)
    pygame.draw.rect(surf, (31, 41, 55), box)
    pygame.draw.rect(surf, (59, 130, 246), (box.left, box.top, 4, box.height))
    tag = fonts.small.render('AI ANNOUNCER', True, WHITE)
    surf.blit(tag, (box.left + 12, box.top + 6))
    if commentary is None:
        msg_lines = ['Analyzing fight data...']
        color = (156, 163, 175)
    else:
        msg_lines = _wrap(f'"{commentary}"', fonts.small, box.width - 28)
        color = WHITE
    for i, line in enumerate(msg_lines[:4]):
        s = fonts.small.render(line, True, color)
        surf.blit(s, (box.left + 14, box.top + 34 + i * 22))

    again = fonts.small.render('PRESS ENTER TO PLAY AGAIN', True, WHITE)
    surf.blit(again, (WIDTH // 2 - again.get_width() // 2, HEIGHT - 60))


def draw_frame(surf: pygame.Surface, snap, fonts: Fonts, rng: random.Random,
               attack_db: dict = ATTACK_DB):
    """Stage, fighters, sparks; shake offset is re-sampled every frame."""
    camera = snap.camera
    offset = camera.sample_offset(rng)
    draw_stage(surf, camera, offset)
    for f in (snap.p1, snap.p2):
        draw_fighter(surf, f, camera, offset, rng, attack_db)
    draw_particles(surf, snap.particles, camera, offset)

    if snap.frame_count < INTRO_FRAMES:
        t = fonts.big.render('READY... FIGHT!', True, YELLOW)
        surf.blit(t, (WIDTH // 2 - t.get_width() // 2, HEIGHT // 2 - t.get_height() // 2))
