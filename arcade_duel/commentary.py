"""Post-match announcer line from Gemini.

Everything that can go wrong here (no key, network, quota, odd payload) ends
up as one of the fixed strings below. Nothing in this module raises into the
game loop.
"""
import threading

import requests

from .config import Settings

API_URL = 'https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent'

NO_KEY_MESSAGE = 'Gemini API Key not found. Commentary unavailable.'
EMPTY_MESSAGE = 'PERFECT! THE KING OF FIGHTERS!'
FALLBACK_MESSAGE = 'CONNECTION LOST! INSERT COIN TO CONTINUE!'


def build_prompt(stats, opponent_name: str) -> str:
    result = getattr(stats.result, 'value', stats.result)
    return (
        "You are the legendary announcer from 'The King of Fighters' tournament.\n"
        "The match has just ended in the arcade!\n\n"
        "Here are the battle results for the Player (Hero):\n"
        f"- Result: {result}\n"
        f"- Hits Landed: {stats.hits_landed}\n"
        f"- Damage Dealt: {stats.damage_dealt}\n"
        f"- Blocks: {stats.blocks}\n"
        f"- Best Combo: {stats.max_combo}\n"
        f"- Time Left: {stats.time_left}s\n"
        f"- Opponent: {opponent_name}\n\n"
        "Generate a hype post-match result screen quote.\n"
        "- Style: High-energy 90s Arcade Announcer.\n"
        "- If Win: \"WINNER IS...\" followed by praise for their technique.\n"
        "- If Lose: encourage them to \"INSERT COIN\" or try again.\n"
        "- Use uppercase for impact.\n"
        "- Keep it under 50 words.\n"
    )


def _extract_text(payload: dict) -> str:
    parts = []
    for cand in payload.get('candidates') or []:
        content = cand.get('content') or {}
        for part in content.get('parts') or []:
            text = part.get('text')
            if text:
                parts.append(text)
        if parts:
            break
    return ''.join(parts).strip()


def generate_fight_commentary(stats, opponent_name: str, settings: Settings | None = None) -> str:
    settings = settings or Settings.from_env()
    if not settings.api_key:
        return NO_KEY_MESSAGE

    body = {
        'contents': [{'role': 'user', 'parts': [{'text': build_prompt(stats, opponent_name)}]}],
        'generationConfig': {
            'maxOutputTokens': 250,
            'temperature': 0.9,
            'thinkingConfig': {'thinkingBudget': 0},
        },
    }
    try:
        resp = requests.post(
            API_URL.format(model=settings.model),
            params={'key': settings.api_key},
            json=body,
            timeout=settings.timeout_s,
        )
        resp.raise_for_status()
        text = _extract_text(resp.json())
    except Exception as e:
        print(f'[Commentary] Error generating commentary: {e}')
        return FALLBACK_MESSAGE
    return text or EMPTY_MESSAGE


class CommentaryJob:
    """Runs one commentary request on a daemon thread.

    The result screen polls `done` each frame; the match result is already
    final by the time this starts, so a slow or failed call only changes the
    text shown.
    """

    def __init__(self, stats, opponent_name: str, settings: Settings | None = None,
                 generate=generate_fight_commentary):
        self.stats = stats
        self.opponent_name = opponent_name
        self.settings = settings
        self._generate = generate
        self._done = threading.Event()
        self.text = ''
        self._thread = threading.Thread(target=self._run, name='commentary', daemon=True)

    def start(self) -> 'CommentaryJob':
        self._thread.start()
        return self

    def _run(self):
        try:
            self.text = self._generate(self.stats, self.opponent_name, self.settings)
        except Exception as e:
            print(f'[Commentary] Unexpected failure: {e}')
            self.text = FALLBACK_MESSAGE
        finally:
            self._done.set()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout)
