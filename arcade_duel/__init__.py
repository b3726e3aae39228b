"""Arcade Duel: a frame-stepped two-fighter combat simulation."""

from .match import Match, MatchStats, MatchSnapshot, MatchPhase, Outcome, decide_outcome
from .fighter import Fighter, ActionState, Direction, KeyState
from .npc import NPCController

__version__ = '0.1.0'
