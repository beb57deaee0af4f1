"""Deterministic, headless rules engine for gridgolf.

IMPORTANT: This package must never import pygame.
"""

from .actions import QuitAction, ShotAction, UnrecognizedInput
from .grid import Grid
from .loader import MapLoadError, load_map, parse_map
from .shot import resolve_flight, resolve_shot, resolve_terrain_chain
from .turn import GameState, RuleSet, TurnResult, begin_turn, new_game, parse_action, step
from .types import Coord, Direction, Terrain

__all__ = [
    "Coord",
    "Direction",
    "GameState",
    "Grid",
    "MapLoadError",
    "QuitAction",
    "RuleSet",
    "ShotAction",
    "Terrain",
    "TurnResult",
    "UnrecognizedInput",
    "begin_turn",
    "load_map",
    "new_game",
    "parse_action",
    "parse_map",
    "resolve_flight",
    "resolve_shot",
    "resolve_terrain_chain",
    "step",
]
