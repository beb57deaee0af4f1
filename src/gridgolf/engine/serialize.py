from __future__ import annotations


from .actions import Action, QuitAction, ShotAction, UnrecognizedInput
from .grid import Grid
from .types import Slope, Start, Terrain
from .turn import GameState


def terrain_to_dict(t: Terrain) -> dict[str, object]:
    if isinstance(t, Slope):
        return {"type": "slope", "direction": t.direction}
    if isinstance(t, Start):
        return {"type": "start", "stroke": t.stroke}
    return {"type": t.kind}


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, ShotAction):
        return {"type": "shot", "direction": a.direction, "club": a.club}
    if isinstance(a, QuitAction):
        return {"type": "quit"}
    if isinstance(a, UnrecognizedInput):
        return {"type": "unrecognized", "text": a.text}
    # should be unreachable
    return {"type": "unknown"}


def _grid_to_dict(g: Grid) -> dict[str, object]:
    return {
        "width": g.width,
        "height": g.height,
        "start": [g.start.row, g.start.col],
        "markers": sorted([[c.row, c.col, n] for c, n in g.markers.items()]),
        "cells": [[terrain_to_dict(t) for _c, t in row] for row in g.rows()],
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    return {
        "seed": state.seed,
        "phase": state.phase,
        "ball": [state.ball.row, state.ball.col],
        "strokes": state.strokes,
        "grid": _grid_to_dict(state.grid),
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
