from __future__ import annotations

from typing import Callable

from .actions import QuitAction
from .turn import GameState, TurnResult, begin_turn, parse_action, step

ReadLine = Callable[[str], str | None]
Show = Callable[[GameState], None]
Say = Callable[[str], None]

REDO_LABELS = {"water": "Water", "tree": "Tree", "off_grid": "Off the map"}


def prompt_for(state: GameState) -> str:
    if state.rules.clubs_enabled:
        return "Please input a direction and club (drive/put):"
    return "Please input a direction:"


def describe(state: GameState, result: TurnResult) -> str | None:
    if result.outcome == "holed":
        return f"Hit hole in {state.strokes} shots"
    if result.outcome == "redo":
        return f"Redo: {REDO_LABELS.get(result.reason or '', result.reason)}"
    if result.outcome == "aborted":
        return f"Game aborted on stroke {state.strokes}."
    if result.outcome == "rejected":
        return f"{result.error} (directions: N S E W NE NW SE SW)"
    return None


def run_session(
    state: GameState,
    read_line: ReadLine,
    show: Show,
    say: Say,
    on_result: Callable[[TurnResult], None] | None = None,
) -> GameState:
    """Drive turns until the ball is holed or the player quits.

    `read_line` returning None (end of input) is treated as a quit. The
    outcome message of a turn is said after the next render so that a
    clearing renderer does not wipe it.
    """
    msg: str | None = None
    while not state.finished:
        show(state)
        if msg:
            say(msg)
        strength = begin_turn(state)
        say(f"Strength: {strength}")
        line = read_line(prompt_for(state))
        action = QuitAction() if line is None else parse_action(line, state.rules)
        result = step(state, action)
        if on_result is not None:
            on_result(result)
        msg = describe(state, result)
    if msg:
        say(msg)
    return state
