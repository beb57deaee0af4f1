from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Literal, Protocol

from .actions import Action, QuitAction, ShotAction, UnrecognizedInput
from .grid import Grid
from .loader import parse_map
from .shot import resolve_shot
from .types import DIRECTION_DELTAS, HAZARDS, HOLE, Club, Coord, Ground, GroundKind, Start, Terrain

Event = dict[str, object]
Phase = Literal["awaiting_shot", "resolving", "holed", "aborted"]
Outcome = Literal["holed", "redo", "advanced", "aborted", "rejected"]

CLUB_TOKENS: dict[str, Club] = {"drive": "drive", "d": "drive", "put": "put", "p": "put"}


class StrengthSampler(Protocol):
    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class RuleSet:
    roll_min: int = 1
    roll_max: int = 6
    min_strength: int = 1
    # (kind, delta) pairs; a tuple keeps the rule set hashable
    terrain_modifiers: tuple[tuple[GroundKind, int], ...] = (("sand", -1), ("fairway", 1))
    clubs_enabled: bool = False
    quit_tokens: tuple[str, ...] = ("q", "quit")


@dataclass
class TurnResult:
    ok: bool
    outcome: Outcome
    events: list[Event]
    landing: Coord | None = None
    reason: str | None = None
    error: str | None = None


@dataclass
class GameState:
    grid: Grid
    rules: RuleSet
    sampler: StrengthSampler
    ball: Coord
    strokes: int = 1
    phase: Phase = "awaiting_shot"
    seed: int | None = None
    roll: int | None = None  # pending turn's base roll
    strength: int | None = None  # pending turn's effective strength
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.phase in ("holed", "aborted")


def terrain_modifier(terrain: Terrain, rules: RuleSet) -> int:
    if isinstance(terrain, Ground):
        return dict(rules.terrain_modifiers).get(terrain.kind, 0)
    return 0


def effective_strength(roll: int, terrain: Terrain, rules: RuleSet, club: Club = "drive") -> int:
    if club == "put":
        return 1
    return max(rules.min_strength, roll + terrain_modifier(terrain, rules))


def parse_action(line: str, rules: RuleSet) -> Action:
    """Turn one line of player input into an action.

    Empty input and quit tokens end the session. Anything that is not a
    direction, optionally followed by a club when clubs are enabled, comes
    back as `UnrecognizedInput`.
    """
    text = line.strip()
    if not text or text in rules.quit_tokens:
        return QuitAction()
    parts = text.split()
    if len(parts) > 2 or parts[0] not in DIRECTION_DELTAS:
        return UnrecognizedInput(text)
    club: Club = "drive"
    if len(parts) == 2:
        if not rules.clubs_enabled or parts[1] not in CLUB_TOKENS:
            return UnrecognizedInput(text)
        club = CLUB_TOKENS[parts[1]]
    return ShotAction(direction=parts[0], club=club)  # type: ignore[arg-type]


def begin_turn(state: GameState) -> int:
    """Roll strength for the pending turn.

    Re-prompts after rejected input keep the roll already made for the turn.
    """
    if state.strength is not None:
        return state.strength
    roll = state.sampler.randint(state.rules.roll_min, state.rules.roll_max)
    under = state.grid.base_terrain_at(state.ball)
    state.roll = roll
    state.strength = effective_strength(roll, under, state.rules)
    state.event_log.append(
        {"type": "TURN_STARTED", "stroke": state.strokes, "roll": roll, "strength": state.strength}
    )
    return state.strength


def _end_turn(state: GameState) -> None:
    state.roll = None
    state.strength = None
    if not state.finished:
        state.phase = "awaiting_shot"


def _redo(state: GameState, landing: Coord, reason: str, before: int) -> TurnResult:
    state.event_log.append({"type": "REDO", "reason": reason, "row": landing.row, "col": landing.col})
    _end_turn(state)
    return TurnResult(ok=True, outcome="redo", events=state.event_log[before:], landing=landing, reason=reason)


def _play_shot(state: GameState, action: ShotAction) -> TurnResult:
    before = len(state.event_log)
    strength = begin_turn(state)
    if action.club == "put":
        strength = 1

    state.phase = "resolving"
    shot = resolve_shot(state.ball, action.direction, strength, state.grid)
    landing = shot.position
    state.event_log.append(
        {
            "type": "SHOT_RESOLVED",
            "direction": action.direction,
            "club": action.club,
            "strength": strength,
            "row": landing.row,
            "col": landing.col,
            "chain": len(shot.path) - 1,
        }
    )

    if shot.off_grid:
        return _redo(state, landing, "off_grid", before)

    terrain = state.grid.terrain_at(landing)
    if terrain == HOLE:
        state.phase = "holed"
        state.event_log.append({"type": "HOLED", "strokes": state.strokes})
        _end_turn(state)
        return TurnResult(ok=True, outcome="holed", events=state.event_log[before:], landing=landing)

    if terrain in HAZARDS:
        assert isinstance(terrain, Ground)
        return _redo(state, landing, terrain.kind, before)

    state.grid.set_terrain(landing, Start(state.strokes))
    state.event_log.append(
        {"type": "STROKE_MARKED", "stroke": state.strokes, "row": landing.row, "col": landing.col}
    )
    state.ball = landing
    state.strokes += 1
    _end_turn(state)
    return TurnResult(ok=True, outcome="advanced", events=state.event_log[before:], landing=landing)


def step(state: GameState, action: Action) -> TurnResult:
    """Apply one player action to the game.

    Mutates `state` in place. Rejected input and actions on a finished game
    leave the ball, strokes and grid untouched.
    """
    if state.finished:
        return TurnResult(ok=False, outcome="rejected", events=[], error="Game already over.")

    state.action_log.append(action)

    if isinstance(action, QuitAction):
        state.phase = "aborted"
        state.event_log.append({"type": "ABORTED", "strokes": state.strokes})
        _end_turn(state)
        return TurnResult(ok=True, outcome="aborted", events=state.event_log[-1:])
    if isinstance(action, ShotAction):
        return _play_shot(state, action)
    if isinstance(action, UnrecognizedInput):
        state.event_log.append({"type": "INPUT_REJECTED", "text": action.text})
        return TurnResult(
            ok=False,
            outcome="rejected",
            events=state.event_log[-1:],
            error=f"Unrecognized input: {action.text!r}",
        )
    return TurnResult(ok=False, outcome="rejected", events=[], error="Unknown action.")


def new_game(
    grid: Grid,
    rules: RuleSet | None = None,
    seed: int | None = None,
    sampler: StrengthSampler | None = None,
) -> GameState:
    own = grid.copy()
    return GameState(
        grid=own,
        rules=rules or RuleSet(),
        sampler=sampler if sampler is not None else random.Random(seed),
        ball=own.start,
        seed=seed,
    )


def replay(
    map_text: str,
    seed: int,
    lines: Iterable[str],
    rules: RuleSet | None = None,
) -> GameState:
    grid, _start = parse_map(map_text)
    state = new_game(grid, rules=rules, seed=seed)
    for line in lines:
        if state.finished:
            break
        begin_turn(state)
        step(state, parse_action(line, state.rules))
    return state
