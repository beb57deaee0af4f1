from __future__ import annotations

from dataclasses import replace

from gridgolf.engine.actions import QuitAction, ShotAction, UnrecognizedInput
from gridgolf.engine.loader import parse_map
from gridgolf.engine.turn import (
    GameState,
    RuleSet,
    begin_turn,
    effective_strength,
    new_game,
    parse_action,
    step,
)
from gridgolf.engine.types import FAIRWAY, GRASS, SAND, Coord, Start


class ScriptedRolls:
    """Sampler that hands out a fixed sequence of rolls."""

    def __init__(self, *rolls: int) -> None:
        self.rolls = list(rolls)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.rolls.pop(0)


def _game(map_text: str, *rolls: int, rules: RuleSet | None = None) -> GameState:
    grid, _ = parse_map(map_text)
    return new_game(grid, rules=rules, sampler=ScriptedRolls(*rolls))


def test_new_game_starts_on_tee_with_one_stroke() -> None:
    state = _game(". x .", 3)
    assert state.ball == Coord(0, 1)
    assert state.strokes == 1
    assert state.phase == "awaiting_shot"


def test_slope_into_hole_scenario() -> None:
    state = _game("x > o", 1)
    assert begin_turn(state) == 1
    res = step(state, ShotAction("E"))
    assert res.ok
    assert res.outcome == "holed"
    assert res.landing == Coord(0, 2)
    assert state.phase == "holed"
    assert state.strokes == 1
    assert state.ball == Coord(0, 0)


def test_water_redo_scenario() -> None:
    state = _game("x w", 1)
    begin_turn(state)
    res = step(state, ShotAction("E"))
    assert res.outcome == "redo"
    assert res.reason == "water"
    assert state.ball == Coord(0, 0)
    assert state.strokes == 1
    assert state.phase == "awaiting_shot"
    assert state.grid.markers == {}


def test_tree_redo_leaves_grid_untouched() -> None:
    state = _game("x . t", 2)
    before = state.grid.copy()
    res = step(state, ShotAction("E"))
    assert res.outcome == "redo"
    assert res.reason == "tree"
    assert state.grid == before
    assert state.strokes == 1


def test_off_grid_is_a_redo() -> None:
    state = _game("x . .", 5)
    before = state.grid.copy()
    res = step(state, ShotAction("N"))
    assert res.outcome == "redo"
    assert res.reason == "off_grid"
    assert state.ball == Coord(0, 0)
    assert state.grid == before


def test_advance_marks_landing_cell_only() -> None:
    state = _game("x . s . o", 2, 1)
    before = state.grid.copy()
    res = step(state, ShotAction("E"))
    assert res.outcome == "advanced"
    assert state.ball == Coord(0, 2)
    assert state.strokes == 2
    assert state.grid.terrain_at(Coord(0, 2)) == Start(1)
    assert state.grid.base_terrain_at(Coord(0, 2)) == SAND
    for col in (0, 1, 3, 4):
        c = Coord(0, col)
        assert state.grid.terrain_at(c) == before.terrain_at(c)


def test_strokes_count_only_moves() -> None:
    state = _game("x . . w . o", 1, 2, 3, 1)
    step(state, ShotAction("E"))  # (0,1) grass
    assert state.strokes == 2
    step(state, ShotAction("E"))  # (0,3) water, redo
    assert state.strokes == 2
    step(state, ShotAction("E"))  # (0,4) grass
    assert state.strokes == 3
    res = step(state, ShotAction("E"))
    assert res.outcome == "holed"
    assert state.strokes == 3
    assert state.grid.terrain_at(Coord(0, 1)) == Start(1)
    assert state.grid.terrain_at(Coord(0, 4)) == Start(2)


def test_sand_roll_of_one_clamps_to_one() -> None:
    assert effective_strength(1, SAND, RuleSet()) == 1
    state = _game("x s . . o", 1, 1)
    step(state, ShotAction("E"))
    assert state.ball == Coord(0, 1)
    # the marker sits on sand; the sand penalty still applies
    assert begin_turn(state) == 1
    assert state.roll == 1


def test_fairway_bonus_and_sand_penalty() -> None:
    rules = RuleSet()
    assert effective_strength(3, FAIRWAY, rules) == 4
    assert effective_strength(3, SAND, rules) == 2
    assert effective_strength(3, GRASS, rules) == 3
    assert effective_strength(3, Start(2), rules) == 3


def test_fairway_lie_adds_one() -> None:
    state = _game("x f . . . o", 1, 2)
    step(state, ShotAction("E"))
    assert state.ball == Coord(0, 1)
    assert begin_turn(state) == 3
    res = step(state, ShotAction("E"))
    assert res.landing == Coord(0, 4)


def test_put_forces_strength_one() -> None:
    rules = replace(RuleSet(), clubs_enabled=True)
    state = _game("x . . . . . o", 6, rules=rules)
    res = step(state, ShotAction("E", club="put"))
    assert res.landing == Coord(0, 1)
    assert effective_strength(6, FAIRWAY, rules, club="put") == 1


def test_roll_uses_rule_range_and_is_kept_across_rejected_input() -> None:
    sampler = ScriptedRolls(4)
    grid, _ = parse_map("x . . . . o")
    state = new_game(grid, sampler=sampler)
    assert begin_turn(state) == 4
    res = step(state, UnrecognizedInput("Z"))
    assert not res.ok
    assert res.outcome == "rejected"
    assert begin_turn(state) == 4
    assert sampler.calls == [(1, 6)]
    step(state, ShotAction("E"))
    assert state.ball == Coord(0, 4)


def test_rejected_input_has_no_side_effects() -> None:
    state = _game("x . o", 1)
    begin_turn(state)
    before_grid = state.grid.copy()
    res = step(state, parse_action("north", state.rules))
    assert res.outcome == "rejected"
    assert res.error is not None and "north" in res.error
    assert state.ball == Coord(0, 0)
    assert state.strokes == 1
    assert state.grid == before_grid
    assert state.phase == "awaiting_shot"


def test_quit_aborts_cleanly() -> None:
    state = _game("x . o", 1)
    res = step(state, QuitAction())
    assert res.outcome == "aborted"
    assert state.phase == "aborted"
    assert state.finished
    res2 = step(state, ShotAction("E"))
    assert not res2.ok
    assert res2.error == "Game already over."


def test_no_moves_after_holed() -> None:
    state = _game("x o", 1, 1)
    step(state, ShotAction("E"))
    assert state.phase == "holed"
    ball = state.ball
    res = step(state, ShotAction("W"))
    assert not res.ok
    assert state.ball == ball
    assert state.phase == "holed"


def test_parse_action_simple_rules() -> None:
    rules = RuleSet()
    assert parse_action("NE", rules) == ShotAction("NE")
    assert parse_action("  S \n", rules) == ShotAction("S")
    assert parse_action("", rules) == QuitAction()
    assert parse_action("q", rules) == QuitAction()
    assert parse_action("quit", rules) == QuitAction()
    assert parse_action("ne", rules) == UnrecognizedInput("ne")
    assert parse_action("X", rules) == UnrecognizedInput("X")
    assert parse_action("E put", rules) == UnrecognizedInput("E put")


def test_parse_action_with_clubs() -> None:
    rules = replace(RuleSet(), clubs_enabled=True)
    assert parse_action("E", rules) == ShotAction("E", "drive")
    assert parse_action("E drive", rules) == ShotAction("E", "drive")
    assert parse_action("SW p", rules) == ShotAction("SW", "put")
    assert parse_action("E wedge", rules) == UnrecognizedInput("E wedge")
    assert parse_action("E put now", rules) == UnrecognizedInput("E put now")


def test_events_are_logged() -> None:
    state = _game("x . w o", 1, 1, 2)
    step(state, ShotAction("E"))
    step(state, ShotAction("E"))
    step(state, ShotAction("E"))
    types = [e["type"] for e in state.event_log]
    assert types == [
        "TURN_STARTED",
        "SHOT_RESOLVED",
        "STROKE_MARKED",
        "TURN_STARTED",
        "SHOT_RESOLVED",
        "REDO",
        "TURN_STARTED",
        "SHOT_RESOLVED",
        "HOLED",
    ]


def test_new_game_copies_grid() -> None:
    grid, _ = parse_map("x . o")
    state = new_game(grid, sampler=ScriptedRolls(1))
    step(state, ShotAction("E"))
    assert grid.markers == {}
    assert state.grid.markers == {Coord(0, 1): 1}


def test_rule_sets_are_hashable() -> None:
    rules = RuleSet()
    assert hash(rules) == hash(RuleSet())
    custom = replace(rules, terrain_modifiers=(("sand", -2),), clubs_enabled=True)
    assert len({rules, custom}) == 2
    assert effective_strength(3, SAND, custom) == 1
    assert effective_strength(3, FAIRWAY, custom) == 3
