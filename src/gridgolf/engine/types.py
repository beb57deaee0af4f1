from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Direction = Literal["N", "S", "E", "W", "NE", "NW", "SE", "SW"]
Club = Literal["drive", "put"]
GroundKind = Literal["tree", "sand", "hole", "fairway", "water", "grass"]


@dataclass(frozen=True)
class Coord:
    row: int
    col: int

    def __add__(self, other: "Coord") -> "Coord":
        return Coord(self.row + other.row, self.col + other.col)

    def scaled(self, factor: int) -> "Coord":
        return Coord(self.row * factor, self.col * factor)


DIRECTION_DELTAS: dict[Direction, Coord] = {
    "N": Coord(-1, 0),
    "S": Coord(1, 0),
    "E": Coord(0, 1),
    "W": Coord(0, -1),
    "NE": Coord(-1, 1),
    "NW": Coord(-1, -1),
    "SE": Coord(1, 1),
    "SW": Coord(1, -1),
}


@dataclass(frozen=True)
class Slope:
    direction: Direction


@dataclass(frozen=True)
class Ground:
    kind: GroundKind


@dataclass(frozen=True)
class Start:
    """A cell the ball has rested on after `stroke` strokes (0 is the tee)."""

    stroke: int


Terrain = Slope | Ground | Start

TREE = Ground("tree")
SAND = Ground("sand")
HOLE = Ground("hole")
FAIRWAY = Ground("fairway")
WATER = Ground("water")
GRASS = Ground("grass")

# Landing on one of these replays the turn.
HAZARDS: frozenset[Terrain] = frozenset({WATER, TREE})

# Display glyph for each slope direction, shared by the terminal and pygame clients.
SLOPE_GLYPHS: dict[Direction, str] = {
    "E": ">",
    "W": "<",
    "N": "^",
    "S": "v",
    "NE": "/",
    "SW": "/",
    "NW": "\\",
    "SE": "\\",
}
