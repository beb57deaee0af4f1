from __future__ import annotations

from dataclasses import dataclass

from .grid import Grid
from .types import DIRECTION_DELTAS, Coord, Direction, Slope


@dataclass(frozen=True)
class ChainResult:
    position: Coord
    path: tuple[Coord, ...]
    off_grid: bool = False
    cycle: bool = False


@dataclass(frozen=True)
class ShotResult:
    position: Coord
    raw_landing: Coord
    path: tuple[Coord, ...]
    off_grid: bool = False


def resolve_flight(origin: Coord, direction: Direction, strength: int) -> Coord:
    return origin + DIRECTION_DELTAS[direction].scaled(strength)


def resolve_terrain_chain(position: Coord, grid: Grid) -> ChainResult:
    """Follow slopes one step at a time until the ball settles.

    Stops on the first non-slope cell, or on the current slope when the next
    step would revisit a cell seen earlier in the same chain. Leaving the grid
    at any point ends the chain with `off_grid` set.
    """
    path = [position]
    seen = {position}
    while True:
        if not grid.in_bounds(position):
            return ChainResult(position=position, path=tuple(path), off_grid=True)
        terrain = grid.terrain_at(position)
        if not isinstance(terrain, Slope):
            return ChainResult(position=position, path=tuple(path))
        nxt = position + DIRECTION_DELTAS[terrain.direction]
        if nxt in seen:
            return ChainResult(position=position, path=tuple(path), cycle=True)
        seen.add(nxt)
        path.append(nxt)
        position = nxt


def resolve_shot(origin: Coord, direction: Direction, strength: int, grid: Grid) -> ShotResult:
    raw = resolve_flight(origin, direction, strength)
    chain = resolve_terrain_chain(raw, grid)
    return ShotResult(position=chain.position, raw_landing=raw, path=chain.path, off_grid=chain.off_grid)
