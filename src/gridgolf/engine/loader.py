from __future__ import annotations

from pathlib import Path

from .grid import Grid
from .types import FAIRWAY, GRASS, HOLE, SAND, TREE, WATER, Coord, Slope, Start, Terrain

START_SYMBOL = "x"

SYMBOLS: dict[str, Terrain] = {
    ">": Slope("E"),
    "<": Slope("W"),
    "^": Slope("N"),
    "v": Slope("S"),
    "o": HOLE,
    "t": TREE,
    "s": SAND,
    "w": WATER,
    "f": FAIRWAY,
    START_SYMBOL: Start(0),
}


class MapLoadError(ValueError):
    pass


def terrain_for_symbol(symbol: str) -> Terrain:
    return SYMBOLS.get(symbol, GRASS)


def parse_map(text: str) -> tuple[Grid, Coord]:
    """Build a grid from space-separated symbol rows.

    Blank lines are ignored. Every row must have the same number of cells and
    exactly one tee (`x`) must be present.
    """
    cells: list[Terrain] = []
    start: Coord | None = None
    width: int | None = None
    height = 0

    for line_no, line in enumerate(text.splitlines(), start=1):
        symbols = line.split()
        if not symbols:
            continue
        if width is None:
            width = len(symbols)
        elif len(symbols) != width:
            raise MapLoadError(f"Line {line_no}: expected {width} cells, got {len(symbols)}.")

        for col, symbol in enumerate(symbols):
            if symbol == START_SYMBOL:
                if start is not None:
                    raise MapLoadError(f"Line {line_no}: second tee found, first at {start}.")
                start = Coord(height, col)
            cells.append(terrain_for_symbol(symbol))
        height += 1

    if width is None:
        raise MapLoadError("Map has no rows.")
    if start is None:
        raise MapLoadError(f"Map has no tee ('{START_SYMBOL}').")

    return Grid(width=width, height=height, start=start, cells=cells), start


def load_map(path: Path) -> tuple[Grid, Coord]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MapLoadError(f"Cannot read map file {path}: {e}") from e
    return parse_map(text)
