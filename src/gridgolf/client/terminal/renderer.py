from __future__ import annotations

from gridgolf.engine.grid import Grid
from gridgolf.engine.types import SLOPE_GLYPHS, Coord, Slope, Start, Terrain


class Colour:
    RESET = "\033[0m"
    GREEN = "\033[32m"
    LIGHT_GREEN = "\033[92m"
    LIGHT_YELLOW = "\033[93m"
    LIGHT_BLUE = "\033[94m"
    RED = "\033[31m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


CLEAR = "\033[2J\033[H"

GROUND_STYLES: dict[str, tuple[str, str]] = {
    "fairway": ("@", Colour.LIGHT_GREEN),
    "tree": ("Y", Colour.LIGHT_GREEN + Colour.BOLD),
    "hole": ("O", Colour.RED),
    "sand": ("@", Colour.LIGHT_YELLOW),
    "water": ("w", Colour.LIGHT_BLUE),
    "grass": ("@", Colour.GREEN),
}


def glyph(terrain: Terrain) -> tuple[str, str]:
    """Return (character, colour) for one cell."""
    if isinstance(terrain, Start):
        # one column per cell; strokes past 9 show their last digit
        return str(terrain.stroke)[-1], Colour.WHITE
    if isinstance(terrain, Slope):
        return SLOPE_GLYPHS[terrain.direction], Colour.LIGHT_GREEN
    return GROUND_STYLES.get(terrain.kind, ("@", Colour.GREEN))


def render_grid(grid: Grid, ball: Coord | None = None, colour: bool = True) -> str:
    lines: list[str] = []
    for row in grid.rows():
        out: list[str] = []
        for coord, terrain in row:
            ch, style = glyph(terrain)
            if colour and coord == ball:
                style = style + Colour.BOLD
            out.append(f"{style}{ch}{Colour.RESET}" if colour else ch)
        lines.append("".join(out))
    return "\n".join(lines)


def legend(colour: bool = True) -> str:
    items = [("fairway", "fairway"), ("sand", "sand"), ("tree", "tree"), ("water", "water"), ("hole", "hole")]
    parts = []
    for kind, label in items:
        ch, style = GROUND_STYLES[kind]
        parts.append(f"{style}{ch}{Colour.RESET} {label}" if colour else f"{ch} {label}")
    return "  ".join(parts)

