from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .types import Coord, Start, Terrain


@dataclass
class Grid:
    """Row-major terrain grid with a stroke-marker overlay.

    Stamping `Start(n)` never destroys the loaded terrain: markers are kept
    in `markers` and `terrain_at` composes both layers, so renderers see the
    stroke number while rules can still ask for the ground underneath.
    """

    width: int
    height: int
    start: Coord
    cells: list[Terrain]
    markers: dict[Coord, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width * self.height != len(self.cells):
            raise ValueError(
                f"Grid of {self.width}x{self.height} needs {self.width * self.height} cells, got {len(self.cells)}."
            )

    def in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord.row < self.height and 0 <= coord.col < self.width

    def index(self, coord: Coord) -> int:
        if not self.in_bounds(coord):
            raise IndexError(f"{coord} is outside a {self.width}x{self.height} grid")
        return coord.row * self.width + coord.col

    def base_terrain_at(self, coord: Coord) -> Terrain:
        return self.cells[self.index(coord)]

    def terrain_at(self, coord: Coord) -> Terrain:
        idx = self.index(coord)
        stroke = self.markers.get(coord)
        if stroke is not None:
            return Start(stroke)
        return self.cells[idx]

    def set_terrain(self, coord: Coord, terrain: Terrain) -> None:
        idx = self.index(coord)
        if isinstance(terrain, Start):
            self.markers[coord] = terrain.stroke
            return
        self.markers.pop(coord, None)
        self.cells[idx] = terrain

    def rows(self) -> Iterator[list[tuple[Coord, Terrain]]]:
        for r in range(self.height):
            yield [(Coord(r, c), self.terrain_at(Coord(r, c))) for c in range(self.width)]

    def copy(self) -> "Grid":
        return Grid(
            width=self.width,
            height=self.height,
            start=self.start,
            cells=list(self.cells),
            markers=dict(self.markers),
        )
