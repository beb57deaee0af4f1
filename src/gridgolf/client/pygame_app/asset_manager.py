from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]

from gridgolf.engine.types import SLOPE_GLYPHS, Ground, Slope, Start, Terrain

Color = tuple[int, int, int]

# Same palette as the terminal renderer.
GROUND_COLORS: dict[str, Color] = {
    "fairway": (120, 230, 120),
    "tree": (0, 150, 0),
    "hole": (220, 40, 40),
    "sand": (235, 220, 130),
    "water": (90, 150, 240),
    "grass": (40, 120, 40),
}
SLOPE_COLOR: Color = (150, 210, 110)
MARKER_COLOR: Color = (255, 255, 255)


def tile_label(terrain: Terrain) -> tuple[str, Color]:
    if isinstance(terrain, Start):
        return str(terrain.stroke), (20, 20, 20)
    if isinstance(terrain, Slope):
        return SLOPE_GLYPHS[terrain.direction], (20, 60, 20)
    if isinstance(terrain, Ground) and terrain.kind == "tree":
        return "Y", (230, 255, 230)
    if isinstance(terrain, Ground) and terrain.kind == "hole":
        return "O", (255, 255, 255)
    return "", (0, 0, 0)


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    cell: pygame.font.Font


class AssetManager:
    def __init__(self, cell_size: int = 32) -> None:
        self.cell_size = cell_size
        self._cache: dict[Terrain, pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 34),
            cell=pygame.font.SysFont(None, int(cell_size * 0.8)),
        )

    def tile(self, terrain: Terrain) -> pygame.Surface:
        if terrain in self._cache:
            return self._cache[terrain]

        size = self.cell_size
        surf = pygame.Surface((size, size))
        if isinstance(terrain, Start):
            surf.fill(MARKER_COLOR)
        elif isinstance(terrain, Slope):
            surf.fill(SLOPE_COLOR)
        else:
            surf.fill(GROUND_COLORS.get(terrain.kind, GROUND_COLORS["grass"]))
        pygame.draw.rect(surf, (0, 0, 0), surf.get_rect(), width=1)
        text, color = tile_label(terrain)
        if text:
            img = self.fonts.cell.render(text, True, color)
            surf.blit(img, img.get_rect(center=(size // 2, size // 2)).topleft)
        self._cache[terrain] = surf
        return surf
