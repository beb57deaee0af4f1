from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from gridgolf.paths import get_paths
from gridgolf.services.content import ContentService
from gridgolf.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="gridgolf-gui")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--cell-size", type=int, default=32)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--clubs", action="store_true")
    parser.add_argument("--no-telemetry", action="store_true")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("gridgolf")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(cell_size=args.cell_size)
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir, maps_dir=paths.maps_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        seed=args.seed,
        clubs=args.clubs,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
