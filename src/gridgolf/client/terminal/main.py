from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from gridgolf.engine.grid import Grid
from gridgolf.engine.loader import MapLoadError, load_map
from gridgolf.engine.turn import GameState, TurnResult, new_game
from gridgolf.engine.session import run_session
from gridgolf.paths import get_paths
from gridgolf.services.content import ContentError, ContentService
from gridgolf.services.telemetry import TelemetryService

from .renderer import CLEAR, legend, render_grid

EXIT_HOLED = 0
EXIT_ABORTED = 1
EXIT_LOAD_ERROR = 2


def _read_line(prompt: str) -> str | None:
    print(prompt)
    try:
        return input()
    except EOFError:
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridgolf", description="Turn-based golf on a terrain grid.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--course", default="meadow", help="course id from courses.json")
    source.add_argument("--map", type=Path, help="path to a map file, overrides --course")
    parser.add_argument("--seed", type=int, default=None, help="seed for strength rolls")
    parser.add_argument("--clubs", action="store_true", help="enable drive/put club choice")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--no-telemetry", action="store_true")
    parser.add_argument("--list", action="store_true", help="list courses and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir, paths.maps_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)

    try:
        rules = content.load_rules()
        if args.list:
            for course in content.load_courses().ordered():
                print(f"{course.id:12} {course.name}")
            return 0
        grid: Grid
        if args.map is not None:
            grid, _start = load_map(args.map)
            source = str(args.map)
        else:
            grid = content.load_course_grid(content.load_courses().get(args.course))
            source = args.course
    except (ContentError, MapLoadError) as e:
        print(f"gridgolf: {e}", file=sys.stderr)
        telemetry.log("load_error", {"error": str(e)})
        return EXIT_LOAD_ERROR

    if args.clubs:
        rules = replace(rules, clubs_enabled=True)

    colour = not args.no_color
    state = new_game(grid, rules=rules, seed=args.seed)
    telemetry.log("session_start", {"source": source, "seed": args.seed, "clubs": rules.clubs_enabled})

    def show(s: GameState) -> None:
        if colour:
            print(CLEAR, end="")
        print(render_grid(s.grid, ball=s.ball, colour=colour))
        print(legend(colour=colour))
        print(f"Stroke {s.strokes}")

    def on_result(result: TurnResult) -> None:
        telemetry.log_turn(state, result)

    run_session(state, read_line=_read_line, show=show, say=print, on_result=on_result)
    telemetry.log("session_end", {"phase": state.phase, "strokes": state.strokes})
    if telemetry.error is not None:
        print(f"gridgolf: {telemetry.error}", file=sys.stderr)
    return EXIT_HOLED if state.phase == "holed" else EXIT_ABORTED


if __name__ == "__main__":
    raise SystemExit(main())
