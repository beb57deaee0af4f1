from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from gridgolf.engine.turn import GameState, TurnResult


@dataclass
class TelemetryService:
    path: Path
    enabled: bool = True
    error: str | None = None

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if not self.enabled:
            return
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(rec, ensure_ascii=False) + "\n")
        except OSError as e:
            # unwritable trail: stop logging, keep playing
            self.enabled = False
            self.error = f"Telemetry disabled, cannot write {self.path}: {e}"

    def log_turn(self, state: GameState, result: TurnResult) -> None:
        payload: dict[str, object] = {
            "outcome": result.outcome,
            "strokes": state.strokes,
            "ball": [state.ball.row, state.ball.col],
        }
        if result.landing is not None:
            payload["landing"] = [result.landing.row, result.landing.col]
        if result.reason is not None:
            payload["reason"] = result.reason
        if result.error is not None:
            payload["error"] = result.error
        self.log("turn", payload)
