from __future__ import annotations

from dataclasses import dataclass

from .types import Club, Direction


@dataclass(frozen=True)
class ShotAction:
    direction: Direction
    club: Club = "drive"


@dataclass(frozen=True)
class QuitAction:
    pass


@dataclass(frozen=True)
class UnrecognizedInput:
    text: str


Action = ShotAction | QuitAction | UnrecognizedInput
