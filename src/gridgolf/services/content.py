from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from gridgolf.engine.grid import Grid
from gridgolf.engine.loader import MapLoadError, load_map
from gridgolf.engine.turn import RuleSet
from gridgolf.engine.types import GroundKind


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ContentError(f"Cannot read content file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


@dataclass(frozen=True)
class Course:
    id: str
    name: str
    map_path: Path


@dataclass(frozen=True)
class CourseCatalog:
    courses: dict[str, Course]

    def get(self, course_id: str) -> Course:
        try:
            return self.courses[course_id]
        except KeyError as e:
            raise ContentError(f"Unknown course: {course_id}") from e

    def ordered(self) -> list[Course]:
        return sorted(self.courses.values(), key=lambda c: c.id)


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path, maps_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir
        self._maps_dir = maps_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        schema = _load_json(self._schema_dir / f"{name}.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_rules(self) -> RuleSet:
        raw = self._load_validated("rules")
        modifiers: dict[GroundKind, int] = {}
        raw_mods = raw.get("terrain_modifiers", {})
        if isinstance(raw_mods, dict):
            for kind, delta in raw_mods.items():
                if isinstance(kind, str) and isinstance(delta, int):
                    modifiers[kind] = delta  # type: ignore[index]
        quit_raw = raw.get("quit_tokens", [])
        quit_tokens = tuple(t for t in quit_raw if isinstance(t, str)) if isinstance(quit_raw, list) else ()
        rules = RuleSet(
            roll_min=_require_int(raw, "roll_min"),
            roll_max=_require_int(raw, "roll_max"),
            min_strength=_require_int(raw, "min_strength"),
            terrain_modifiers=tuple(sorted(modifiers.items())),
            clubs_enabled=bool(raw.get("clubs_enabled", False)),
            quit_tokens=quit_tokens,
        )
        if rules.roll_min > rules.roll_max:
            raise ContentError("rules.json: roll_min must not exceed roll_max")
        return rules

    def load_courses(self) -> CourseCatalog:
        raw = self._load_validated("courses")
        raw_courses = raw.get("courses")
        if not isinstance(raw_courses, list):
            raise ContentError("courses.json.courses must be a list")
        courses: dict[str, Course] = {}
        for item in raw_courses:
            if not isinstance(item, dict):
                continue
            course = Course(
                id=_require_str(item, "id"),
                name=_require_str(item, "name"),
                map_path=self._maps_dir / _require_str(item, "map"),
            )
            if course.id in courses:
                raise ContentError(f"Duplicate course id: {course.id}")
            courses[course.id] = course
        return CourseCatalog(courses=courses)

    def load_course_grid(self, course: Course) -> Grid:
        try:
            grid, _start = load_map(course.map_path)
        except MapLoadError as e:
            raise ContentError(f"Course {course.id}: {e}") from e
        return grid

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
        catalog = self.load_courses()
        for course in catalog.ordered():
            _ = self.load_course_grid(course)
