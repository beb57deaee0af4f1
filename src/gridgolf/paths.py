from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    repo_root: Path
    data_dir: Path
    schema_dir: Path
    maps_dir: Path
    userdata_dir: Path


def get_paths() -> Paths:
    # src/gridgolf/paths.py -> parents: [gridgolf, src, repo_root]
    repo_root = Path(__file__).resolve().parents[2]
    data_dir = Path(__file__).resolve().parent / "data"
    schema_dir = data_dir / "schemas"
    maps_dir = data_dir / "maps"
    # per-user and writable even when the package is installed read-only
    userdata_dir = Path(os.environ.get("GRIDGOLF_HOME") or Path.home() / ".gridgolf")
    return Paths(
        repo_root=repo_root,
        data_dir=data_dir,
        schema_dir=schema_dir,
        maps_dir=maps_dir,
        userdata_dir=userdata_dir,
    )
