"""Read and atomically rewrite the flat JSON files that hold persisted state."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    """Return the parsed document, or None if the file does not exist."""
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def dump_json(data: Any) -> str:
    """Deterministic, human-readable serialization (sorted keys, 2-space indent)."""
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_json_atomic(path: Path, data: Any) -> None:
    """
    Replace path with the serialized document.

    Writes a sibling temp file, fsyncs it and renames it over the target, so a
    crash mid-write leaves either the old or the new file, never a truncated one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    temp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(dump_json(data))
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(temp_path, path)
    finally:
        temp_path.unlink(missing_ok=True)
