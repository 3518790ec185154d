# chatlite/utils/paths.py
"""
Per-installation storage helpers.
State files live directly under the data dir; names are fixed constants,
never user input. Writes go through write_json_atomic() so a crash
mid-write never leaves a truncated record behind.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from chatlite.core.constants import DATA_DIR_NAME


def default_data_dir() -> Path:
    """~/.chatlite — overridable through CHATLITE_DATA_DIR (see app_config)."""
    return Path.home() / DATA_DIR_NAME


def state_file(data_dir: Path, name: str) -> Path:
    """
    Return data_dir / name, refusing anything but a bare file name.
    Raises ValueError for names containing a separator or parent reference.
    """
    if not name or Path(name).name != name or name in (".", ".."):
        raise ValueError(f"Invalid state file name: {name!r}")
    return data_dir / name


def read_json(path: Path) -> Any:
    """Parse a JSON file. Raises OSError / ValueError on failure."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(path: Path, data: Any) -> None:
    """
    Serialize data to path via a temp file in the same directory,
    then os.replace() it into place.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, separators=(",", ":"))
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
