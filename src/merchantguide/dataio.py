# src/merchantguide/dataio.py
from __future__ import annotations

from collections.abc import Iterable
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import TextIO

from merchantguide.utility import UserInputError
from merchantguide.workspace import workspace_dir


def sample_path(rel: str) -> Path:
    """
    Resolve a notes file with override semantics:

      1) <Workspace>/samples/<rel>  (if present)
      2) Packaged resource: merchantguide/samples/<rel>
    """
    rel = rel.lstrip("/\\")
    p = workspace_dir() / "samples" / rel
    if p.exists():
        return p

    ref = pkg_files("merchantguide") / "samples" / rel
    # materialize to a real path (needed for zip resources)
    with as_file(ref) as real:
        return Path(real)


def iter_notes(lines: Iterable[str]) -> list[str]:
    """
    Keep one note per line, without the line ending.
    Blank lines and lines starting with '#' are skipped.
    """
    notes: list[str] = []
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        notes.append(line)
    return notes


def read_notes_stream(stream: TextIO) -> list[str]:
    return iter_notes(stream)


def read_notes(path: str | Path) -> list[str]:
    """
    Read a notes file. A bare name that does not exist in the current
    directory is looked up in the workspace (or packaged) samples folder.
    """
    p = Path(path).expanduser()
    if not p.exists() and not p.is_absolute() and len(p.parts) == 1:
        p = sample_path(p.name)
    try:
        with p.open("r", encoding="utf-8") as f:
            return read_notes_stream(f)
    except FileNotFoundError:
        raise UserInputError(f"notes file not found: {path}") from None
    except IsADirectoryError:
        raise UserInputError(f"expected a notes file, got a directory: {path}") from None
    except UnicodeDecodeError as e:
        raise UserInputError(f"{path} is not a UTF-8 text file ({e.reason}).") from None
