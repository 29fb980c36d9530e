# src/merchantguide/utility.py
from __future__ import annotations


class UserInputError(Exception):
    pass


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    """{'A': {'B': 1}} -> {'A.B': 1}"""
    out: dict[str, object] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out


def validate_output_setting(output_file: str | None) -> str | None:
    """
    Normalize --output. None/"" means 'use profile OUTPUT.OUTPUT_FILE'.
    Directories are rejected: reports go to a single file.
    """
    if output_file is None:
        return None
    s = output_file.strip()
    if not s:
        return None
    if s.endswith(("/", "\\")) or s in {".", ".."}:
        raise ValueError(f"expected a file name, got a directory: {output_file!r}")
    return s
