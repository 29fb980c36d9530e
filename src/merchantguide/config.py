# src/merchantguide/config.py
from __future__ import annotations

from dataclasses import dataclass
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

try:
    import tomllib as toml
except Exception:
    import tomli as toml  # type: ignore

from merchantguide.utility import UserInputError
from merchantguide.workspace import workspace_dir

DEFAULTS: dict[str, dict[str, Any]] = {
    "BEHAVIOUR": {"DEBUG": False},
    "LEDGER": {"OVERWRITE_PRICES": True},
    "LEARNING": {"FROM_COMPOSITES": True},
    "OUTPUT": {"OUTPUT_FILE": "", "PRICE_DECIMALS": 2},
    "DISPLAY": {"SHOW_UNKNOWN": True, "SHOW_REJECTED": True, "SHOW_TABLE": False},
    "MESSAGES": {"UNKNOWN_QUERY": "I have no idea what you are talking about"},
}


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section), merged over
    DEFAULTS. .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def _profile_path(name: str) -> Path:
    return _profiles_dir() / f"{name}.toml"


def _packaged_profile_path(name: str) -> Path | None:
    ref = pkg_files("merchantguide") / "profiles" / f"{name}.toml"
    with as_file(ref) as real:
        p = Path(real)
    return p if p.exists() else None


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [_PROFILE_] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _merge_defaults(data: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {sec: dict(vals) for sec, vals in DEFAULTS.items()}
    for sec, vals in data.items():
        if isinstance(vals, dict) and isinstance(merged.get(sec), dict):
            merged[sec].update(vals)
        else:
            merged[sec] = vals
    return merged


# --- Public API ------------------------------------------------------------

def find_profile(name: str) -> Path | None:
    """Workspace profile first, then the packaged one."""
    p = _profile_path(name)
    if p.exists():
        return p
    return _packaged_profile_path(name)


def has_profile(name: str) -> bool:
    return find_profile(name) is not None


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for all workspace profiles.
    Profiles lacking [_PROFILE_] get "(no description)".
    """
    pdir = _profiles_dir()
    if not pdir.exists():
        return []
    items: list[tuple[str, str]] = []
    for p in pdir.glob("*.toml"):
        try:
            _, nm, desc = _split_profile_data(_load_toml(p), p.stem)
        except UserInputError:
            nm, desc = p.stem, "(unreadable)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [_PROFILE_]
    metadata and merge it over DEFAULTS.
    """
    if not name:
        name = "default"

    path = find_profile(name)
    if path is None:
        raise UserInputError(f"profile '{name}' not found in {_profiles_dir()}")

    data, resolved_name, description = _split_profile_data(_load_toml(path), path.stem)

    decimals = data.get("OUTPUT", {}).get("PRICE_DECIMALS")
    if decimals is not None and (isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0):
        raise UserInputError(f"{path.name}: OUTPUT.PRICE_DECIMALS must be a non-negative integer.")

    return Settings(
        data=_merge_defaults(data),
        name=resolved_name,
        description=description,
        _source=path,
    )
