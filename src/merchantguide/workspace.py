# src/merchantguide/workspace.py
from __future__ import annotations

import os
import shutil
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path

SUBDIRS = ("profiles", "samples")


def workspace_dir() -> Path:
    env = os.environ.get("MERCHANTGUIDE_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / "Documents" / "MerchantGuide").resolve()


def _should_copy_file(p: Path, sub: str) -> bool:
    if any(part == "__pycache__" for part in p.parts):
        return False
    if p.name.startswith(".") or p.name.endswith("~"):
        return False
    if sub == "profiles":
        return p.suffix.lower() == ".toml"
    return p.suffix.lower() == ".txt"


def _copy_tree(src: Path, dst: Path, *, overwrite: bool, sub: str) -> int:
    count = 0
    if not src.exists():
        return 0
    for p in src.rglob("*"):
        if not p.is_file() or not _should_copy_file(p, sub):
            continue
        target = dst / p.relative_to(src)
        target.parent.mkdir(parents=True, exist_ok=True)
        if overwrite or not target.exists():
            shutil.copy2(p, target)
            count += 1
    return count


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, dict[str, int]]:
    """
    Copy packaged profiles and sample notes into the user's workspace.

    overwrite=False -> copy-if-missing
    overwrite=True  -> force replace

    Returns: (workspace_path, {section: files_copied})
    """
    root = workspace_dir()
    copied = {k: 0 for k in SUBDIRS}
    for sub in SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)
        ref = pkg_files("merchantguide") / sub
        try:
            with as_file(ref) as real:
                copied[sub] = _copy_tree(Path(real), root / sub, overwrite=overwrite, sub=sub)
        except (FileNotFoundError, NotADirectoryError):
            copied[sub] = 0
    return root, copied


def ensure_workspace_seeded() -> tuple[Path, bool, dict[str, int]]:
    root, copied = seed_workspace(overwrite=False)
    return root, any(copied.values()), copied
