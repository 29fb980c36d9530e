from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("merchantguide")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .parser import classify_note, parse_notes
from .processor import NoteProcessor, ProcessReport
from .roman import TranslationError, arabic_to_roman, roman_to_arabic
from .runtime import APPLY, CFG
from .translator import Translator
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "NoteProcessor",
    "ProcessReport",
    "TranslationError",
    "Translator",
    "__version__",
    "arabic_to_roman",
    "classify_note",
    "has_profile",
    "load_settings",
    "parse_notes",
    "roman_to_arabic",
    "workspace_dir"
]
