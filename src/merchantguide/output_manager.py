# src/merchantguide/output_manager.py
from __future__ import annotations

import os
import sys

from colorama import Fore, Style

from merchantguide.fmt import strip_ansi
from merchantguide.workspace import workspace_dir


def resolve_output_path(path: str, workspace_root: str | os.PathLike) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to workspace_root
    """
    if not path:
        raise ValueError("Output path is empty")

    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(os.fspath(workspace_root), path))


class OutputManager:
    """
    Handles all printing/output, to screen and/or file.

    Usage:
        om = OutputManager(output_file="reports/market.txt")
        om.write("glob prok Silver is 68 Credits")  # prints and appends
        om.close()
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False):
        """
        Parameters:
            output_file:
                None or ""       => screen only
                path/to/file.txt => append all runs to this file
            quiet: if True, no output to screen (only to file)
        """
        self.quiet = quiet
        self.output_file = output_file or ""
        self._buffer: list[str] = []

        self._mode: str = "none"     # "none" | "single"
        self._single_path: str | None = None

        if self.output_file:
            path = resolve_output_path(self.output_file, workspace_dir())
            if os.path.isdir(path):
                raise ValueError(f"expected a file name, got a directory: {self.output_file!r}")
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._mode = "single"
            self._single_path = path

    def _append(self, text: str) -> None:
        try:
            with open(self._single_path, "a", encoding="utf-8") as fh:
                fh.write(strip_ansi(text))
        except OSError as e:
            # Report once, then keep going screen-only
            print(f"{Fore.YELLOW}[WARNING]{Style.RESET_ALL} Could not write output file: "
                  f"{self._single_path} ({type(e).__name__}: {e})", file=sys.stderr)
            self._mode = "none"

    def write(self, *args, sep: str = " ", end: str = "\n") -> None:
        """Write to screen and file (if configured)."""
        text = sep.join(str(a) for a in args) + end
        self._buffer.append(text)

        if not self.quiet:
            print(text, end="")

        if self._mode == "single" and self._single_path:
            self._append(text)

    def getvalue(self) -> str:
        """Returns everything written (with color codes)."""
        return "".join(self._buffer)

    def close(self) -> None:
        """Add one empty line between runs in the output file."""
        if self._mode == "single" and self._single_path and self._buffer:
            self._append("\n")
        self._buffer.clear()

    def __enter__(self) -> OutputManager:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
