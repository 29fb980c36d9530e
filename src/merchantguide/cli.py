# src/merchantguide/cli.py

"""
Merchant's Guide to the Galaxy

Description:
    Reads notes about intergalactic numerals and commodity prices, learns
    the numeral words and unit prices they declare and answers the queries
    among them.

usage: see merchantguide -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from merchantguide import __version__ as _ver
from merchantguide import config as CONFIG
from merchantguide.dataio import read_notes, read_notes_stream
from merchantguide.display import (
    print_debug_table,
    print_prices,
    print_profiles_with_descriptions,
    print_report,
    print_table,
    print_user_error,
    show_help,
)
from merchantguide.output_manager import OutputManager
from merchantguide.processor import NoteProcessor
from merchantguide.runtime import APPLY, CFG
from merchantguide.runtime import current as _rt_current
from merchantguide.utility import (
    UserInputError,
    flatten_dotted,
    typename,
    validate_output_setting,
)
from merchantguide.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

COMMANDS = ("init", "where", "profiles")


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    try:
        faulthandler.enable()
    except (AttributeError, ValueError, OSError):
        # stderr without a real file descriptor
        pass

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create workspace folders and copy packaged profiles and sample notes if missing.

      init overwrite
          Copy all packaged profiles and sample notes, replacing your edits.

      profiles
          List the profiles in the workspace.

      where
          Show the workspace and package paths.

    Without files, notes are read from stdin when it is redirected,
    otherwise an interactive session starts.
    """)

    p = argparse.ArgumentParser(
        prog="merchantguide",
        description="Merchant's Guide to the Galaxy - intergalactic numerals & commodity prices",
        usage=(
            "merchantguide [files ...] [--profile NAME] [--output OUTPUT] [--quiet] [--debug]\n"
            "       merchantguide init [overwrite] | where | profiles\n"
            "       merchantguide -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="files",
                   help="notes files, one note per line (bare names are also looked up in <workspace>/samples)")
    p.add_argument("--profile", default=None, help="Settings profile to use (default: 'default')")
    p.add_argument("--output", default=None, help="Append answers to a file (also prints unless --quiet)")
    p.add_argument("--quiet", action="store_true", help="Do not print to the screen")
    p.add_argument("--debug", action="store_true", help="Show per-note trace info on stderr")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = ("--debug" in (argv if argv is not None else sys.argv)) or _rt_current().debug
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _run_command(items: list[str]) -> int:
    cmd = items[0]
    if cmd == "init":
        if len(items) == 2 and items[1] == "overwrite":
            ws, copied = seed_workspace(overwrite=True)
            print(f"Workspace ready at: {ws} (overwrote existing files)")
        else:
            ws, _, copied = ensure_workspace_seeded()
            print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}, samples: {copied.get('samples', 0)}")
        return 0
    if cmd == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('merchantguide')}")
        return 0
    print_profiles_with_descriptions()
    return 0


def _load_profile(name: str | None, debug: bool) -> str:
    """Load and install a profile; returns its resolved name."""
    selected = CONFIG.load_settings(name)
    APPLY(selected)

    if debug:
        print(f"[debug] active profile: {selected.name}", file=sys.stderr)
        if selected._source:
            print(f"[debug] profile file: {selected._source}", file=sys.stderr)
        print("[debug] runtime settings (flattened):", file=sys.stderr)
        flat = flatten_dotted(_rt_current().settings)
        for k in sorted(flat.keys(), key=str.lower):
            v = CFG(k)
            print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)
        print(file=sys.stderr)
    return selected.name


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if args.items and args.items[0] in COMMANDS:
        return _run_command(args.items)

    # Ensure a first-run workspace seed silently
    ensure_workspace_seeded()

    profile_name = _load_profile(args.profile, args.debug)

    # --- output routing (CLI --output overrides profile OUTPUT_FILE) ---
    try:
        cli_target = validate_output_setting(args.output)  # None => use profile OUTPUT_FILE
    except ValueError as e:
        raise UserInputError(f"--output: {e}") from None

    def make_output_manager() -> OutputManager:
        # read OUTPUT_FILE from runtime each time so profile switches take effect
        target = cli_target if cli_target is not None else CFG("OUTPUT.OUTPUT_FILE", None)
        try:
            return OutputManager(output_file=target, quiet=args.quiet)
        except ValueError as e:
            raise UserInputError(str(e)) from None

    processor = NoteProcessor()

    # --- batch: files or redirected stdin ---
    if args.items or not sys.stdin.isatty():
        if args.items:
            lines: list[str] = []
            for path in args.items:
                lines.extend(read_notes(path))
        else:
            lines = read_notes_stream(sys.stdin)

        report = processor.process(lines)
        om = make_output_manager()
        try:
            print_report(report, om, processor.translator, processor.ledger)
        finally:
            om.close()
        if rt.debug:
            print_debug_table(processor.translator, processor.ledger)
        return 0

    # --- REPL ---
    return _repl(processor, profile_name, make_output_manager)


def _repl(processor: NoteProcessor, profile_name: str, make_output_manager) -> int:
    print(f"{Fore.YELLOW}{Style.BRIGHT}Merchant's Guide to the Galaxy v{_ver}{Style.RESET_ALL}")

    current_profile = profile_name
    while True:
        try:
            prompt = f"\nProfile: {current_profile} - Enter a note or command (h=Help, q=Quit): "
            user_input = input(prompt).strip()

            low = user_input.lower()
            if not user_input:
                continue
            if low in {"q", "quit"}:
                break

            if low in {"h", "help"}:
                show_help()
                continue

            if low in {"p", "profiles"}:
                print_profiles_with_descriptions()
                continue

            if low in {"table", "prices"}:
                om = make_output_manager()
                try:
                    if low == "table":
                        print_table(processor.translator, om)
                    else:
                        print_prices(processor.ledger, om)
                finally:
                    om.close()
                continue

            if low == "reset":
                processor.reset()
                print("Forgot all numerals and prices.")
                continue

            if low.startswith("debug"):
                parts = low.split()
                rt = _rt_current()
                if len(parts) == 1 or parts[1] == "status":
                    print(f"Debug is currently {'ON' if rt.debug else 'OFF'}.")
                elif parts[1] == "on":
                    rt.debug = True
                    print("Debug mode enabled for this session.")
                elif parts[1] == "off":
                    rt.debug = False
                    print("Debug mode disabled for this session.")
                else:
                    print("Usage: DEBUG [on|off|status]")
                continue

            if " " not in user_input and CONFIG.has_profile(user_input):
                current_profile = _load_profile(user_input, _rt_current().debug)
                print(f"Applied profile: {current_profile}")
                continue

            report = processor.process_line(user_input)
            om = make_output_manager()
            try:
                print_report(report, om)
            finally:
                om.close()
            if report.learned and not report.answers:
                pairs = ", ".join(f"{w} = {s}" for w, s in report.learned)
                print(f"{Style.DIM}learned {pairs}{Style.RESET_ALL}")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        except UserInputError as e:
            print_user_error(str(e))
            continue
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
