# src/merchantguide/display.py
from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from colorama import Fore, Style

from merchantguide import __version__
from merchantguide.config import list_profiles_with_descriptions
from merchantguide.fmt import format_unit_price, label_dots
from merchantguide.roman import SYMBOLS
from merchantguide.runtime import CFG

if TYPE_CHECKING:
    from merchantguide.ledger import Ledger
    from merchantguide.output_manager import OutputManager
    from merchantguide.processor import ProcessReport
    from merchantguide.translator import Translator


def _as_bool(v, default=False):
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in {"1", "true", "yes", "on"}:
            return True
        if s in {"0", "false", "no", "off"}:
            return False
    return default


def print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if not msg.startswith("Error:"):
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def print_answers(report: ProcessReport, om: OutputManager) -> None:
    for ans in report.answers:
        if ans.ok:
            om.write(ans.text)
        else:
            om.write(f"{Fore.YELLOW}{ans.text}{Style.RESET_ALL}")


def print_table(translator: Translator, om: OutputManager) -> None:
    om.write(f"{Fore.CYAN + Style.BRIGHT}Intergalactic numerals:{Style.RESET_ALL}")
    for sym, word in translator.bindings().items():
        shown = word if word is not None else f"{Style.DIM}(unknown){Style.RESET_ALL}"
        om.write(f"  {sym} = {shown}")
    unbound = translator.unbound_tokens()
    if unbound:
        om.write(f"  {Style.DIM}words without a value: {', '.join(unbound)}{Style.RESET_ALL}")


def print_debug_table(translator: Translator, ledger: Ledger) -> None:
    """Final numeral table and price book as [debug] lines on STDERR."""
    print(f"[debug] numerals known: {translator.pair_count}/{len(SYMBOLS)}, "
          f"commodities: {len(ledger)}", file=sys.stderr)
    for sym, word in translator.bindings().items():
        print(f"[debug] numeral    {sym} = {word if word is not None else '-'}", file=sys.stderr)
    for name, pair in ledger.items():
        print(f"[debug] price      {name}: {pair.credits} Credits / {pair.intergal}", file=sys.stderr)


def print_prices(ledger: Ledger, om: OutputManager) -> None:
    om.write(f"{Fore.CYAN + Style.BRIGHT}Unit prices:{Style.RESET_ALL}")
    if not len(ledger):
        om.write(f"  {Style.DIM}(no commodities recorded){Style.RESET_ALL}")
        return
    decimals = int(CFG("OUTPUT.PRICE_DECIMALS", 2))
    for name, pair in ledger.items():
        om.write(f"  {label_dots(name)}{format_unit_price(pair.credits, pair.intergal, decimals)}")


def print_report(
    report: ProcessReport,
    om: OutputManager,
    translator: Translator | None = None,
    ledger: Ledger | None = None,
) -> None:
    """
    Answers first, in query order. Rejected declarations and unknown notes
    follow when DISPLAY.SHOW_REJECTED / DISPLAY.SHOW_UNKNOWN are on, then
    the numeral table and price book when DISPLAY.SHOW_TABLE is on.
    """
    print_answers(report, om)

    if report.rejected and _as_bool(CFG("DISPLAY.SHOW_REJECTED", True), True):
        om.write(f"\n{Fore.RED}{Style.BRIGHT}Rejected declarations ({len(report.rejected)}):{Style.RESET_ALL}")
        for note, reason in report.rejected:
            om.write(f"  - {note.raw}  {Style.DIM}({reason}){Style.RESET_ALL}")

    if report.unknown and _as_bool(CFG("DISPLAY.SHOW_UNKNOWN", True), True):
        om.write(f"\n{Fore.YELLOW}{Style.BRIGHT}Unrecognized notes ({len(report.unknown)}):{Style.RESET_ALL}")
        for note in report.unknown:
            om.write(f"  - {note.raw}")

    if _as_bool(CFG("DISPLAY.SHOW_TABLE", False)):
        if translator is not None:
            om.write()
            print_table(translator, om)
        if ledger is not None:
            om.write()
            print_prices(ledger, om)


def print_profiles_with_descriptions() -> None:
    items = list_profiles_with_descriptions()
    if not items:
        print("No profiles found. Run 'merchantguide init' first.")
        return
    width = max(len(name) for name, _ in items)
    for name, desc in items:
        print(f"  {Fore.GREEN}{name:<{width}}{Style.RESET_ALL}  {desc}")


def show_help() -> None:
    lines = [
        f"{Fore.YELLOW}{Style.BRIGHT}Merchant's Guide to the Galaxy v{__version__}{Style.RESET_ALL}",
        "",
        "Type notes one per line; each is applied immediately:",
        f"  {Fore.GREEN}glob is I{Style.RESET_ALL}                          base numeral",
        f"  {Fore.GREEN}prok glob is IV{Style.RESET_ALL}                    composite numeral",
        f"  {Fore.GREEN}glob glob Silver is 34 Credits{Style.RESET_ALL}     commodity price",
        f"  {Fore.GREEN}how much is glob prok ?{Style.RESET_ALL}            query",
        f"  {Fore.GREEN}how many Credits is glob prok Silver ?{Style.RESET_ALL}",
        "",
        f"{Fore.MAGENTA + Style.BRIGHT}Commands:{Style.RESET_ALL}",
        f"  {Style.BRIGHT}h{Style.RESET_ALL}        - Show this help",
        f"  {Style.BRIGHT}table{Style.RESET_ALL}    - Show the learned numeral table",
        f"  {Style.BRIGHT}prices{Style.RESET_ALL}   - Show the recorded unit prices",
        f"  {Style.BRIGHT}reset{Style.RESET_ALL}    - Forget all numerals and prices",
        f"  {Style.BRIGHT}p{Style.RESET_ALL}        - List profiles",
        f"  {Style.BRIGHT}debug{Style.RESET_ALL}    - debug on|off|status",
        f"  {Style.BRIGHT}q{Style.RESET_ALL}        - Quit",
    ]
    print("\n".join(lines))
