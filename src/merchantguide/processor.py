# src/merchantguide/processor.py
"""
Run a batch of notes through the whole pipeline:

  classify -> base declarations -> composite declarations
           -> commodity declarations -> queries

All declarations are applied before the first query is answered, so a
query may rely on a declaration that appears after it in the input.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass, field

from colorama import Fore, Style

from merchantguide.ledger import Ledger
from merchantguide.notes import (
    BaseNumeralDeclaration,
    CommodityDeclaration,
    CompositeNumeralDeclaration,
    Note,
    Query,
    UnknownNote,
)
from merchantguide.parser import classify_note, parse_notes, scan_tokens
from merchantguide.query import Answer, QueryHandler
from merchantguide.roman import TranslationError
from merchantguide.runtime import CFG
from merchantguide.runtime import current as _rt_current
from merchantguide.translator import Translator


@dataclass
class ProcessReport:
    answers: list[Answer] = field(default_factory=list)
    rejected: list[tuple[Note, str]] = field(default_factory=list)
    unknown: list[UnknownNote] = field(default_factory=list)
    learned: list[tuple[str, str]] = field(default_factory=list)


def _debug(tag: str, text: str, color: str = "") -> None:
    """Emit a single [debug] line to STDERR when debug mode is on."""
    if not _rt_current().debug:
        return
    label = f"{color}{tag:<10}{Style.RESET_ALL}" if color else f"{tag:<10}"
    sys.stderr.write(f"[debug] {label} {text}\n")
    sys.stderr.flush()


def _reason(e: TranslationError) -> str:
    return f"{type(e).__name__}: {e}"


class NoteProcessor:
    """
    Owns one Translator, one Ledger and the QueryHandler over them.

    Usage:
        np = NoteProcessor()
        report = np.process(["glob is I", "how much is glob glob ?"])
        [a.text for a in report.answers]   # ['glob glob is 2']
    """

    def __init__(self, translator: Translator | None = None, ledger: Ledger | None = None) -> None:
        self.translator = translator if translator is not None else Translator()
        self.ledger = ledger if ledger is not None else Ledger()
        self.handler = QueryHandler(self.translator, self.ledger)

    def reset(self) -> None:
        """Forget every learned numeral and price."""
        self.translator = Translator()
        self.ledger = Ledger()
        self.handler = QueryHandler(self.translator, self.ledger)

    # --- single-note steps -----------------------------------------------

    def _apply_base(self, decl: BaseNumeralDeclaration, report: ProcessReport) -> None:
        self.translator.record_base_mapping(decl.intergal_token, decl.roman_symbol)
        report.learned.append((decl.intergal_token, decl.roman_symbol))
        _debug("learned", f"{decl.intergal_token} = {decl.roman_symbol}", Fore.GREEN)

    def _apply_composite(self, decl: CompositeNumeralDeclaration, report: ProcessReport) -> None:
        if not CFG("LEARNING.FROM_COMPOSITES", True):
            report.rejected.append((decl, "learning from composite numerals is disabled"))
            _debug("skipped", decl.raw, Fore.YELLOW)
            return
        try:
            pairs = self.translator.learn_from_composite(decl.intergal_tokens, decl.roman_numeral)
        except TranslationError as e:
            report.rejected.append((decl, _reason(e)))
            _debug("rejected", f"{decl.raw!r}: {_reason(e)}", Fore.RED)
            return
        report.learned.extend(pairs)
        for word, sym in pairs:
            _debug("learned", f"{word} = {sym} (from {decl.roman_numeral})", Fore.GREEN)

    def _apply_commodity(self, decl: CommodityDeclaration, report: ProcessReport) -> None:
        for word in decl.intergal_tokens:
            if self.translator.add_unknown_token(word):
                _debug("new word", word)
        overwrite = bool(CFG("LEDGER.OVERWRITE_PRICES", True))
        try:
            pair = self.ledger.record_declaration(decl, self.translator, overwrite=overwrite)
        except TranslationError as e:
            report.rejected.append((decl, _reason(e)))
            _debug("rejected", f"{decl.raw!r}: {_reason(e)}", Fore.RED)
            return
        _debug("price", f"{decl.commodity}: {pair.credits} Credits / {pair.intergal}", Fore.GREEN)

    def _answer(self, query: Query, report: ProcessReport) -> None:
        ans = self.handler.answer(query)
        report.answers.append(ans)
        _debug("answer", f"{query.raw!r} -> {ans.text!r}", Fore.GREEN if ans.ok else Fore.YELLOW)

    def _unknown(self, note: UnknownNote, report: ProcessReport) -> None:
        report.unknown.append(note)
        if _rt_current().debug:
            illegal = " (illegal token counts)" if scan_tokens(note.tokens).is_illegal else ""
            _debug("unknown", f"{note.raw!r}{illegal}", Fore.YELLOW)

    # --- public API -------------------------------------------------------

    def process(self, lines: Iterable[str]) -> ProcessReport:
        """Process a whole batch: every declaration first, then the queries."""
        grouped = parse_notes(lines)
        report = ProcessReport()
        for kind, notes in grouped.items():
            _debug("parsed", f"{len(notes)} {kind} note(s)")

        for note in grouped[UnknownNote.kind]:
            self._unknown(note, report)
        for note in grouped[BaseNumeralDeclaration.kind]:
            self._apply_base(note, report)
        for note in grouped[CompositeNumeralDeclaration.kind]:
            self._apply_composite(note, report)
        for note in grouped[CommodityDeclaration.kind]:
            self._apply_commodity(note, report)
        for note in grouped[Query.kind]:
            self._answer(note, report)
        return report

    def process_line(self, line: str) -> ProcessReport:
        """Process one note immediately, whatever its kind."""
        report = ProcessReport()
        note = classify_note(line)
        _debug("parsed", f"{line!r} -> {note.kind}")
        match note:
            case BaseNumeralDeclaration():
                self._apply_base(note, report)
            case CompositeNumeralDeclaration():
                self._apply_composite(note, report)
            case CommodityDeclaration():
                self._apply_commodity(note, report)
            case Query():
                self._answer(note, report)
            case UnknownNote():
                self._unknown(note, report)
        return report
