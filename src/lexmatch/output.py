from __future__ import annotations
import json
from typing import IO, Sequence

from .models import CountResult, CoverageRecord, LineCoverage, MatchOptions, MatchResult
from . import config as CFG


def match_header(multi_lexicon: bool, multi_document: bool) -> str:
    cols = ["Text"]
    if multi_lexicon:
        cols.append("Lexicon")
    if multi_document:
        cols.append("Resource")
    cols += ["BeginUtf8Offset", "EndUtf8Offset"]
    return "\t".join(cols)


class TsvWriter:
    """
    Writes engine records as TSV rows.

    Lexicon and resource columns only appear when there is more than one
    lexicon / document, so single-lexicon output stays a plain
    text-begin-end table.
    """
    def __init__(self, out: IO[str], lexicon_names: Sequence[str], n_documents: int,
                 options: MatchOptions) -> None:
        self.out = out
        self.names = tuple(lexicon_names)
        self.multi_lexicon = len(self.names) > 1
        self.multi_document = n_documents > 1
        self.options = options
        self._matrix_header_done = False

    def begin(self) -> None:
        if self.options.verbose or self.options.scanning:
            self._line(match_header(self.multi_lexicon, self.multi_document))

    def write(self, record) -> None:
        if isinstance(record, MatchResult):
            self._match(record)
        elif isinstance(record, CountResult):
            self._count(record)
        elif isinstance(record, CoverageRecord):
            self._coverage(record)
        elif isinstance(record, LineCoverage):
            self._matrix_row(record)
        else:
            raise TypeError(f"cannot write {type(record).__name__}")

    # ---- rows ----

    def _cols(self, text: str, lexicon: str, document) -> list:
        cols = [text]
        if self.multi_lexicon:
            cols.append(lexicon)
        if self.multi_document:
            cols.append(document or "")
        return cols

    def _match(self, r: MatchResult) -> None:
        cols = self._cols(r.text, CFG.LEXICON_SEPARATOR.join(r.lexicons), r.document)
        self._line("\t".join(cols + [str(r.begin), str(r.end)]))

    def _count(self, r: CountResult) -> None:
        cols = self._cols(r.entry, r.lexicon, r.document) + [str(r.count)]
        if r.offsets is not None:
            cols += [str(o) for o in r.offsets]
        self._line("\t".join(cols))

    def _coverage(self, r: CoverageRecord) -> None:
        parts = ["#coverage", f"({r.scope})"]
        if self.multi_document:
            parts.append(r.document or "")
        if self.multi_lexicon:
            parts.append(r.lexicon if r.lexicon is not None else "against all lexicons")
        self._line(f"{' '.join(parts)} = {r.matched}/{r.total} = {r.ratio}")

    def _matrix_row(self, r: LineCoverage) -> None:
        if not self._matrix_header_done:
            head = ["#Line"] + (["Resource"] if self.multi_document else []) + list(self.names) + ["#all"]
            self._line("\t".join(head))
            self._matrix_header_done = True
        cols = [str(r.line_no)] + ([r.document or ""] if self.multi_document else [])
        cols += [str(x) for x in r.ratios] + [str(r.aggregate)]
        self._line("\t".join(cols))

    def _line(self, s: str) -> None:
        self.out.write(s + "\n")


class JsonLinesWriter:
    """One JSON object per record, tagged with its record type."""
    def __init__(self, out: IO[str]) -> None:
        self.out = out

    def begin(self) -> None:
        pass

    def write(self, record) -> None:
        row = {"type": type(record).__name__}
        row.update(record.to_dict())
        self.out.write(json.dumps(row, ensure_ascii=False) + "\n")
