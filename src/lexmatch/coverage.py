"""
Coverage accounting.

Document level: one CoverageCounters per document, filled while scanning.
Token scope counts qualifying tokens; character scope counts characters
covered by at least one emitted window (overlapping windows never count a
character twice, so matched <= total holds).

Line level (the coverage matrix): every non-empty line is re-scanned on
its own with fresh counters.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple

from . import config as CFG
from .aggregate import MatchAggregator
from .models import CoverageCounters, LexiconCollection, LineCoverage
from .scan import scan_tokens, scan_windows


class CharCoverage:
    """Marks covered characters per lexicon and for the union of all lexicons."""
    def __init__(self, names: Tuple[str, ...], nchars: int) -> None:
        self.names = names
        self.nchars = nchars
        self._marks = [bytearray(nchars) for _ in names]
        self._union = bytearray(nchars)

    def mark(self, index: int, length: int, lexicons: Tuple[str, ...]) -> None:
        """Mark one window as covered for each of the lexicons it matched."""
        span = b"\x01" * length
        for marks, name in zip(self._marks, self.names):
            if name in lexicons:
                marks[index:index + length] = span
        if lexicons:
            self._union[index:index + length] = span

    def counters(self) -> CoverageCounters:
        return CoverageCounters(
            scope=CFG.COVERAGE_SCOPES["window"],
            names=self.names,
            matched=[m.count(1) for m in self._marks],
            matched_any=self._union.count(1),
            total=self.nchars,
        )


def count_tokens(text: str, lexicons: LexiconCollection, min_length: int = 0) -> CoverageCounters:
    counters = CoverageCounters(scope=CFG.COVERAGE_SCOPES["tokens"], names=lexicons.names)
    agg = MatchAggregator(lexicons, counters=counters)
    for cand in scan_tokens(text, min_length):
        agg.offer(cand)
    return counters


def count_chars(text: str, lexicons: LexiconCollection, max_length: int) -> CoverageCounters:
    cov = CharCoverage(lexicons.names, len(text))
    agg = MatchAggregator(lexicons)
    for i, length, cand in scan_windows(text, max_length, agg.is_match):
        hit = agg.offer(cand)
        cov.mark(i, length, hit.lexicons)
    return cov.counters()


def line_coverage(text: str,
                  count_line: Callable[[str], CoverageCounters],
                  document: Optional[str] = None) -> Iterator[LineCoverage]:
    """
    One LineCoverage per non-empty line (split on newline, trailing CR
    trimmed). Line numbers are 1-based and count empty lines too.
    A line without candidates has coverage 0.0.
    """
    for line_no, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue
        counters = count_line(line)
        yield LineCoverage(
            line_no=line_no,
            ratios=tuple(counters.ratio(i) for i in range(len(counters.names))),
            aggregate=counters.aggregate_ratio,
            document=document,
        )
