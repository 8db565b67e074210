# src/lexmatch/engine.py
from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Union

from . import config as CFG
from .aggregate import MatchAggregator
from .coverage import CharCoverage, count_chars, count_tokens, line_coverage
from .loader import iter_documents, load_lexicons
from .models import (
    CountResult,
    CoverageCounters,
    CoverageRecord,
    Document,
    LexiconCollection,
    LineCoverage,
    MatchOptions,
    MatchResult,
)
from .scan import scan_tokens, scan_windows
from .search import search

log = logging.getLogger(__name__)

Record = Union[MatchResult, CountResult, CoverageRecord, LineCoverage]


class Engine:
    """
    Thin orchestration layer that glues together:
      - lexicon loading (loader),
      - one of three scanning modes (search / scan + aggregate),
      - coverage accounting (coverage).

    Public API (used by CLI/Flask):
      * load(paths, queries): read lexicons once; read-only afterwards
      * attach(lexicons):     use an already built LexiconCollection
      * match(document, counters): stream results for one document
      * run(paths | documents): results + coverage for many documents
      * shutdown():           drop loaded state

    Modes (MatchOptions.mode):
      - "substring": suffix array lookups of every lexicon entry
      - "tokens":    hash lookups of alphanumeric tokens
      - "window":    greedy longest-match character windows
    """

    # ------------- lifecycle -------------

    def __init__(self, options: Optional[MatchOptions] = None, *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
        self.options = (options or MatchOptions()).validate()
        self.lexicons: Optional[LexiconCollection] = None

    # /* ~~~ Read lexicon files (plus ad hoc queries) ~~~ */
    def load(self, paths: Iterable[str] = (), queries: Iterable[str] = ()) -> None:
        self.lexicons = load_lexicons(paths, queries, self.options.case_insensitive)
        log.info("Engine load() complete: lexicons=%s", ", ".join(self.lexicons.names))

    def attach(self, lexicons: LexiconCollection) -> None:
        self.lexicons = lexicons

    def document(self, id: str, text: str) -> Document:
        """Wrap raw text the way loaded documents are wrapped (newline, case folding)."""
        return Document.from_text(id, text, self.options.case_insensitive)

    # ------------- scanning -------------

    def new_counters(self) -> CoverageCounters:
        lexicons = self._require_lexicons()
        return CoverageCounters(scope=CFG.COVERAGE_SCOPES.get(self.options.mode, "tokens"),
                                names=lexicons.names)

    def match(self, document: Document,
              counters: Optional[CoverageCounters] = None) -> Iterator[Union[MatchResult, CountResult]]:
        """
        Stream the results for one document in the configured mode.
        In tokens/window mode ``counters`` (if given) is filled as the scan
        proceeds; it is complete once the iterator is exhausted.
        """
        lexicons = self._require_lexicons()
        mode = self.options.mode
        if mode == "substring":
            yield from search(document, lexicons, self.options)
        elif mode == "tokens":
            yield from self._match_tokens(document, lexicons, counters)
        else:
            yield from self._match_windows(document, lexicons, counters)

    def _match_tokens(self, document: Document, lexicons: LexiconCollection,
                      counters: Optional[CoverageCounters]) -> Iterator[MatchResult]:
        agg = MatchAggregator(lexicons, document.id, counters)
        for cand in scan_tokens(document.text, self.options.min_token_length):
            hit = agg.offer(cand)
            if hit is not None:
                yield hit

    def _match_windows(self, document: Document, lexicons: LexiconCollection,
                       counters: Optional[CoverageCounters]) -> Iterator[MatchResult]:
        agg = MatchAggregator(lexicons, document.id)
        cov = CharCoverage(lexicons.names, len(document.text)) if counters is not None else None
        for i, length, cand in scan_windows(document.text, self.options.max_window_length, agg.is_match):
            hit = agg.offer(cand)
            if cov is not None:
                cov.mark(i, length, hit.lexicons)
            yield hit
        if cov is not None:
            counters.merge(cov.counters())

    def coverage(self, document: Document) -> CoverageCounters:
        """Counters of one document, discarding the matches themselves."""
        counters = self.new_counters()
        for _ in self.match(document, counters):
            pass
        return counters

    def line_coverage(self, document: Document) -> Iterator[LineCoverage]:
        lexicons = self._require_lexicons()
        if self.options.mode == "tokens":
            count = lambda line: count_tokens(line, lexicons, self.options.min_token_length)
        else:
            count = lambda line: count_chars(line, lexicons, self.options.max_window_length)
        return line_coverage(document.text, count, document.id)

    # /* ~~~ Full run: results, then coverage summary / matrix, per document ~~~ */
    def run(self, documents: Iterable[Union[Document, str]]) -> Iterator[Record]:
        for doc in documents:
            if isinstance(doc, str):
                doc = next(iter_documents([doc], self.options.case_insensitive))
            counters = self.new_counters() if self.options.coverage else None
            yield from self.match(doc, counters)
            if counters is not None:
                yield from counters.records(doc.id)
            if self.options.coverage_matrix:
                yield from self.line_coverage(doc)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self.lexicons = None
        log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_lexicons(self) -> LexiconCollection:
        if self.lexicons is None:
            raise RuntimeError("Engine not initialized. Call load() or attach() first.")
        return self.lexicons
