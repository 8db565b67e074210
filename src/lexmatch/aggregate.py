from __future__ import annotations
from typing import Optional

from .models import Candidate, CoverageCounters, LexiconCollection, MatchResult


class MatchAggregator:
    """
    Tests one candidate against every lexicon (in collection order) and
    turns hits into MatchResults.

    When ``counters`` is given every offered candidate is counted, matched
    or not; a candidate in several lexicons counts once for each of them
    and once for the aggregate.
    """
    def __init__(self,
                 lexicons: LexiconCollection,
                 document: Optional[str] = None,
                 counters: Optional[CoverageCounters] = None) -> None:
        self.lexicons = lexicons
        self.document = document
        self.counters = counters

    def is_match(self, text: str) -> bool:
        return any(text in lx for lx in self.lexicons)

    def offer(self, cand: Candidate) -> Optional[MatchResult]:
        membership = self.lexicons.membership(cand.text)
        if self.counters is not None:
            self.counters.record(membership)
        if not any(membership):
            return None
        return MatchResult(
            text=cand.text,
            begin=cand.begin,
            end=cand.end,
            lexicons=self.lexicons.matched_names(membership),
            document=self.document,
        )
