"""
Lexicon Matcher

Finds the entries of one or more lexicons (words or phrases) in text
documents and reports match counts, UTF-8 byte offsets and coverage.

Three scanning modes share one output model:
- substring: suffix array lookups of every lexicon entry, optionally
  filtered to exact (word-bounded) matches; entries may be phrases
- tokens:    hash lookups of alphanumeric tokens
- window:    greedy longest-match character windows for scripts without
             word delimiters

Example Usage:
    from lexmatch import Engine, MatchOptions

    eng = Engine(MatchOptions(mode="tokens", coverage=True))
    eng.load(["animals.tsv"], queries=["cat"])
    for record in eng.run(["story.txt"]):
        print(record)
"""

# src/lexmatch/__init__.py
__version__ = "0.4.0"

from .engine import Engine  # re-export
from .errors import ConfigurationError, ResourceError
from .index import SuffixTable, build as build_index
from .models import (
    CountResult,
    CoverageCounters,
    CoverageRecord,
    Document,
    Lexicon,
    LexiconCollection,
    LineCoverage,
    MatchOptions,
    MatchResult,
)

__all__ = [
    "Engine",
    "MatchOptions",
    "Lexicon",
    "LexiconCollection",
    "Document",
    "MatchResult",
    "CountResult",
    "CoverageCounters",
    "CoverageRecord",
    "LineCoverage",
    "ConfigurationError",
    "ResourceError",
    "SuffixTable",
    "build_index",
]
