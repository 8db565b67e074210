from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Union

from . import config as CFG
from .boundary import filter_exact
from .index import SubstringIndex, build
from .models import CountResult, Document, Lexicon, LexiconCollection, MatchOptions, MatchResult
from .normalize import BoundaryClassifier, make_classifier

log = logging.getLogger(__name__)

SubstringRow = Union[MatchResult, CountResult]


def entry_positions(document: Document,
                    index: SubstringIndex,
                    entry: str,
                    exact: bool = True,
                    classifier: Optional[BoundaryClassifier] = None) -> List[int]:
    """All hits of ``entry`` (all-matches policy), or only the exact ones."""
    pattern = entry.encode(CFG.ENCODING)
    hits = list(index.positions(pattern))
    if exact:
        hits = filter_exact(document.data, hits, len(pattern), classifier)
    return hits


def search_lexicon(document: Document,
                   index: SubstringIndex,
                   lexicon: Lexicon,
                   options: MatchOptions,
                   classifier: Optional[BoundaryClassifier] = None) -> Iterator[SubstringRow]:
    """
    Look up every entry of one lexicon. An entry is reported when its hit
    count reaches the frequency threshold (threshold 0 reports every entry):
    as one CountResult, or one MatchResult per hit when verbose.
    """
    for entry in lexicon:
        hits = entry_positions(document, index, entry, options.exact, classifier)
        if len(hits) < options.freq_threshold:
            continue
        if options.verbose:
            length = len(entry.encode(CFG.ENCODING))
            for begin in hits:
                yield MatchResult(entry, begin, begin + length, (lexicon.name,), document.id)
        else:
            offsets = None if options.suppress_offsets else tuple(hits)
            yield CountResult(entry, lexicon.name, len(hits), offsets, document.id)


def search(document: Document,
           lexicons: LexiconCollection,
           options: MatchOptions,
           index: Optional[SubstringIndex] = None) -> Iterator[SubstringRow]:
    """
    Substring mode over one document. Lexicons are searched independently;
    a span found in two lexicons is reported once for each.
    """
    if index is None:
        index = build(document.data)
    classifier = make_classifier(options.unicode_boundaries)
    log.info("Searching %s", document.id)
    for lexicon in lexicons:
        yield from search_lexicon(document, index, lexicon, options, classifier)
