from __future__ import annotations
import logging
import os
import sys
from typing import Iterable, Iterator

from . import config as CFG
from .errors import ConfigurationError, ResourceError
from .models import Document, Lexicon, LexiconCollection

log = logging.getLogger(__name__)

# Progress logging (set LEXMATCH_VERBOSE=1 to enable)
VERBOSE = os.environ.get("LEXMATCH_VERBOSE") == "1"
PROGRESS_EVERY_ENTRIES = 100_000


def _iter_entries(lines: Iterable[bytes], path: str) -> Iterator[str]:
    """First TSV column of every decodable line; undecodable lines are skipped."""
    for line_no, raw in enumerate(lines, start=1):
        try:
            line = raw.decode(CFG.ENCODING)
        except UnicodeDecodeError:
            log.debug("%s:%d: skipping line that is not valid %s", path, line_no, CFG.ENCODING)
            continue
        entry = line.rstrip("\r\n").split("\t", 1)[0]
        if entry:
            yield entry
        if VERBOSE and line_no % PROGRESS_EVERY_ENTRIES == 0:
            log.info("[lexicon] %s: lines=%d", path, line_no)


def read_lexicon(path: str, case_insensitive: bool = False) -> Lexicon:
    """
    Read a lexicon with one entry per line. TSV input is allowed; only the
    first column is used. The lexicon is named after ``path``.
    """
    log.info("Reading lexicon %s", path)
    try:
        with open(path, "rb") as f:
            lexicon = Lexicon.from_entries(path, _iter_entries(f, path), case_insensitive)
    except OSError as e:
        raise ResourceError(path, e.strerror or str(e)) from e
    log.info("Lexicon %s: %d entries", path, len(lexicon))
    return lexicon


def load_lexicons(paths: Iterable[str],
                  queries: Iterable[str] = (),
                  case_insensitive: bool = False) -> LexiconCollection:
    """Lexicon files in the given order, with ad hoc queries added to the first one."""
    paths = list(paths)
    queries = list(queries)
    if not paths and not queries:
        raise ConfigurationError("specify either --lexicon or --query")
    collection = LexiconCollection(tuple(read_lexicon(p, case_insensitive) for p in paths))
    return collection.with_queries(queries, case_insensitive)


def read_text(path: str) -> str:
    """Whole text of ``path``; ``-`` reads standard input."""
    try:
        if path == "-":
            return sys.stdin.read()
        with open(path, "r", encoding=CFG.ENCODING) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ResourceError(path, f"not valid {CFG.ENCODING} text ({e.reason})") from e
    except OSError as e:
        raise ResourceError(path, e.strerror or str(e)) from e


def iter_documents(paths: Iterable[str], case_insensitive: bool = False) -> Iterator[Document]:
    """Yield one Document per path, read lazily so only one is in memory at a time."""
    for path in paths:
        log.info("Reading text from %s", path)
        yield Document.from_text(path, read_text(path), case_insensitive)

