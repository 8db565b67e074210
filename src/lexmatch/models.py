# src/lexmatch/models.py
"""
Data models for the lexicon matcher.

- Lexicon / LexiconCollection: the vocabularies we look for (read-only after load).
- Document: one text buffer, addressed by UTF-8 byte offsets.
- Candidate: a span under evaluation (token, window or indexed entry).
- MatchResult / CountResult: what the engine emits.
- CoverageCounters / CoverageRecord / LineCoverage: coverage accounting.
- MatchOptions: every option of one run, validated before scanning.

Offsets are always byte offsets into ``Document.data`` so results line up
with external tools that read the same UTF-8 file.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Iterable, Iterator, List, Optional, Tuple

from . import config as CFG
from .errors import ConfigurationError
from .normalize import fold


@dataclass(frozen=True)
class Lexicon:
    """
    A named set of matchable strings (words or phrases).

    Attributes
    ----------
    name : str
        Display name, usually the path of the lexicon file.
    entries : tuple[str, ...]
        Distinct entries in load order. Load order only matters for
        deterministic output in substring mode.
    """
    name: str
    entries: Tuple[str, ...]
    _members: frozenset = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_members", frozenset(self.entries))

    @classmethod
    def from_entries(cls, name: str, entries: Iterable[str], case_insensitive: bool = False) -> "Lexicon":
        entries = (fold(e, case_insensitive) for e in entries)
        # dict keeps first-seen order while dropping duplicates
        return cls(name=name, entries=tuple(dict.fromkeys(e for e in entries if e)))

    def __contains__(self, text: object) -> bool:
        return text in self._members

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)


@dataclass(frozen=True)
class LexiconCollection:
    """Ordered (name, Lexicon) sequence; created once, read-only thereafter."""
    lexicons: Tuple[Lexicon, ...]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(lx.name for lx in self.lexicons)

    def membership(self, text: str) -> Tuple[bool, ...]:
        """Membership vector of ``text``, indexed like ``lexicons``."""
        return tuple(text in lx for lx in self.lexicons)

    def matched_names(self, membership: Tuple[bool, ...]) -> Tuple[str, ...]:
        return tuple(lx.name for lx, hit in zip(self.lexicons, membership) if hit)

    def with_queries(self, queries: Iterable[str], case_insensitive: bool = False) -> "LexiconCollection":
        """Insert ad hoc queries into the first lexicon (a ``custom`` one if there is none)."""
        queries = list(queries)
        if not queries:
            return self
        if not self.lexicons:
            return LexiconCollection((Lexicon.from_entries(CFG.QUERY_LEXICON_NAME, queries, case_insensitive),))
        first = self.lexicons[0]
        merged = Lexicon.from_entries(first.name, list(first.entries) + queries, case_insensitive)
        return LexiconCollection((merged,) + self.lexicons[1:])

    def __len__(self) -> int:
        return len(self.lexicons)

    def __iter__(self) -> Iterator[Lexicon]:
        return iter(self.lexicons)


@dataclass(frozen=True)
class Document:
    """
    A single text buffer.

    ``text`` always ends with a newline so end-of-text tokenization is
    deterministic; ``data`` is its UTF-8 encoding and the space all
    offsets refer to.
    """
    id: str
    text: str
    data: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", self.text.encode(CFG.ENCODING))

    @classmethod
    def from_text(cls, id: str, text: str, case_insensitive: bool = False) -> "Document":
        if not text.endswith("\n"):
            text += "\n"
        text = fold(text, case_insensitive)
        return cls(id=id, text=text)


@dataclass(frozen=True, slots=True)
class Candidate:
    text: str
    begin: int    # byte offset, inclusive
    end: int      # byte offset, exclusive


@dataclass(frozen=True, slots=True)
class MatchResult:
    """One matched span (verbose / tokens / window rows)."""
    text: str
    begin: int
    end: int
    lexicons: Tuple[str, ...]
    document: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CountResult:
    """Aggregate row of substring mode: one lexicon entry and its hits."""
    entry: str
    lexicon: str
    count: int
    offsets: Optional[Tuple[int, ...]] = None   # None when offsets are suppressed
    document: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CoverageRecord:
    scope: str                  # "tokens" | "chars"
    lexicon: Optional[str]      # None = against all lexicons
    matched: int
    total: int
    ratio: float
    document: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class LineCoverage:
    """One row of the coverage matrix: a non-empty input line."""
    line_no: int                # 1-based
    ratios: Tuple[float, ...]   # one per lexicon
    aggregate: float
    document: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def _ratio(matched: int, total: int) -> float:
    return matched / total if total else 0.0


@dataclass
class CoverageCounters:
    """
    Per-lexicon match counts plus one shared candidate total.

    A fresh instance is created per document (or per line in matrix mode)
    and handed to the scanners; nothing here is process-wide.
    """
    scope: str
    names: Tuple[str, ...]
    matched: List[int] = field(default_factory=list)
    matched_any: int = 0
    total: int = 0

    def __post_init__(self) -> None:
        if not self.matched:
            self.matched = [0] * len(self.names)

    def record(self, membership: Tuple[bool, ...]) -> None:
        """Count one candidate with its membership vector."""
        self.total += 1
        hit = False
        for i, m in enumerate(membership):
            if m:
                self.matched[i] += 1
                hit = True
        if hit:
            self.matched_any += 1

    def merge(self, other: "CoverageCounters") -> "CoverageCounters":
        """Add another scope's counts (same lexicons) into this one."""
        if other.names != self.names:
            raise ValueError("cannot merge counters over different lexicons")
        self.matched = [a + b for a, b in zip(self.matched, other.matched)]
        self.matched_any += other.matched_any
        self.total += other.total
        return self

    def ratio(self, i: int) -> float:
        return _ratio(self.matched[i], self.total)

    @property
    def aggregate_ratio(self) -> float:
        return _ratio(self.matched_any, self.total)

    def records(self, document: Optional[str] = None) -> List[CoverageRecord]:
        out = [
            CoverageRecord(self.scope, name, self.matched[i], self.total, self.ratio(i), document)
            for i, name in enumerate(self.names)
        ]
        if len(self.names) > 1:
            out.append(CoverageRecord(self.scope, None, self.matched_any, self.total,
                                      self.aggregate_ratio, document))
        return out


@dataclass(frozen=True)
class MatchOptions:
    """All options of one run. Call ``validate()`` before scanning."""
    mode: str = "substring"
    all_matches: bool = False
    freq_threshold: int = CFG.FREQ_THRESHOLD
    verbose: bool = CFG.VERBOSE_OUTPUT
    case_insensitive: bool = CFG.CASE_INSENSITIVE
    min_token_length: int = CFG.MIN_TOKEN_LENGTH
    max_window_length: Optional[int] = CFG.MAX_WINDOW_LENGTH
    coverage: bool = False
    coverage_matrix: bool = False
    suppress_offsets: bool = False
    unicode_boundaries: bool = False

    @property
    def exact(self) -> bool:
        # --all overrides boundary filtering
        return CFG.EXACT and not self.all_matches

    @property
    def scanning(self) -> bool:
        return self.mode in ("tokens", "window")

    def validate(self) -> "MatchOptions":
        if self.mode not in CFG.MODES:
            raise ConfigurationError(f"unknown mode {self.mode!r} (expected one of {', '.join(CFG.MODES)})")
        if self.suppress_offsets and self.verbose:
            raise ConfigurationError("--count-only and --verbose are mutually exclusive")
        for name in ("freq_threshold", "min_token_length", "max_window_length"):
            value = getattr(self, name)
            if value is None and name == "max_window_length":
                continue
            # bool is an int subclass; True is not a length
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.freq_threshold < 0:
            raise ConfigurationError("frequency threshold must be an integer value >= 0")
        if self.scanning and self.freq_threshold != CFG.FREQ_THRESHOLD:
            raise ConfigurationError("frequency thresholds do not work with --tokens/--cjk")
        if (self.coverage or self.coverage_matrix) and not self.scanning:
            raise ConfigurationError("coverage requires --tokens or --cjk")
        if self.min_token_length < 0:
            raise ConfigurationError("minimum token length must be >= 0")
        if self.mode == "window" and (self.max_window_length is None or self.max_window_length < 1):
            raise ConfigurationError("--cjk requires a maximum window length >= 1")
        return self
