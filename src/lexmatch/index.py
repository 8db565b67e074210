"""
Substring index for substring mode.

A suffix array over the UTF-8 bytes of one document: the start offsets of
all suffixes, sorted lexicographically. Every occurrence of a pattern is a
prefix of some suffix, and the suffixes sharing that prefix form one
contiguous run in the sorted array, so two binary searches find them all
(overlapping and adjacent occurrences included).

The matcher only needs ``build(data)`` and ``Index.positions(pattern)``;
anything with that shape (see ``SubstringIndex``) can stand in.
"""

from __future__ import annotations

import bisect
import logging
from typing import List, Protocol, Sequence

log = logging.getLogger(__name__)


class SubstringIndex(Protocol):
    def positions(self, pattern: bytes) -> Sequence[int]: ...


def _suffix_array(data: bytes) -> List[int]:
    """
    Prefix-doubling construction: sort by the first k bytes' rank pair,
    double k until every suffix has a distinct rank.
    """
    n = len(data)
    if n == 0:
        return []
    sa = list(range(n))
    rank = list(data)
    tmp = [0] * n
    k = 1
    while True:
        def key(i: int, k: int = k) -> tuple:
            return (rank[i], rank[i + k] if i + k < n else -1)

        sa.sort(key=key)
        tmp[sa[0]] = 0
        for j in range(1, n):
            tmp[sa[j]] = tmp[sa[j - 1]] + (key(sa[j - 1]) < key(sa[j]))
        rank, tmp = tmp, rank
        if rank[sa[-1]] == n - 1:
            break
        k <<= 1
    return sa


class SuffixTable:
    """
    Read-only suffix array index over one byte string.
    positions(pattern) -> ascending byte offsets of every occurrence.
    """
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._sa = _suffix_array(data)

    def __len__(self) -> int:
        return len(self._data)

    def positions(self, pattern: bytes) -> List[int]:
        if not pattern:
            return []
        data = self._data
        m = len(pattern)
        # compare only the first m bytes of each suffix against the pattern
        prefix = lambda i: data[i:i + m]
        lo = bisect.bisect_left(self._sa, pattern, key=prefix)
        hi = bisect.bisect_right(self._sa, pattern, lo=lo, key=prefix)
        return sorted(self._sa[lo:hi])


def build(data: bytes) -> SuffixTable:
    log.info("Building suffix array (%d bytes)", len(data))
    return SuffixTable(data)
