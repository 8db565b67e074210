# src/lexmatch/scan.py
"""
Single-pass scanners over a document.

Both scanners walk characters but report UTF-8 byte offsets: offset
arithmetic is in bytes, length comparisons are in characters.

- iter_token_spans / scan_tokens: maximal runs of alphanumeric characters.
- scan_windows: greedy longest-match character windows for scripts that
  do not delimit words (Chinese, Japanese, Korean).
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Tuple

from .models import Candidate
from .normalize import has_alpha, is_word_char, utf8_len


def iter_token_spans(text: str, start: int = 0) -> Iterator[Candidate]:
    """
    Yield every maximal alphanumeric run with its byte span, unfiltered.
    Any non-alphanumeric character (or the end of text) closes a run.
    """
    token: List[str] = []   # reused buffer for the token in progress
    begin = pos = start
    for ch in text:
        if is_word_char(ch):
            if not token:
                begin = pos
            token.append(ch)
        elif token:
            yield Candidate("".join(token), begin, pos)
            token.clear()
        pos += utf8_len(ch)
    if token:
        yield Candidate("".join(token), begin, pos)


def scan_tokens(text: str, min_length: int = 0, start: int = 0) -> Iterator[Candidate]:
    """
    Tokens that qualify for lookup: at least one alphabetic character
    (pure numbers are never matched) and at least ``min_length`` characters.
    """
    for cand in iter_token_spans(text, start):
        if not has_alpha(cand.text):
            continue
        if len(cand.text) < min_length:
            continue
        yield cand


def char_offsets(text: str, start: int = 0) -> List[int]:
    """Byte offset of every character, plus one trailing entry for the end."""
    offsets = [start]
    pos = start
    for ch in text:
        pos += utf8_len(ch)
        offsets.append(pos)
    return offsets


def scan_windows(text: str,
                 max_length: int,
                 is_match: Callable[[str], bool],
                 start: int = 0) -> Iterator[Tuple[int, int, Candidate]]:
    """
    Greedy longest-match over character windows.

    At every character position try windows of ``max_length`` characters
    down to 1 (only lengths that fit before the end of text) and yield the
    first, i.e. longest, one that ``is_match`` accepts. At most one window
    per position; a miss at the longest length that fits falls back to
    shorter lengths rather than ending the position. The outer position
    always advances by one character, so windows overlap: a hit on "ABC"
    at 0 does not skip "BC" at 1.

    Yields (char_index, char_length, candidate).
    """
    offsets = char_offsets(text, start)
    n = len(text)
    for i in range(n):
        for length in range(min(max_length, n - i), 0, -1):
            window = text[i:i + length]
            if is_match(window):
                yield i, length, Candidate(window, offsets[i], offsets[i + length])
                break
