from __future__ import annotations
from typing import Optional, Protocol

from . import config as CFG


def fold(text: str, case_insensitive: bool) -> str:
    """Apply the one normalization we support (lowercasing) when enabled."""
    return text.lower() if case_insensitive else text


def is_word_char(ch: str) -> bool:
    """Letters and digits make up tokens; everything else delimits them."""
    return ch.isalnum()


def has_alpha(token: str) -> bool:
    return any(ch.isalpha() for ch in token)


def utf8_len(ch: str) -> int:
    """Byte length of one character in UTF-8 without encoding it."""
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


# ---------- boundary classification ----------

class BoundaryClassifier(Protocol):
    """
    Decides whether the character adjacent to a match at a byte position
    continues an alphanumeric run (and therefore makes the match inexact).
    """
    def before_is_word(self, data: bytes, pos: int) -> bool: ...
    def after_is_word(self, data: bytes, pos: int) -> bool: ...


class ByteBoundaryClassifier:
    """
    Looks at the single adjacent byte, read as a Latin-1 code point.

    Correct for ASCII delimiters (spaces, punctuation). A multi-byte UTF-8
    neighbour is classified by one of its bytes only, so e.g. a lead byte
    like 0xC3 reads as 'Ã' (a letter). Use UnicodeBoundaryClassifier when
    that matters.
    """
    def before_is_word(self, data: bytes, pos: int) -> bool:
        return pos > 0 and chr(data[pos - 1]).isalnum()

    def after_is_word(self, data: bytes, pos: int) -> bool:
        return pos < len(data) and chr(data[pos]).isalnum()


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _decode_at(data: bytes, start: int, end: int) -> Optional[str]:
    try:
        return data[start:end].decode(CFG.ENCODING)
    except UnicodeDecodeError:
        return None


class UnicodeBoundaryClassifier:
    """Decodes the whole neighbouring character before classifying it."""
    def before_is_word(self, data: bytes, pos: int) -> bool:
        if pos <= 0:
            return False
        start = pos - 1
        # walk back over at most 3 continuation bytes to the lead byte
        while start > 0 and pos - start < 4 and _is_continuation(data[start]):
            start -= 1
        ch = _decode_at(data, start, pos)
        return bool(ch) and is_word_char(ch[-1])

    def after_is_word(self, data: bytes, pos: int) -> bool:
        if pos >= len(data):
            return False
        end = pos + 1
        while end < len(data) and end - pos < 4 and _is_continuation(data[end]):
            end += 1
        ch = _decode_at(data, pos, end)
        return bool(ch) and is_word_char(ch[0])


def make_classifier(unicode_boundaries: bool = False) -> BoundaryClassifier:
    return UnicodeBoundaryClassifier() if unicode_boundaries else ByteBoundaryClassifier()
