from __future__ import annotations
from typing import Iterable, List, Optional

from .normalize import BoundaryClassifier, ByteBoundaryClassifier

_DEFAULT = ByteBoundaryClassifier()


def filter_exact(data: bytes,
                 positions: Iterable[int],
                 length: int,
                 classifier: Optional[BoundaryClassifier] = None) -> List[int]:
    """
    Keep the positions whose match is not embedded in a larger alphanumeric run.

    A raw substring hit at ``p`` (``length`` bytes long) is dropped when the
    byte before ``p`` or the byte right after the match continues a word,
    as judged by ``classifier``. Input order is preserved.
    """
    cls = classifier or _DEFAULT
    return [
        p for p in positions
        if not cls.before_is_word(data, p) and not cls.after_is_word(data, p + length)
    ]
