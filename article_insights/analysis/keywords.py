"""
Keyword tokenization.
"""

import re
from typing import AbstractSet, Optional, Set


_WHITESPACE = re.compile(r"\s+", re.ASCII)
_NON_LETTER = re.compile(r"[^a-z]")


def extract_keywords(text: Optional[str], stop_words: AbstractSet[str] = frozenset()) -> Set[str]:
    """
    Distinct keywords of one text.

    The text is lowercased and split on whitespace; every character other
    than a-z is removed from each token. Empty tokens and stop words are
    dropped. Each keyword appears once no matter how often it repeats.

    >>> sorted(extract_keywords("The Quick Fox jumps; the Fox runs.", {"the"}))
    ['fox', 'jumps', 'quick', 'runs']
    """
    if text is None:
        return set()

    keywords = set()
    for token in _WHITESPACE.split(text.lower()):
        cleaned = _NON_LETTER.sub("", token)
        if cleaned and cleaned not in stop_words:
            keywords.add(cleaned)
    return keywords
