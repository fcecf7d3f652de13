"""
Text tokenization for the choice recognizer.

Splits text into word-like tokens while keeping the character offsets of
every token, so matches can be mapped back onto the original utterance.
"""

import logging
from typing import Iterator, List, Optional

from .core import Token

logger = logging.getLogger(__name__)

# Inclusive code point ranges that separate tokens: ASCII punctuation and
# symbols, Latin-1 punctuation, modifier letters and combining marks, general
# punctuation through misc symbols, and supplemental punctuation.
BREAKING_RANGES = (
    (0x0000, 0x002F),
    (0x003A, 0x0040),
    (0x005B, 0x0060),
    (0x007B, 0x00BF),
    (0x02B9, 0x036F),
    (0x2000, 0x2BFF),
    (0x2E00, 0x2E7F),
)

BMP_MAX = 0xFFFF


def is_breaking_char(code_point: int) -> bool:
    """Return True if the code point terminates the current token."""
    for low, high in BREAKING_RANGES:
        if low <= code_point <= high:
            return True
    return False


def iter_tokens(text: Optional[str], locale: Optional[str] = None) -> Iterator[Token]:
    """
    Lazily yield the tokens of ``text``.

    Breaking characters end the current token and are dropped. Characters
    outside the Basic Multilingual Plane (emoji and the like) always form a
    token of their own.

    Args:
        text: Input text, None is treated as an empty string
        locale: Accepted for interface compatibility; the default rules are
            locale independent

    Yields:
        Token objects in order of appearance
    """
    if not text:
        return

    start = -1
    chars: List[str] = []

    for i, ch in enumerate(text):
        code_point = ord(ch)
        if is_breaking_char(code_point):
            if chars:
                yield _make_token(chars, start, i - 1)
                chars = []
        elif code_point > BMP_MAX:
            if chars:
                yield _make_token(chars, start, i - 1)
                chars = []
            yield Token(text=ch, start=i, end=i, normalized=ch)
        else:
            if not chars:
                start = i
            chars.append(ch)

    if chars:
        yield _make_token(chars, start, len(text) - 1)


def _make_token(chars: List[str], start: int, end: int) -> Token:
    token_text = "".join(chars)
    return Token(text=token_text, start=start, end=end, normalized=token_text.lower())


def default_tokenizer(text: Optional[str], locale: Optional[str] = None) -> List[Token]:
    """Tokenize text with the built-in rules. See iter_tokens."""
    tokens = list(iter_tokens(text, locale))
    logger.debug("Tokenized %r into %s tokens", text, len(tokens))
    return tokens
