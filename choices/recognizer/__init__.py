"""
Choice recognizer package - matching utterances against lists of choices.

The recognizer is split into focused modules:

- core: Data structures (Token, SortedValue, FoundValue, FoundChoice,
  ModelResult, Choice) and option records
- tokenizer: Default tokenizer with character offsets
- value_matcher: Token alignment and scoring of candidate strings
- overlap_resolver: One match per index, no shared tokens
- choice_matcher: Choice expansion and mapping back to choices
- number_recognizer: Text-first recognition with ordinal/number fallback
"""

from .choice_matcher import find_choices, find_choices_from_strings
from .core import (
    CardAction,
    Choice,
    FindChoicesOptions,
    FindValuesOptions,
    FoundChoice,
    FoundValue,
    ModelResult,
    SortedValue,
    Token,
    TokenizerFunction,
    to_choices,
)
from .number_recognizer import (
    NumberModel,
    NumberModelProvider,
    RecognizersTextProvider,
    recognize_choices,
    recognize_choices_from_strings,
)
from .overlap_resolver import OverlapResolver
from .tokenizer import default_tokenizer, iter_tokens
from .value_matcher import find_values, match_value

__all__ = [
    "CardAction",
    "Choice",
    "FindChoicesOptions",
    "FindValuesOptions",
    "FoundChoice",
    "FoundValue",
    "ModelResult",
    "SortedValue",
    "Token",
    "TokenizerFunction",
    "to_choices",
    "default_tokenizer",
    "iter_tokens",
    "find_values",
    "match_value",
    "OverlapResolver",
    "find_choices",
    "find_choices_from_strings",
    "recognize_choices",
    "recognize_choices_from_strings",
    "NumberModel",
    "NumberModelProvider",
    "RecognizersTextProvider",
]
