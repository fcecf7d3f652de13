"""
Choice matching for the choice recognizer.

Expands every choice into the candidate strings it can be recognized by
(its value, its action title and its synonyms), finds those candidates in an
utterance and maps the hits back onto the originating choices.
"""

import logging
from typing import List, Optional, Sequence, Union

from .core import (
    Choice,
    FindChoicesOptions,
    FoundChoice,
    FoundValue,
    ModelResult,
    SortedValue,
    to_choices,
)
from .value_matcher import find_values

logger = logging.getLogger(__name__)


def find_choices_from_strings(
    utterance: Optional[str],
    choices: Sequence[str],
    options: Optional[FindChoicesOptions] = None,
) -> List[ModelResult[FoundChoice]]:
    """Find choices given as plain strings. See find_choices."""
    if choices is None:
        raise ValueError("choices argument is missing")
    return find_choices(utterance, to_choices(choices), options)


def find_choices(
    utterance: Optional[str],
    choices: Sequence[Union[str, Choice]],
    options: Optional[FindChoicesOptions] = None,
) -> List[ModelResult[FoundChoice]]:
    """
    Find the choices mentioned in an utterance by text matching.

    Args:
        utterance: Text to search, None is treated as an empty string
        choices: Choices to look for; plain strings are wrapped as choices
        options: Matching options, defaults apply when omitted

    Returns:
        Matches resolved to FoundChoice, ordered by position in the utterance

    Raises:
        ValueError: if choices is None
    """
    if choices is None:
        raise ValueError("choices argument is missing")

    opt = options if options is not None else FindChoicesOptions()
    choices_list = to_choices(choices)

    synonyms = build_candidates(choices_list, opt)
    logger.debug(
        "Expanded %s choices into %s candidates", len(choices_list), len(synonyms)
    )

    return [
        _to_found_choice(match, choices_list)
        for match in find_values(utterance, synonyms, opt)
    ]


def build_candidates(
    choices: Sequence[Choice], options: FindChoicesOptions
) -> List[SortedValue]:
    """
    Build the candidate strings for a list of choices.

    Each candidate carries the index of its choice, so several candidates
    can resolve to the same choice.
    """
    synonyms: List[SortedValue] = []
    for index, choice in enumerate(choices):
        if not options.no_value:
            synonyms.append(SortedValue(value=choice.value, index=index))
        if (
            choice.action is not None
            and choice.action.title
            and not options.no_action
        ):
            synonyms.append(SortedValue(value=choice.action.title, index=index))
        for synonym in choice.synonyms:
            synonyms.append(SortedValue(value=synonym, index=index))
    return synonyms


def _to_found_choice(
    match: ModelResult[FoundValue], choices: Sequence[Choice]
) -> ModelResult[FoundChoice]:
    choice = choices[match.resolution.index]
    return ModelResult(
        text=match.text,
        start=match.start,
        end=match.end,
        type_name="choice",
        resolution=FoundChoice(
            value=choice.value,
            index=match.resolution.index,
            score=match.resolution.score,
            synonym=match.resolution.value,
        ),
    )
