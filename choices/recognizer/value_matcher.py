"""
Value matching for the choice recognizer.

Locates candidate strings inside an utterance by aligning their tokens, in
order, against the utterance tokens. Each alignment is scored on how many of
the candidate's tokens were found (completeness) and how many utterance
tokens had to be skipped to find them (accuracy).
"""

import dataclasses
import logging
from typing import List, Optional, Sequence

from .core import FindValuesOptions, FoundValue, ModelResult, SortedValue, Token
from .overlap_resolver import OverlapResolver
from .tokenizer import default_tokenizer

logger = logging.getLogger(__name__)


def find_values(
    utterance: Optional[str],
    values: Sequence[SortedValue],
    options: Optional[FindValuesOptions] = None,
) -> List[ModelResult[FoundValue]]:
    """
    Find every candidate value mentioned in an utterance.

    Args:
        utterance: Text to search, None is treated as an empty string
        values: Candidate strings tagged with the index of their origin
        options: Matching options, defaults apply when omitted

    Returns:
        Non-overlapping matches with character offsets, at most one per
        index, ordered by position in the utterance

    Raises:
        ValueError: if values is None
    """
    if values is None:
        raise ValueError("values argument is missing")

    utterance = utterance or ""
    opt = options if options is not None else FindValuesOptions()
    tokenizer = opt.tokenizer if opt.tokenizer is not None else default_tokenizer

    # Longest candidates are searched first so they win score ties
    candidates = sorted(values, key=lambda v: len(v.value), reverse=True)
    tokens = tokenizer(utterance, opt.locale)

    matches: List[ModelResult[FoundValue]] = []
    for entry in candidates:
        searched_tokens = tokenizer(entry.value.strip(), opt.locale)

        # Re-search after each hit so a value can be found more than once
        start_pos = 0
        while start_pos < len(tokens):
            match = match_value(
                tokens,
                opt.max_token_distance,
                opt.allow_partial_matches,
                entry.index,
                entry.value,
                searched_tokens,
                start_pos,
            )
            if match is None:
                break
            start_pos = match.end + 1
            matches.append(match)

    logger.debug(
        "Found %s candidate matches for %s values in %s tokens",
        len(matches),
        len(candidates),
        len(tokens),
    )

    results = [
        _to_character_span(match, tokens, utterance)
        for match in OverlapResolver.resolve_overlaps(matches)
    ]
    results.sort(key=lambda m: m.start)
    return results


def match_value(
    source_tokens: Sequence[Token],
    max_distance: int,
    allow_partial_matches: bool,
    index: int,
    value: str,
    searched_tokens: Sequence[Token],
    start_pos: int,
) -> Optional[ModelResult[FoundValue]]:
    """
    Align the tokens of one candidate against the utterance tokens.

    Tokens are matched in order, so "second last" matches "the second from
    last one" but not "the last from the second one". Each token may be at
    most ``max_distance`` tokens after the previous matched token; the
    alignment stops at the first token that cannot be found within range.

    Args:
        source_tokens: Utterance tokens
        max_distance: Largest gap allowed between consecutive matched tokens
        allow_partial_matches: Accept alignments that miss some tokens
        index: Index of the candidate's origin
        value: Candidate string, reported back in the resolution
        searched_tokens: Tokens of the candidate string
        start_pos: First utterance token position to search from

    Returns:
        A ModelResult whose start/end are token positions, or None
    """
    matched = 0
    total_deviation = 0
    start = -1
    end = -1
    for token in searched_tokens:
        pos = _index_of_token(source_tokens, token, start_pos)
        if pos < 0:
            break
        distance = pos - start_pos if matched > 0 else 0
        if distance > max_distance:
            break

        matched += 1
        total_deviation += distance
        start_pos = pos + 1
        if start < 0:
            start = pos
        end = pos

    if matched == 0:
        return None
    if matched != len(searched_tokens) and not allow_partial_matches:
        return None

    # Share of the candidate's tokens that were found
    completeness = matched / len(searched_tokens)
    # Penalty for utterance tokens skipped between matched tokens
    accuracy = matched / (matched + total_deviation)
    score = completeness * accuracy

    return ModelResult(
        text="",
        start=start,
        end=end,
        type_name="value",
        resolution=FoundValue(value=value, index=index, score=score),
    )


def _index_of_token(tokens: Sequence[Token], token: Token, start_pos: int) -> int:
    wanted = token.normalized.lower()
    for i in range(start_pos, len(tokens)):
        if tokens[i].normalized.lower() == wanted:
            return i
    return -1


def _to_character_span(
    match: ModelResult[FoundValue], tokens: Sequence[Token], utterance: str
) -> ModelResult[FoundValue]:
    start = tokens[match.start].start
    end = tokens[match.end].end
    return dataclasses.replace(
        match, start=start, end=end, text=utterance[start : end + 1]
    )
