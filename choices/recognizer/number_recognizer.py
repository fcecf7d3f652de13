"""
Choice recognition with a numeric fallback.

Text matching is tried first. When nothing is found the utterance is handed
to a number recognition model, first for ordinals ("the second one", "the
last one") and then for cardinals ("2"), and the recognized numbers are used
as 1-based positions in the choice list.

The number models are a pluggable collaborator. The default provider wraps
the Microsoft Recognizers Text number recognizer (``recognizers-text-number``).
"""

import logging
from typing import Any, List, Mapping, Optional, Protocol, Sequence, Union

from .choice_matcher import find_choices
from .core import Choice, FindChoicesOptions, FoundChoice, ModelResult, to_choices

logger = logging.getLogger(__name__)

# Resolution value an ordinal model reports for "last"
END_VALUE = "end"


class NumberModel(Protocol):
    """A model that finds numbers in text."""

    def parse(self, query: str) -> List[Any]:
        """
        Return the numbers found in ``query``.

        Each hit exposes ``start``, ``end`` (inclusive), ``text`` and a
        ``resolution`` mapping holding ``value``, either as attributes or as
        mapping keys.
        """
        ...


class NumberModelProvider(Protocol):
    """Hands out number models for a locale."""

    def get_number_model(self, locale: str) -> NumberModel: ...

    def get_ordinal_model(self, locale: str) -> NumberModel: ...


class RecognizersTextProvider:
    """NumberModelProvider backed by Microsoft Recognizers Text."""

    def __init__(self, fallback_to_default_culture: bool = True):
        self.fallback_to_default_culture = fallback_to_default_culture

    def _recognizer(self, locale: str):
        from recognizers_number import NumberRecognizer

        return NumberRecognizer(locale)

    def get_number_model(self, locale: str) -> NumberModel:
        return self._recognizer(locale).get_number_model(
            locale, self.fallback_to_default_culture
        )

    def get_ordinal_model(self, locale: str) -> NumberModel:
        return self._recognizer(locale).get_ordinal_model(
            locale, self.fallback_to_default_culture
        )


def recognize_choices_from_strings(
    utterance: Optional[str],
    choices: Sequence[str],
    options: Optional[FindChoicesOptions] = None,
    models: Optional[NumberModelProvider] = None,
) -> List[ModelResult[FoundChoice]]:
    """Recognize choices given as plain strings. See recognize_choices."""
    if choices is None:
        raise ValueError("choices argument is missing")
    return recognize_choices(utterance, to_choices(choices), options, models)


def recognize_choices(
    utterance: Optional[str],
    choices: Sequence[Union[str, Choice]],
    options: Optional[FindChoicesOptions] = None,
    models: Optional[NumberModelProvider] = None,
) -> List[ModelResult[FoundChoice]]:
    """
    Recognize the choices selected by an utterance.

    Only one strategy contributes to the result. Text matches win; ordinals
    are only consulted when no text matched, and cardinals only when the
    ordinal model found nothing at all. This keeps "the third one" from
    being recognized both literally and as a position.

    Args:
        utterance: Text to search, None is treated as an empty string
        choices: Choices to look for; plain strings are wrapped as choices
        options: Matching options, defaults apply when omitted
        models: Number model provider, Recognizers Text when omitted

    Returns:
        Matches resolved to FoundChoice, ordered by position in the utterance

    Raises:
        ValueError: if choices is None
    """
    if choices is None:
        raise ValueError("choices argument is missing")

    opt = options if options is not None else FindChoicesOptions()
    choices_list = to_choices(choices)

    matched = find_choices(utterance, choices_list, opt)
    if matched:
        return matched

    if not opt.recognize_ordinals and not opt.recognize_numbers:
        return matched

    provider = models if models is not None else RecognizersTextProvider()
    text = utterance or ""

    hits: List[Any] = []
    if opt.recognize_ordinals:
        hits = provider.get_ordinal_model(opt.locale).parse(text)
        matched.extend(_match_choices_by_index(choices_list, hits))
        logger.debug("Ordinal model found %s hits", len(hits))

    if not hits and opt.recognize_numbers:
        hits = provider.get_number_model(opt.locale).parse(text)
        matched.extend(_match_choices_by_index(choices_list, hits))
        logger.debug("Number model found %s hits", len(hits))

    matched.sort(key=lambda m: m.start)
    return matched


def _match_choices_by_index(
    choices: Sequence[Choice], hits: Sequence[Any]
) -> List[ModelResult[FoundChoice]]:
    results = []
    for hit in hits:
        try:
            result = _match_choice_by_index(choices, hit)
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.debug("Skipping number hit %r: %s", hit, exc)
            continue
        if result is not None:
            results.append(result)
    return results


def _match_choice_by_index(
    choices: Sequence[Choice], hit: Any
) -> Optional[ModelResult[FoundChoice]]:
    resolution = _field(hit, "resolution")
    value = str(_field(resolution, "value")).replace(END_VALUE, str(len(choices)))
    index = int(value) - 1
    if index < 0 or index >= len(choices):
        logger.debug("Number %s is outside the choice list", value)
        return None

    return ModelResult(
        text=_field(hit, "text"),
        start=int(_field(hit, "start")),
        end=int(_field(hit, "end")),
        type_name="choice",
        resolution=FoundChoice(value=choices[index].value, index=index, score=1.0),
    )


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj[name]
    return getattr(obj, name)
