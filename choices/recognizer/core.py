"""
Core data structures for the choice recognizer.

Contains the value and result records produced while matching an utterance
against a list of choices, and the option records that configure matching.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Token:
    """A word-like span of an utterance with inclusive character offsets."""

    text: str
    start: int
    end: int
    normalized: str


TokenizerFunction = Callable[[Optional[str], Optional[str]], List[Token]]


@dataclass(frozen=True)
class SortedValue:
    """A candidate string tagged with the index of the choice it belongs to."""

    value: str
    index: int


@dataclass(frozen=True)
class FoundValue:
    """A candidate string located in an utterance."""

    value: str
    index: int
    score: float


@dataclass(frozen=True)
class FoundChoice:
    """A found value translated back to the choice it was derived from."""

    value: str
    index: int
    score: float
    synonym: Optional[str] = None


@dataclass
class ModelResult(Generic[T]):
    """
    Recognition envelope shared by every recognizer.

    ``start`` and ``end`` are inclusive character offsets into the utterance
    and ``text`` is the exact substring they cover.
    """

    text: str
    start: int
    end: int
    type_name: str
    resolution: T


@dataclass(frozen=True)
class CardAction:
    """Display action attached to a choice. Only the title takes part in matching."""

    title: Optional[str] = None
    type: str = "imBack"
    value: Optional[str] = None


@dataclass(frozen=True)
class Choice:
    """A selectable option with an optional action and synonyms."""

    value: str
    action: Optional[CardAction] = None
    synonyms: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of synonyms but store an immutable tuple;
        # a bare string is one synonym
        if self.synonyms is None:
            object.__setattr__(self, "synonyms", ())
        elif isinstance(self.synonyms, str):
            object.__setattr__(self, "synonyms", (self.synonyms,))
        elif not isinstance(self.synonyms, tuple):
            object.__setattr__(self, "synonyms", tuple(self.synonyms))


@dataclass(frozen=True)
class FindValuesOptions:
    """Options that control how values are located in an utterance."""

    allow_partial_matches: bool = False
    locale: str = "en"
    max_token_distance: int = 2
    tokenizer: Optional[TokenizerFunction] = None


@dataclass(frozen=True)
class FindChoicesOptions(FindValuesOptions):
    """Options for choice matching and the numeric fallback."""

    no_value: bool = False
    no_action: bool = False
    recognize_numbers: bool = True
    recognize_ordinals: bool = False


def to_choices(items: Optional[Sequence[Union[str, Choice]]]) -> List[Choice]:
    """Wrap plain strings as choices, passing existing Choice objects through."""
    if items is None:
        return []
    return [item if isinstance(item, Choice) else Choice(value=item) for item in items]
