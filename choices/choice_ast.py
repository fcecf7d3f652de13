from dataclasses import dataclass, field
from typing import Optional

from choices.recognizer.core import Choice, FindChoicesOptions

# === Top-Level Nodes ===


@dataclass(frozen=True)
class Version:
    """Represents the choices file format version."""

    value: str


@dataclass(frozen=True)
class Root:
    """Represents the root of a parsed choices file."""

    version: Version
    statements: tuple["Statement", ...] = field(default_factory=tuple)


# === Statement Base Class ===


class Statement:
    """Base class for all statements following the version line."""

    pass


# === Concrete Statements ===


@dataclass(frozen=True)
class LocaleSetting(Statement):
    """Represents a `locale "xx-yy"` statement."""

    value: str


@dataclass(frozen=True)
class DistanceSetting(Statement):
    """Represents a `max-token-distance N` statement."""

    value: int


@dataclass(frozen=True)
class OptionFlags(Statement):
    """Represents an `options flag, flag` statement."""

    flags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ChoiceDef(Statement):
    """Represents a `choice "value" title "..." synonyms "...", "..."` statement."""

    value: str
    title: Optional[str] = None
    synonyms: tuple[str, ...] = field(default_factory=tuple)


# === Resolved Document ===


@dataclass(frozen=True)
class ChoiceDocument:
    """A choices file resolved into recognizer inputs."""

    version: str
    choices: tuple[Choice, ...]
    options: FindChoicesOptions
    path: Optional[str] = None
