from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import VisitError

from choices.choice_ast import (
    ChoiceDef,
    ChoiceDocument,
    DistanceSetting,
    LocaleSetting,
    OptionFlags,
    Root,
)
from choices.choice_transformer import ChoiceTransformer
from choices.recognizer.core import CardAction, Choice, FindChoicesOptions

# Choices file format version
# Must match the version line of every choices file; bump it when the grammar
# changes in a way older files cannot be read with.
CHOICES_DSL_VERSION = "1.0"

GRAMMAR_PATH = Path(__file__).parent / "choice_grammar.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    CHOICES_GRAMMAR = f.read()

choices_parser = Lark(CHOICES_GRAMMAR, start="root", parser="lalr")

# Option flag -> (FindChoicesOptions field, value it sets)
FLAG_FIELDS = {
    "allow-partial-matches": ("allow_partial_matches", True),
    "no-value": ("no_value", True),
    "no-action": ("no_action", True),
    "recognize-ordinals": ("recognize_ordinals", True),
    "ignore-numbers": ("recognize_numbers", False),
}


def parse_string(
    code: str, *, unwrap: bool = True, path: Optional[str] = None
) -> ChoiceDocument:
    tree = choices_parser.parse(code)
    try:
        root = ChoiceTransformer(path=path).transform(tree)
    except VisitError as ve:
        if unwrap:
            raise ve.orig_exc from ve
        raise

    # Make sure the version matches the expected choices file version
    if root.version.value != CHOICES_DSL_VERSION:
        raise ValueError(
            f"Unsupported choices file version: {root.version.value}. "
            f"Expected {CHOICES_DSL_VERSION}."
        )

    return build_document(root, path=path)


def parse_file(path, *, unwrap: bool = True) -> ChoiceDocument:
    with open(path, "r", encoding="utf-8") as file:
        return parse_string(file.read(), unwrap=unwrap, path=str(path))


def build_document(root: Root, path: Optional[str] = None) -> ChoiceDocument:
    """Resolve the statements of a parsed file into choices and options."""
    settings = {}
    choices = []
    for stmt in root.statements:
        if isinstance(stmt, LocaleSetting):
            if "locale" in settings:
                raise ValueError("locale is set more than once")
            settings["locale"] = stmt.value
        elif isinstance(stmt, DistanceSetting):
            if "max_token_distance" in settings:
                raise ValueError("max-token-distance is set more than once")
            settings["max_token_distance"] = stmt.value
        elif isinstance(stmt, OptionFlags):
            for flag in stmt.flags:
                name, value = FLAG_FIELDS[flag]
                settings[name] = value
        elif isinstance(stmt, ChoiceDef):
            action = CardAction(title=stmt.title, value=stmt.value) if stmt.title else None
            choices.append(
                Choice(value=stmt.value, action=action, synonyms=stmt.synonyms)
            )

    if not choices:
        raise ValueError("choices file must define at least one choice")

    return ChoiceDocument(
        version=root.version.value,
        choices=tuple(choices),
        options=FindChoicesOptions(**settings),
        path=path,
    )
