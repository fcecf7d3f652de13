"""
Choices Transformer: Lark tree transformer for choices files.

This module provides the ChoiceTransformer class that converts Lark parse
trees into the typed statement nodes of choices.choice_ast.
"""

import re
from typing import Optional

from lark import Transformer, v_args

from choices import choice_ast as ast


RE_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}


def unquote(token) -> str:
    """
    Strip the quotes of an ESCAPED_STRING token and resolve its escapes.

    \\n, \\t, \\r, \\" and \\\\ are resolved; any other escape is kept as written.
    """
    return RE_ESCAPE.sub(
        lambda m: ESCAPES.get(m.group(1), m.group(0)), str(token)[1:-1]
    )


@v_args(inline=True)
class ChoiceTransformer(Transformer):
    """Transformer that converts Lark parse trees into choices AST nodes."""

    def __init__(self, path: Optional[str] = None):
        super().__init__()
        self.path = path

    def root(self, version, *statements):
        """Transform root node with version and statements."""
        return ast.Root(version=version, statements=tuple(statements))

    def version_stmt(self, version_token):
        """Transform version statement."""
        return ast.Version(value=str(version_token))

    def locale_stmt(self, value):
        """Transform locale statement."""
        locale = unquote(value).strip()
        if not locale:
            raise ValueError("locale must not be empty")
        return ast.LocaleSetting(value=locale)

    def distance_stmt(self, value):
        """Transform max-token-distance statement."""
        distance = int(value)
        if distance < 0:
            raise ValueError(f"max-token-distance must not be negative: {distance}")
        return ast.DistanceSetting(value=distance)

    def options_stmt(self, *flags):
        return ast.OptionFlags(flags=tuple(str(flag) for flag in flags))

    def choice_stmt(self, value, *clauses):
        """Transform choice statement with optional title and synonyms."""
        title = None
        synonyms = ()
        for clause in clauses:
            if isinstance(clause, tuple):
                synonyms = clause
            else:
                title = clause
        return ast.ChoiceDef(value=unquote(value), title=title, synonyms=synonyms)

    def title_clause(self, value):
        return unquote(value)

    def synonyms_clause(self, *values):
        return tuple(unquote(value) for value in values)
