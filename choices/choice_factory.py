"""
Plain-text rendering of choice lists.

Formats a list of choices as an inline prompt ("(1) red, (2) green, or (3)
blue") or as a numbered/bulleted list, so the positions a user may answer
with ("the second one", "2") line up with what the recognizer resolves.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from choices.recognizer.core import Choice, to_choices


@dataclass(frozen=True)
class ChoiceFactoryOptions:
    """Separators and numbering used when rendering choices."""

    inline_separator: str = ", "
    inline_or: str = " or "
    inline_or_more: str = ", or "
    include_numbers: bool = True


def choice_title(choice: Choice) -> str:
    """Return the display title of a choice: its action title, else its value."""
    if choice.action is not None and choice.action.title:
        return choice.action.title
    return choice.value


def inline(
    choices: Optional[Sequence[Union[str, Choice]]],
    text: Optional[str] = None,
    options: Optional[ChoiceFactoryOptions] = None,
) -> str:
    """
    Render choices on a single line after an optional prompt text.

    The last two choices are joined with ``inline_or`` when there are only two
    choices, and with ``inline_or_more`` otherwise.
    """
    opt = options if options is not None else ChoiceFactoryOptions()
    items = to_choices(choices)

    parts = [text + " " if text and text.strip() else " "]
    connector = ""
    for index, choice in enumerate(items):
        parts.append(connector)
        if opt.include_numbers:
            parts.append(f"({index + 1}) ")
        parts.append(choice_title(choice))
        if index == len(items) - 2:
            connector = opt.inline_or if index == 0 else opt.inline_or_more
        else:
            connector = opt.inline_separator
    return "".join(parts)


def list_style(
    choices: Optional[Sequence[Union[str, Choice]]],
    text: Optional[str] = None,
    options: Optional[ChoiceFactoryOptions] = None,
) -> str:
    """Render choices one per line, numbered or bulleted."""
    opt = options if options is not None else ChoiceFactoryOptions()
    items = to_choices(choices)

    lines = []
    for index, choice in enumerate(items):
        prefix = f"{index + 1}. " if opt.include_numbers else "- "
        lines.append(prefix + choice_title(choice))

    body = "\n   ".join(lines)
    if text is None:
        return body
    return text + "\n\n   " + body
