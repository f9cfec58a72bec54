"""Terminal rendering of TypePicker: search prompt, then an indented tree to select from."""

import logging
from typing import Any

import questionary
from questionary import Choice, Separator

from refkit.picker.popup import TypePicker
from refkit.picker.ui import STYLE

logger = logging.getLogger(__name__)

_SEARCH_AGAIN = "__search__"
_INDENT = "  "


def build_choices(picker: TypePicker, show_icons: bool = True) -> list[Any]:
    """Groups become separators, leaves become choices valued by node id."""
    choices: list[Any] = []
    for row in picker.rows():
        indent = _INDENT * row.depth
        if row.node.is_leaf:
            prefix = f"{row.icon} " if show_icons and row.icon else ""
            choices.append(Choice(f"{indent}{prefix}{row.label}", row.node.id))
        else:
            choices.append(Separator(f"{indent}{row.label}"))
    return choices


def run_picker(
    picker: TypePicker, prompt: str = "Search", show_icons: bool = True
) -> type | None:
    """Prompt until a type is chosen. Returns None if the user cancels."""
    while not picker.closed:
        text = questionary.text(f"{prompt}:", default=picker.filter_text, style=STYLE).ask()
        if text is None:
            return None
        picker.apply_filter(text)

        choices = build_choices(picker, show_icons)
        if not any(isinstance(c, Choice) and not isinstance(c, Separator) for c in choices):
            print("No matching types.")
            continue
        choices.append(Separator())
        choices.append(Choice("Search again", _SEARCH_AGAIN))

        answer = questionary.select("Select a type:", choices=choices, style=STYLE).ask()
        if answer is None:
            return None
        if answer == _SEARCH_AGAIN:
            continue

        node = picker.node(answer)
        if node is not None and picker.choose(answer):
            return node.descriptor.cls if node.descriptor else None
        logger.debug("Ignored selection of non-leaf node %r", answer)
    return None
