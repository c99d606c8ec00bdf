"""Argument parsing and tab completion for the ``gutter_message`` command.

The host registers one command and forwards its arguments verbatim. Only the
first argument is meaningful; it selects one of the actions below.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from gutter_client.errors import UnknownOptionError, WrongArgumentCountError

COMMAND_NAME = "gutter_message"

_LOGGER = logging.getLogger("GutterMessage.Commands")


class Action(Enum):
    NEXT = "next"
    PREV = "prev"
    DISPLAY = "display"
    DISPLAY_NEXT = "dnext"
    DISPLAY_PREV = "dprev"


OPTION_NAMES: Tuple[str, ...] = tuple(sorted(action.value for action in Action))


def parse_args(args: Sequence[str]) -> Action:
    """Translate command arguments into an :class:`Action`.

    No arguments means ``next``. Anything other than a single known option
    raises a :class:`~gutter_client.errors.UserError`.
    """

    if not args:
        return Action.NEXT
    if len(args) > 1:
        raise WrongArgumentCountError(len(args), COMMAND_NAME)
    option = args[0]
    try:
        action = Action(option)
    except ValueError:
        raise UnknownOptionError(option, COMMAND_NAME) from None
    _LOGGER.debug("Parsed %s command: %s", COMMAND_NAME, action.value)
    return action


def complete_option(partial: str, options: Sequence[str] = OPTION_NAMES) -> Tuple[List[str], List[str]]:
    """Return ``(completions, suggestions)`` for a partially typed option.

    ``options`` must be sorted. Matching is a case-sensitive prefix match; a
    completion is the part of the option still missing after ``partial``.
    """

    completions: List[str] = []
    suggestions: List[str] = []
    for option in options:
        if option[: len(partial)] > partial:
            break
        if option.startswith(partial):
            completions.append(option[len(partial) :])
            suggestions.append(option)
    return completions, suggestions


def complete(line: str, partial: str) -> Optional[Tuple[List[str], List[str]]]:
    """Complete the command line ``line`` whose last argument is ``partial``.

    Returns ``None`` once the user has moved past the first argument.
    """

    if len(line.split(" ")) > 2:
        return None
    return complete_option(partial)
