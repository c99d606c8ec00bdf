from __future__ import annotations

import pytest

from gutter_client.errors import UnknownOptionError, UserError, WrongArgumentCountError
from gutter_plugin.commands import OPTION_NAMES, Action, complete, complete_option, parse_args


def test_option_names_are_sorted() -> None:
    assert OPTION_NAMES == ("display", "dnext", "dprev", "next", "prev")


@pytest.mark.parametrize(
    "args, expected",
    [
        ((), Action.NEXT),
        (("next",), Action.NEXT),
        (("prev",), Action.PREV),
        (("display",), Action.DISPLAY),
        (("dnext",), Action.DISPLAY_NEXT),
        (("dprev",), Action.DISPLAY_PREV),
    ],
)
def test_parse_args(args, expected) -> None:
    assert parse_args(args) is expected


def test_unknown_option_is_a_user_error() -> None:
    with pytest.raises(UnknownOptionError) as excinfo:
        parse_args(["Next"])

    assert isinstance(excinfo.value, UserError)
    assert excinfo.value.message == "Unknown option (Next). See `> help gutter_message`"


def test_too_many_arguments_is_a_user_error() -> None:
    with pytest.raises(WrongArgumentCountError) as excinfo:
        parse_args(["next", "display", "x"])

    assert excinfo.value.count == 3


def test_complete_option_matches_prefix() -> None:
    assert complete_option("dn") == (["ext"], ["dnext"])
    assert complete_option("p") == (["rev"], ["prev"])


def test_complete_option_with_empty_partial_lists_everything() -> None:
    completions, suggestions = complete_option("")

    assert suggestions == list(OPTION_NAMES)
    assert completions == list(OPTION_NAMES)


def test_complete_option_is_case_sensitive() -> None:
    assert complete_option("D") == ([], [])
    assert complete_option("x") == ([], [])


def test_complete_only_in_first_argument_position() -> None:
    assert complete("gutter_message di", "di") == (["splay"], ["display"])
    assert complete("gutter_message next d", "d") is None
