from __future__ import annotations

import pytest

from lib_log_easy.application.use_cases.formatting import format_message, malformed_description, try_format_string
from lib_log_easy.errors import InvalidArgument, MalformedFormat


def test_format_message_substitutes_positional_arguments() -> None:
    assert format_message("{0} of {1}", 3, 7) == "3 of 7"
    assert format_message("no placeholders") == "no placeholders"


def test_format_message_rejects_none() -> None:
    with pytest.raises(InvalidArgument):
        format_message(None)


@pytest.mark.parametrize(
    "fmt, args",
    [
        ("{0} {1}", ("only",)),
        ("{name}", (1,)),
        ("{0:d}", ("text",)),
        ("{", ()),
    ],
)
def test_format_message_reports_mismatch(fmt: str, args: tuple[object, ...]) -> None:
    with pytest.raises(MalformedFormat) as info:
        format_message(fmt, *args)

    assert info.value.format == fmt
    assert info.value.args_given == args


def test_try_format_string_describes_malformed_input() -> None:
    assert try_format_string("{0} {1}", "a", None) == "a None"
    assert try_format_string("{0} {1} {2}", "a", None) == "MalFormatted: format='{0} {1} {2}', args=[[0]a,[1]null]"
    assert try_format_string(None, 1) == "MalFormatted: format='null', args=[[0]1]"


def test_try_format_string_keeps_literal_braces_without_arguments() -> None:
    assert try_format_string("dict {a: 1}") == "dict {a: 1}"


def test_try_format_string_unpacks_single_tuple_argument() -> None:
    assert try_format_string("{0}/{1}", (4, 5)) == "4/5"


def test_try_format_string_restores_percent_escape() -> None:
    assert try_format_string("load &#37") == "load %"
    assert try_format_string("{0}&#37 done", 80) == "80% done"


def test_malformed_description_lists_every_argument() -> None:
    assert malformed_description("{x}", ()) == "MalFormatted: format='{x}', args=[]"
