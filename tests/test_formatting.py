# -*- coding: utf-8 -*-

import logging

import pytest

from py_gql.exc import (
    GraphQLSyntaxError,
    InvalidOperationError,
    ResolverError,
)
from py_gql.lang import parse

from py_gql_runner.formatting import (
    default_format_error,
    diagnostic_detail,
    format_errors,
)


def _raised(err):
    try:
        raise err
    except Exception as caught:
        return caught


def _syntax_error(source):
    with pytest.raises(GraphQLSyntaxError) as exc_info:
        parse(source)
    return exc_info.value


def test_syntax_error_format():
    err = GraphQLSyntaxError("Unexpected <EOF>", 5, "{\n  a")
    assert default_format_error(err) == {
        "message": "Syntax Error: Unexpected <EOF> (2:4)",
        "locations": [{"line": 2, "column": 4}],
    }


def test_parser_syntax_error_format():
    formatted = default_format_error(_syntax_error("{ a"))
    assert formatted["message"].startswith("Syntax Error: ")
    assert formatted["message"].endswith("(1:4)")
    assert formatted["locations"] == [{"line": 1, "column": 4}]


def test_response_errors_use_to_dict():
    err = ResolverError("Boom", path=["a", 0], extensions={"code": 42})
    assert default_format_error(err) == {
        "message": "Boom",
        "path": ["a", 0],
        "extensions": {"code": 42},
    }


def test_other_exceptions_use_message():
    assert default_format_error(ValueError("Oops")) == {"message": "Oops"}


def test_diagnostic_detail_requires_traceback():
    assert diagnostic_detail(ValueError("Never raised")) is None


def test_diagnostic_detail_includes_cause():
    def failing_resolver():
        raise KeyError("inner")

    try:
        try:
            failing_resolver()
        except KeyError as err:
            raise ResolverError("outer") from err
    except ResolverError as err:
        detail = diagnostic_detail(err)

    assert "failing_resolver" in detail
    assert "KeyError: 'inner'" in detail
    assert "ResolverError: outer" in detail


def test_diagnostic_detail_of_unraised_error_uses_cause():
    err = ResolverError("outer")
    err.__cause__ = _raised(KeyError("inner"))
    detail = diagnostic_detail(err)

    assert detail is not None
    assert "KeyError: 'inner'" in detail
    assert "ResolverError: outer" in detail


def test_errors_are_formatted_in_order():
    assert format_errors(
        [InvalidOperationError("a"), ValueError("b"), ResolverError("c")]
    ) == [{"message": "a"}, {"message": "b"}, {"message": "c"}]


def test_no_diagnostic_output_without_debug():
    writes = []
    format_errors([_raised(ValueError("a"))], debug_sink=writes.append)
    assert writes == []


def test_debug_writes_each_error_once():
    writes = []
    err = _raised(ValueError("a"))
    other = _raised(ValueError("b"))

    format_errors([err, err, other], debug=True, debug_sink=writes.append)

    assert len(writes) == 2
    assert "ValueError: a" in writes[0]
    assert "ValueError: b" in writes[1]


def test_debug_skips_errors_without_traceback():
    writes = []
    format_errors(
        [ValueError("not raised")], debug=True, debug_sink=writes.append
    )
    assert writes == []


def test_default_debug_sink_logs_errors(caplog):
    format_errors([_raised(ValueError("a"))], debug=True)
    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.name == "py_gql_runner.formatting"
    assert "ValueError: a" in record.getMessage()


def test_custom_format_error():
    assert format_errors(
        [ValueError("a")], format_error=lambda e: {"message": "Masked"}
    ) == [{"message": "Masked"}]


def test_failing_format_error_is_logged_and_masked(caplog):
    def format_error(err):
        raise RuntimeError("Formatter broke")

    assert format_errors(
        [ValueError("a"), ValueError("b")], format_error=format_error
    ) == [
        {"message": "Internal server error"},
        {"message": "Internal server error"},
    ]
    assert len(caplog.records) == 2
    assert all(r.exc_info[0] is RuntimeError for r in caplog.records)
