# -*- coding: utf-8 -*-
"""
Conversion of errors collected while processing a request into response
errors.

This is also where debug mode is handled: when enabled the complete traceback
of every error is written to a diagnostic sink. Tracebacks are never included
in the response itself.
"""

import logging
import traceback
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from py_gql._string_utils import index_to_loc
from py_gql.exc import GraphQLResponseError, GraphQLSyntaxError

__all__ = (
    "default_format_error",
    "diagnostic_detail",
    "format_errors",
    "ErrorFormatter",
    "DiagnosticSink",
)

logger = logging.getLogger(__name__)

ErrorFormatter = Callable[[Exception], Dict[str, Any]]
DiagnosticSink = Callable[[str], Any]

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _format_syntax_error(err: GraphQLSyntaxError) -> Dict[str, Any]:
    line, column = index_to_loc(err.source, err.position)
    return {
        "message": "Syntax Error: %s (%d:%d)" % (err.message, line, column),
        "locations": [{"line": line, "column": column}],
    }


def default_format_error(err: Exception) -> Dict[str, Any]:
    """
    Convert an exception to a JSON serializable response error.

    Syntax errors are reported with a ``Syntax Error:`` prefix and their
    position, other py_gql response errors use their own
    :meth:`~py_gql.exc.GraphQLResponseError.to_dict` implementation. Any other
    exception is reduced to its message.
    """
    if isinstance(err, GraphQLSyntaxError):
        return _format_syntax_error(err)
    if isinstance(err, GraphQLResponseError):
        return err.to_dict()
    return {"message": str(err)}


def diagnostic_detail(err: BaseException) -> Optional[str]:
    """
    Full traceback of an exception, including chained exceptions.

    Returns:
        ``None`` if neither the exception nor its cause have been raised.
    """
    if err.__traceback__ is None and (
        err.__cause__ is None or err.__cause__.__traceback__ is None
    ):
        return None
    return "".join(
        traceback.format_exception(type(err), err, err.__traceback__)
    )


def _default_debug_sink(detail: str) -> None:
    logger.error(detail)


def _safe_format(
    format_error: ErrorFormatter, err: Exception
) -> Dict[str, Any]:
    try:
        return format_error(err)
    except Exception:
        logger.exception("Error in format_error function (%r)", err)
        return {"message": INTERNAL_ERROR_MESSAGE}


def format_errors(
    errors: Iterable[Exception],
    *,
    debug: bool = False,
    debug_sink: Optional[DiagnosticSink] = None,
    format_error: Optional[ErrorFormatter] = None
) -> List[Dict[str, Any]]:
    """
    Format errors for inclusion in a response.

    Args:
        errors: Errors to format, in order
        debug: Write the traceback of every error which has one to
            ``debug_sink``, once per error instance
        debug_sink: Receives formatted tracebacks, defaults to logging them
            at ``ERROR`` level through this module's logger
        format_error: Custom formatter used instead of
            :func:`default_format_error`. If it raises, the error is reported
            as ``Internal server error`` and the failure logged.

    Returns:
        Response errors, in the same order as ``errors``.
    """
    sink = debug_sink if debug_sink is not None else _default_debug_sink
    formatted = []  # type: List[Dict[str, Any]]
    seen = set()  # type: Set[int]

    for err in errors:
        if debug and id(err) not in seen:
            seen.add(id(err))
            detail = diagnostic_detail(err)
            if detail is not None:
                sink(detail)

        if format_error is None:
            formatted.append(default_format_error(err))
        else:
            formatted.append(_safe_format(format_error, err))

    return formatted
