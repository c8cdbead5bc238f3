# -*- coding: utf-8 -*-
"""
py_gql_runner

Request orchestration for `GraphQL <https://graphql.org/>`_ queries built on
top of :mod:`py_gql`.

:func:`run_query` takes a request (query text or parsed document, variables,
context, etc.) through parsing, validation, operation selection, variable
coercion and execution and always returns a response, reporting lifecycle
events along the way. Resolvers are executed cooperatively on the running
event loop and can wait on awaitables with :func:`await_`.
"""

from .version import __version__  # isort:skip

from ._runner import QueryOptions, run_query
from .formatting import default_format_error, format_errors
from .instrumentation import LogAction, LogEvent, LogStep
from .operation import get_operation
from .runtime import CooperativeRuntime, await_, run_cooperatively
from .variables import coerce_variables


__all__ = (
    "__version__",
    "run_query",
    "QueryOptions",
    "LogEvent",
    "LogAction",
    "LogStep",
    "await_",
    "run_cooperatively",
    "CooperativeRuntime",
    "coerce_variables",
    "get_operation",
    "format_errors",
    "default_format_error",
)
