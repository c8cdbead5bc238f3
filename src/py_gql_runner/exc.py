# -*- coding: utf-8 -*-
"""
Exceptions specific to the query runner.

Errors related to the GraphQL language itself (syntax, validation, coercion
and resolution errors) are the ones exposed by :mod:`py_gql.exc`.
"""


class RunnerError(Exception):
    """
    Base exception for errors raised by this package.
    """


class MissingCooperativeTask(RunnerError, RuntimeError):
    """
    Raised when :func:`~py_gql_runner.await_` is called outside of a
    cooperative task, e.g. from a resolver executed by a vanilla py_gql
    runtime or from plain application code.
    """

    def __init__(self, message: str = ""):
        super().__init__(
            message
            or "await_() can only be called from code running inside a "
            "cooperative task, such as resolvers executed by run_query()"
        )
