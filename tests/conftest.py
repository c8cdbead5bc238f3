# -*- coding: utf-8 -*-
""" Global fixtures """

import asyncio

import pytest

from py_gql import build_schema

from py_gql_runner import await_


SDL = """
type Query {
    testString: String
    testRootValue: String
    testContextValue: String
    testArgumentValue(base: Int!): Int
    testAwaitedValue: String
    testAsyncValue: String
    testError: String
    testAsyncError: String
    testUnserializable: Int
    testLazyValue: String
}

type Mutation {
    increment(by: Int = 1): Int
}
"""


def resolve_test_error(root, ctx, info):
    raise Exception("Secret error message")


async def resolve_test_async_error(root, ctx, info):
    await asyncio.sleep(0)
    raise ValueError("Async error message")


@pytest.fixture
def schema():
    schema_ = build_schema(SDL)
    counter = {"value": 0}

    @schema_.resolver("Query.testString")
    def resolve_test_string(root, ctx, info):
        return "it works"

    @schema_.resolver("Query.testRootValue")
    def resolve_test_root_value(root, ctx, info):
        return root + " works"

    @schema_.resolver("Query.testContextValue")
    def resolve_test_context_value(root, ctx, info):
        return ctx + " works"

    @schema_.resolver("Query.testArgumentValue")
    def resolve_test_argument_value(root, ctx, info, base):
        # Variables are not re-coerced at their usage site, so this can receive
        # a string when validation is skipped.
        return base + 5 if isinstance(base, int) else "%s5" % base

    @schema_.resolver("Query.testAwaitedValue")
    def resolve_test_awaited_value(root, ctx, info):
        return await_(asyncio.sleep(0, result="it also works"))

    @schema_.resolver("Query.testAsyncValue")
    async def resolve_test_async_value(root, ctx, info):
        await asyncio.sleep(0)
        return "async works"

    @schema_.resolver("Query.testUnserializable")
    def resolve_test_unserializable(root, ctx, info):
        return "not an int"

    @schema_.resolver("Mutation.increment")
    def resolve_increment(root, ctx, info, by):
        counter["value"] += by
        return counter["value"]

    schema_.register_resolver("Query", "testError", resolve_test_error)
    schema_.register_resolver(
        "Query", "testAsyncError", resolve_test_async_error
    )

    return schema_


@pytest.fixture
def raiser():
    def factory(cls, *args, **kwargs):
        assert issubclass(cls, Exception)

        def _raiser(*_a, **_kw):
            raise cls(*args, **kwargs)

        return _raiser

    return factory


@pytest.fixture
def log_events():
    """ Collect events passed to a log function. """
    events = []

    def log_function(event):
        events.append(event)

    log_function.events = events  # type: ignore
    return log_function


@pytest.fixture
def diagnostic_sink():
    """ Collect writes to a diagnostic sink. """
    writes = []

    def sink(detail):
        writes.append(detail)

    sink.writes = writes  # type: ignore
    return sink
