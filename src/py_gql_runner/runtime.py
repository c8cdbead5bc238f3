# -*- coding: utf-8 -*-
"""
Cooperative execution of blocking style code on top of asyncio.

Resolvers executed through :func:`~py_gql_runner.run_query` run inside a
greenlet (a *cooperative task*) driven by the request's coroutine. This lets
synchronous resolver code wait on an awaitable with :func:`await_`: the task is
parked, the driving coroutine awaits the value on the event loop (which keeps
scheduling other tasks, including other requests) and the resolver resumes
with the result once it is available, or with the exception raised in its own
frame.

>>> import asyncio
>>> def fetch_user(user_id):
...     return await_(asyncio.sleep(0, result={"id": user_id}))
>>> asyncio.run(run_cooperatively(fetch_user, 42))
{'id': 42}
"""

import functools
import sys
from inspect import isawaitable, iscoroutine
from typing import Any, Awaitable, Callable, TypeVar, cast

import greenlet
from py_gql.execution.runtime import BlockingRuntime

from .exc import MissingCooperativeTask

__all__ = ("await_", "run_cooperatively", "CooperativeRuntime")

T = TypeVar("T")
AnyFn = Callable[..., Any]


class _CooperativeTask(greenlet.greenlet):
    def __init__(self, fn: AnyFn, driver: greenlet.greenlet):
        super().__init__(fn, driver)
        #: Greenlet running the event loop and the driving coroutine.
        self.driver = driver


def await_(awaitable: Awaitable[T]) -> T:
    """
    Wait for an awaitable from synchronous code running in a cooperative task.

    This blocks the calling task only: the event loop and every other task
    keep running until ``awaitable`` settles.

    Args:
        awaitable: Coroutine, future or any other awaitable

    Returns:
        The awaitable's result

    Raises:
        MissingCooperativeTask: Not called from a cooperative task.
            Coroutine objects are closed before raising so they are not
            reported as never awaited.
    """
    current = greenlet.getcurrent()
    if not isinstance(current, _CooperativeTask):
        if iscoroutine(awaitable):
            awaitable.close()  # type: ignore
        raise MissingCooperativeTask()

    return current.driver.switch(awaitable)


async def run_cooperatively(
    fn: Callable[..., T], *args: Any, **kwargs: Any
) -> T:
    """
    Run ``fn`` in a new cooperative task and wait for its return value.

    Exceptions raised by ``fn`` propagate to the caller.
    """
    task = _CooperativeTask(fn, greenlet.getcurrent())
    result = task.switch(*args, **kwargs)

    while not task.dead:
        try:
            value = await result
        except BaseException:
            result = task.throw(*sys.exc_info())
        else:
            result = task.switch(value)

    return cast(T, result)


class CooperativeRuntime(BlockingRuntime):
    """
    py_gql runtime for execution inside a cooperative task.

    Resolvers are called synchronously, as with
    :class:`~py_gql.execution.runtime.BlockingRuntime`. Awaitables they return
    are waited on with :func:`await_` before resolution continues, so
    coroutine functions can be used as resolvers alongside blocking ones.

    Warning:
        Execution must be started through :func:`run_cooperatively`.
    """

    def unwrap_value(self, value: Any) -> Any:
        while isawaitable(value):
            value = await_(value)
        return value

    def wrap_callable(self, func: AnyFn) -> AnyFn:
        @functools.wraps(func)
        def wrapped(*args: Any, **kwargs: Any) -> Any:
            return self.unwrap_value(func(*args, **kwargs))

        return wrapped
