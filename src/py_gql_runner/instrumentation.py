# -*- coding: utf-8 -*-
"""
Structured lifecycle events.

Requests report their progress as a sequence of :class:`LogEvent` handed to a
user supplied log function. The events are produced by hooking into py_gql's
:class:`~py_gql.execution.Instrumentation` which means any other
instrumentation (tracers, timing, etc.) can be run alongside through
:class:`~py_gql.execution.MultiInstrumentation`.
"""

import enum
from typing import Any, Callable, Dict, Optional

from py_gql.execution import Instrumentation

__all__ = (
    "LogAction",
    "LogStep",
    "LogEvent",
    "LogFunction",
    "LogFunctionInstrumentation",
)

_UNSET = object()


class LogAction(enum.Enum):
    """
    Pipeline stage an event relates to.
    """

    REQUEST = "request"
    PARSE = "parse"
    VALIDATION = "validation"
    EXECUTE = "execute"


class LogStep(enum.Enum):
    """
    Position of an event within its stage.
    """

    START = "start"
    STATUS = "status"
    END = "end"


class LogEvent:
    """
    Single lifecycle event.

    Args:
        action: Pipeline stage
        step: Position within the stage
        key: Name of the reported value, only set for ``STATUS`` events
        data: Reported value, only set for ``STATUS`` events

    Attributes:
        action (LogAction): Pipeline stage
        step (LogStep): Position within the stage
        key (Optional[str]): Name of the reported value
        data (Any): Reported value
    """

    __slots__ = ("action", "step", "_key", "_data")

    def __init__(
        self,
        action: LogAction,
        step: LogStep,
        key: Any = _UNSET,
        data: Any = _UNSET,
    ):
        self.action = action
        self.step = step
        self._key = key
        self._data = data

    @property
    def key(self) -> Optional[str]:
        return None if self._key is _UNSET else self._key

    @property
    def data(self) -> Any:
        return None if self._data is _UNSET else self._data

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the event to a dictionary, omitting unset fields.

        Enumeration members are converted to their string value which makes
        the result suitable for structured logging and JSON encoding (provided
        the reported data is).
        """
        d = {"action": self.action.value, "step": self.step.value}
        if self._key is not _UNSET:
            d["key"] = self._key
        if self._data is not _UNSET:
            d["data"] = self._data
        return d

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LogEvent):
            return NotImplemented
        return (self.action, self.step, self._key, self._data) == (
            other.action,
            other.step,
            other._key,
            other._data,
        )

    def __repr__(self) -> str:
        parts = ["%s.%s" % (self.action.value, self.step.value)]
        if self._key is not _UNSET:
            parts.append("key=%r" % self._key)
        if self._data is not _UNSET:
            parts.append("data=%r" % self._data)
        return "<LogEvent %s>" % " ".join(parts)


LogFunction = Callable[[LogEvent], Any]


class LogFunctionInstrumentation(Instrumentation):
    """
    Forward request lifecycle events to a log function.

    Field level hooks are not forwarded.

    Args:
        log_function: Callable receiving each :class:`LogEvent`, in order.
            If not set, all hooks are no-ops.
    """

    def __init__(self, log_function: Optional[LogFunction] = None):
        self.log_function = log_function

    def _emit(self, *args: Any) -> None:
        if self.log_function is not None:
            self.log_function(LogEvent(*args))

    def on_request_status(self, key: str, data: Any) -> None:
        """This will be called to report the inputs of the request."""
        self._emit(LogAction.REQUEST, LogStep.STATUS, key, data)

    def on_query_start(self) -> None:
        self._emit(LogAction.REQUEST, LogStep.START)

    def on_query_end(self) -> None:
        self._emit(LogAction.REQUEST, LogStep.END)

    def on_parsing_start(self) -> None:
        self._emit(LogAction.PARSE, LogStep.START)

    def on_parsing_end(self) -> None:
        self._emit(LogAction.PARSE, LogStep.END)

    def on_validation_start(self) -> None:
        self._emit(LogAction.VALIDATION, LogStep.START)

    def on_validation_end(self) -> None:
        self._emit(LogAction.VALIDATION, LogStep.END)

    def on_execution_start(self) -> None:
        self._emit(LogAction.EXECUTE, LogStep.START)

    def on_execution_end(self) -> None:
        self._emit(LogAction.EXECUTE, LogStep.END)
