# -*- coding: utf-8 -*-

from py_gql_runner.instrumentation import (
    LogAction,
    LogEvent,
    LogFunctionInstrumentation,
    LogStep,
)


def test_events_compare_on_all_fields():
    assert LogEvent(LogAction.PARSE, LogStep.START) == LogEvent(
        LogAction.PARSE, LogStep.START
    )
    assert LogEvent(LogAction.PARSE, LogStep.START) != LogEvent(
        LogAction.PARSE, LogStep.END
    )
    assert LogEvent(
        LogAction.REQUEST, LogStep.STATUS, "query", "{ a }"
    ) != LogEvent(LogAction.REQUEST, LogStep.STATUS, "query", "{ b }")


def test_unset_fields_differ_from_none():
    assert LogEvent(
        LogAction.REQUEST, LogStep.STATUS, "operationName", None
    ) != LogEvent(LogAction.REQUEST, LogStep.STATUS, "operationName")


def test_unset_fields_read_as_none():
    event = LogEvent(LogAction.EXECUTE, LogStep.END)
    assert event.key is None
    assert event.data is None


def test_to_dict_omits_unset_fields():
    assert LogEvent(LogAction.VALIDATION, LogStep.START).to_dict() == {
        "action": "validation",
        "step": "start",
    }
    assert LogEvent(
        LogAction.REQUEST, LogStep.STATUS, "operationName", None
    ).to_dict() == {
        "action": "request",
        "step": "status",
        "key": "operationName",
        "data": None,
    }


def test_repr():
    assert (
        repr(LogEvent(LogAction.REQUEST, LogStep.STATUS, "variables", {}))
        == "<LogEvent request.status key='variables' data={}>"
    )


def test_hooks_are_noops_without_log_function():
    instrumentation = LogFunctionInstrumentation()
    instrumentation.on_query_start()
    instrumentation.on_request_status("query", "{ a }")
    instrumentation.on_query_end()


def test_hooks_are_forwarded_in_order():
    events = []
    instrumentation = LogFunctionInstrumentation(events.append)

    instrumentation.on_query_start()
    instrumentation.on_request_status("query", "{ a }")
    instrumentation.on_parsing_start()
    instrumentation.on_parsing_end()
    instrumentation.on_validation_start()
    instrumentation.on_validation_end()
    instrumentation.on_execution_start()
    instrumentation.on_execution_end()
    instrumentation.on_query_end()

    assert [e.to_dict() for e in events] == [
        {"action": "request", "step": "start"},
        {"action": "request", "step": "status", "key": "query", "data": "{ a }"},
        {"action": "parse", "step": "start"},
        {"action": "parse", "step": "end"},
        {"action": "validation", "step": "start"},
        {"action": "validation", "step": "end"},
        {"action": "execute", "step": "start"},
        {"action": "execute", "step": "end"},
        {"action": "request", "step": "end"},
    ]
