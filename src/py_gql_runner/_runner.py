# -*- coding: utf-8 -*-

from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Union,
)

from py_gql.exc import (
    GraphQLSyntaxError,
    InvalidOperationError,
    VariablesCoercionError,
)
from py_gql.execution import (
    GraphQLResult,
    Instrumentation,
    MultiInstrumentation,
)
from py_gql.lang import ast as _ast, parse
from py_gql.schema import Schema
from py_gql.validation import Validator, validate_ast

from .execution import dispatch
from .formatting import DiagnosticSink, ErrorFormatter, format_errors
from .instrumentation import LogFunction, LogFunctionInstrumentation
from .operation import get_operation, get_root_type
from .variables import coerce_variables

__all__ = ("run_query", "QueryOptions", "ResponseFormatter")

Response = Dict[str, Any]


class QueryOptions(NamedTuple):
    """
    Read-only configuration of a single request, as passed to
    :func:`run_query`.
    """

    schema: Schema
    query: Union[str, _ast.Document]
    variables: Optional[Mapping[str, Any]] = None
    operation_name: Optional[str] = None
    root: Any = None
    context: Any = None
    debug: bool = False
    log_function: Optional[LogFunction] = None
    format_response: Optional[Callable[[Response, "QueryOptions"], Any]] = None
    format_error: Optional[ErrorFormatter] = None
    debug_sink: Optional[DiagnosticSink] = None
    validators: Optional[Sequence[Validator]] = None
    middlewares: Optional[Sequence[Callable[..., Any]]] = None
    instrumentation: Optional[Instrumentation] = None
    disable_introspection: bool = False


ResponseFormatter = Callable[[Response, QueryOptions], Any]


async def run_query(
    schema: Schema,
    query: Union[str, _ast.Document],
    *,
    variables: Optional[Mapping[str, Any]] = None,
    operation_name: Optional[str] = None,
    root: Any = None,
    context: Any = None,
    debug: bool = False,
    log_function: Optional[LogFunction] = None,
    format_response: Optional[ResponseFormatter] = None,
    format_error: Optional[ErrorFormatter] = None,
    debug_sink: Optional[DiagnosticSink] = None,
    validators: Optional[Sequence[Validator]] = None,
    middlewares: Optional[Sequence[Callable[..., Any]]] = None,
    instrumentation: Optional[Instrumentation] = None,
    disable_introspection: bool = False
) -> Any:
    """
    Process a GraphQL request from start to finish: parsing, validation,
    operation selection, variable coercion, execution and response
    formatting.

    Request failures never raise, they are reported in the ``errors`` entry of
    the response instead. ``data`` is only part of the response when execution
    started.

    Args:
        schema: Schema to execute the query against.

        query: Query text or already parsed document.
            Parsed documents are trusted and are **not** validated.

        variables: Raw, JSON decoded variables parsed from the request.

        operation_name: Operation to execute.
            If not specified, the document must contain a single operation.

        root: Value passed as parent to top-level resolvers.

        context: Custom application-specific context passed to all
            resolvers.

        debug: Write the full traceback of every reported error to
            ``debug_sink``.

        log_function: Receives a :class:`~py_gql_runner.LogEvent` for every
            step of the request lifecycle.

        format_response: Called with the response and the
            :class:`QueryOptions` of the request, its return value is
            returned instead of the response.

        format_error: Custom error formatter.
            See :func:`~py_gql_runner.formatting.format_errors`.

        debug_sink: Diagnostic output for ``debug`` (defaults to logging).

        validators: Custom validators.
            Setting this will replace the defaults so if you just want to add
            some rules, append to :obj:`py_gql.validation.SPECIFIED_RULES`.

        middlewares: List of middleware functions wrapping the resolution of
            every field.

        instrumentation: Additional instrumentation, it receives all hooks
            including field level ones.

        disable_introspection: Use this to prevent schema introspection.

    Returns:
        Response dictionary, or whatever ``format_response`` returned.

    Raises:
        SchemaError: ``schema`` is invalid.
    """
    schema.validate()

    options = QueryOptions(
        schema=schema,
        query=query,
        variables=variables,
        operation_name=operation_name,
        root=root,
        context=context,
        debug=debug,
        log_function=log_function,
        format_response=format_response,
        format_error=format_error,
        debug_sink=debug_sink,
        validators=validators,
        middlewares=middlewares,
        instrumentation=instrumentation,
        disable_introspection=disable_introspection,
    )

    log = LogFunctionInstrumentation(log_function)
    hooks = (
        log
        if instrumentation is None
        else MultiInstrumentation(log, instrumentation)
    )  # type: Instrumentation

    hooks.on_query_start()
    try:
        log.on_request_status("query", query)
        log.on_request_status(
            "variables", {} if variables is None else variables
        )
        log.on_request_status("operationName", operation_name)

        response = {}  # type: Response

        def _add_errors(errors: Sequence[Exception]) -> None:
            if errors:
                response["errors"] = format_errors(
                    errors,
                    debug=debug,
                    debug_sink=debug_sink,
                    format_error=format_error,
                )

        try:
            result = await _process(options, hooks)
        except _Abort as abort:
            _add_errors(abort.errors)
        else:
            _add_errors(result.errors)
            response["data"] = result.data

        if format_response is not None:
            return format_response(response, options)
        return response
    finally:
        hooks.on_query_end()


class _Abort(Exception):
    """Raised to stop processing a request before any data is produced."""

    def __init__(self, errors: Sequence[Exception]):
        super().__init__()
        self.errors = list(errors)  # type: List[Exception]


async def _process(
    options: QueryOptions, hooks: Instrumentation
) -> GraphQLResult:
    if isinstance(options.query, _ast.Document):
        document = options.query
    else:
        hooks.on_parsing_start()
        try:
            document = parse(options.query)
        except GraphQLSyntaxError as err:
            raise _Abort([err])
        finally:
            hooks.on_parsing_end()

        hooks.on_validation_start()
        validation_result = validate_ast(
            options.schema, document, validators=options.validators
        )
        hooks.on_validation_end()

        if not validation_result:
            raise _Abort(validation_result.errors)

    hooks.on_execution_start()
    try:
        operation = get_operation(document, options.operation_name)
        root_type = get_root_type(options.schema, operation)
        variables = coerce_variables(
            options.schema, operation, options.variables
        )
        return await dispatch(
            options.schema,
            document,
            operation,
            root_type,
            variables,
            root=options.root,
            context=options.context,
            middlewares=options.middlewares,
            instrumentation=hooks,
            disable_introspection=options.disable_introspection,
        )
    except VariablesCoercionError as err:
        raise _Abort(err.errors)
    except InvalidOperationError as err:
        raise _Abort([err])
    except Exception as err:
        # Resolver failures are field errors, anything reaching this point is
        # a failure of the executor itself.
        raise _Abort([err])
    finally:
        hooks.on_execution_end()
