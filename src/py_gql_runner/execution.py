# -*- coding: utf-8 -*-
"""
Dispatch of a selected operation to the py_gql executor.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from py_gql.exc import ResolverError
from py_gql.execution import Executor, GraphQLResult, Instrumentation
from py_gql.execution.wrappers import ResponsePath
from py_gql.lang import ast as _ast
from py_gql.schema import Field, ObjectType, Schema

from .runtime import CooperativeRuntime, run_cooperatively

__all__ = (
    "capture_resolver_errors",
    "FieldErrorExecutor",
    "execute_operation",
    "dispatch",
)


def capture_resolver_errors(
    next_: Callable[..., Any], root: Any, context: Any, info: Any, **args: Any
) -> Any:
    """
    Middleware reporting any resolver exception as a field error.

    py_gql only reports :class:`~py_gql.exc.ResolverError` as field errors and
    lets other exceptions abort execution. This converts them, keeping the
    original exception as ``__cause__`` for debugging.
    """
    try:
        return next_(root, context, info, **args)
    except ResolverError:
        raise
    except Exception as err:
        raise ResolverError(str(err), nodes=info.nodes, path=info.path) from err


class FieldErrorExecutor(Executor):
    """
    Executor confining failures to the field they happen in.

    Some failures happen outside of the resolver middleware chain, such as
    values which cannot be serialized to the field's type or failing
    awaitables found by the default resolver. py_gql lets these abort the
    whole execution, here they are reported as a located field error and the
    field resolves to ``null``.
    """

    def resolve_field(
        self,
        parent_type: ObjectType,
        parent_value: Any,
        field_definition: Field,
        nodes: List[_ast.Field],
        path: ResponsePath,
    ) -> Any:
        try:
            return super().resolve_field(
                parent_type, parent_value, field_definition, nodes, path
            )
        except Exception as err:
            field_error = ResolverError(str(err), nodes=nodes, path=path)
            field_error.__cause__ = err
            self.add_error(field_error, path, nodes[0])
            return None


def execute_operation(
    schema: Schema,
    document: _ast.Document,
    operation: _ast.OperationDefinition,
    root_type: ObjectType,
    variables: Dict[str, Any],
    *,
    root: Any = None,
    context: Any = None,
    middlewares: Optional[Sequence[Callable[..., Any]]] = None,
    instrumentation: Optional[Instrumentation] = None,
    disable_introspection: bool = False
) -> GraphQLResult:
    """
    Resolve an operation's root selection set.

    This blocks until execution is complete and must run inside a cooperative
    task (see :func:`dispatch`) for resolvers to be able to suspend.

    Args:
        schema: Schema to execute against
        document: Query document
        operation: Operation to execute, must be part of ``document``
        root_type: Type the operation applies to
        variables: Coerced variables
        root: Value passed as parent to top-level resolvers
        context: Application specific context passed to all resolvers
        middlewares: py_gql field middlewares
        instrumentation: Receives field level hooks
        disable_introspection: Prevent introspection queries

    Returns:
        Execution result, including field errors.
    """
    executor = FieldErrorExecutor(
        schema,
        document,
        variables,
        context,
        middlewares=[*(middlewares or ()), capture_resolver_errors],
        instrumentation=instrumentation,
        disable_introspection=disable_introspection,
        runtime=CooperativeRuntime(),
    )

    if operation.operation == "mutation":
        exe_fn = executor.execute_fields_serially
    else:
        exe_fn = executor.execute_fields

    data = exe_fn(
        root_type,
        root,
        [],
        executor.collect_fields(root_type, operation.selection_set.selections),
    )

    return GraphQLResult(data=data, errors=executor.errors)


async def dispatch(*args: Any, **kwargs: Any) -> GraphQLResult:
    """
    Run :func:`execute_operation` in a new cooperative task.

    Accepts the same arguments as :func:`execute_operation`.
    """
    return await run_cooperatively(execute_operation, *args, **kwargs)
