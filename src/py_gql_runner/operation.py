# -*- coding: utf-8 -*-
"""
Selection of the operation to execute from a query document.

Operation lookup by name is :func:`py_gql.execution.get_operation`, this
module adds the mapping to the schema root type executed by the runner.
"""

from py_gql.exc import InvalidOperationError
from py_gql.execution import get_operation
from py_gql.lang import ast as _ast
from py_gql.schema import ObjectType, Schema

__all__ = ("get_operation", "get_root_type")


def get_root_type(
    schema: Schema, operation: _ast.OperationDefinition
) -> ObjectType:
    """
    Find the schema type the operation's selection set applies to.

    Raises:
        InvalidOperationError: The schema doesn't support the operation or the
            operation is a subscription.
    """
    if operation.operation == "subscription":
        raise InvalidOperationError(
            "Subscriptions are not supported, use py_gql.execution.subscribe"
        )

    root_type = {
        "query": schema.query_type,
        "mutation": schema.mutation_type,
    }.get(operation.operation)

    if root_type is None:
        raise InvalidOperationError(
            "Schema doesn't support %s operation" % operation.operation
        )

    return root_type
