# -*- coding: utf-8 -*-
"""
Coercion of raw request variables.

Variables are received as arbitrary (usually JSON decoded) values and must be
converted to the types declared by the operation before execution.
"""

import json
from typing import Any, Dict, List, Mapping, Optional

from py_gql.exc import (
    CoercionError,
    InvalidValue,
    MultiCoercionError,
    UnknownType,
    VariableCoercionError,
    VariablesCoercionError,
)
from py_gql.lang import ast as _ast, print_ast
from py_gql.schema import GraphQLType, NonNullType, Schema, is_input_type
from py_gql.utilities import coerce_value, value_from_ast

__all__ = ("coerce_variables",)

_UNSET = object()


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=repr)


def coerce_variables(
    schema: Schema,
    operation: _ast.OperationDefinition,
    variables: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Coerce raw variables according to an operation's variable definitions.

    Variables which are not declared by the operation are ignored. Optional
    variables which are not provided and have no default value are left out of
    the result so that argument defaults apply during execution.

    Args:
        schema: Schema used to look up declared types
        operation: Selected operation
        variables: Raw variables, ``None`` is treated as no variables

    Returns:
        Coerced variables

    Raises:
        VariablesCoercionError: Wraps one
            :class:`~py_gql.exc.VariableCoercionError` for every problem
            found, across all variables.
    """
    variables = {} if variables is None else variables
    coerced = {}  # type: Dict[str, Any]
    errors = []  # type: List[VariableCoercionError]

    for var_def in operation.variable_definitions:
        try:
            value = _coerce_variable(schema, var_def, variables)
        except VariablesCoercionError as err:
            errors.extend(err.errors)
        else:
            if value is not _UNSET:
                coerced[var_def.variable.name.value] = value

    if errors:
        raise VariablesCoercionError(errors)

    return coerced


def _coerce_variable(
    schema: Schema,
    var_def: _ast.VariableDefinition,
    variables: Mapping[str, Any],
) -> Any:
    name = var_def.variable.name.value

    def _fail(*messages: str) -> VariablesCoercionError:
        return VariablesCoercionError(
            [VariableCoercionError(msg, [var_def]) for msg in messages]
        )

    try:
        var_type = schema.get_type_from_literal(var_def.type)
    except UnknownType:
        raise _fail(
            'Unknown type "%s" for variable "$%s".'
            % (print_ast(var_def.type), name)
        )

    if not is_input_type(var_type):
        raise _fail(
            'Variable "$%s" expected value of type "%s" which cannot be used '
            "as an input type." % (name, print_ast(var_def.type))
        )

    if name not in variables:
        if var_def.default_value is not None:
            try:
                return value_from_ast(var_def.default_value, var_type)
            except InvalidValue as err:
                raise _fail(
                    'Variable "$%s" got invalid default value %s; %s'
                    % (name, print_ast(var_def.default_value), err)
                )
        if isinstance(var_type, NonNullType):
            raise _fail(
                'Variable "$%s" of required type "%s" was not provided.'
                % (name, var_type)
            )
        return _UNSET

    value = variables[name]

    if value is None and isinstance(var_type, NonNullType):
        raise _fail(
            'Variable "$%s" of required type "%s" must not be null.'
            % (name, var_type)
        )

    try:
        return coerce_value(value, var_type)
    except (InvalidValue, CoercionError) as err:
        raise _fail(
            *(
                _invalid_value_message(name, value, var_type, reason)
                for reason in _reasons(err)
            )
        )


def _reasons(err: Exception) -> List[Exception]:
    if isinstance(err, MultiCoercionError):
        return list(err.errors)
    return [err]


def _invalid_value_message(
    name: str, value: Any, var_type: GraphQLType, reason: Exception
) -> str:
    return 'Variable "$%s" got invalid value %s; Expected type "%s"; %s' % (
        name,
        _dumps(value),
        var_type,
        reason,
    )
