# -*- coding: utf-8 -*-
"""
Package information.
"""

__title__ = "py_gql_runner"
__description__ = "Request orchestration for GraphQL queries on top of py_gql."
__version__ = "0.1.0"
__license__ = "MIT"
