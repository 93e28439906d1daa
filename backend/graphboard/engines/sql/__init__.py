"""
SQL engine: ``:name`` parameter templates and BigQuery execution.

Exports: SQLTemplateEngine, parse_parameters, execute_sql.
"""

from graphboard.engines.sql.executor import QueryExecutionError, execute_sql
from graphboard.engines.sql.parser import parse_parameters
from graphboard.engines.sql.template_engine import SQLTemplateEngine

__all__ = [
    "SQLTemplateEngine",
    "parse_parameters",
    "execute_sql",
    "QueryExecutionError",
]
