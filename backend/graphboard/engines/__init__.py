"""
Engines: SQL (``:name`` templates + BigQuery) and GraphExecutor.
"""

from graphboard.engines.executor import ChartConfigError, GraphExecutor
from graphboard.engines.sql import (
    QueryExecutionError,
    SQLTemplateEngine,
    execute_sql,
    parse_parameters,
)

__all__ = [
    "GraphExecutor",
    "ChartConfigError",
    "QueryExecutionError",
    "SQLTemplateEngine",
    "parse_parameters",
    "execute_sql",
]
