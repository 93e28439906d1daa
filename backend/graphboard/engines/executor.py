"""
Graph executor.

Runs a SQL template against BigQuery, and runs stored graphs end to end:
resolve parameter values -> render SQL -> execute -> validate chart config
-> transform rows -> build chart series.
"""

import logging
from collections.abc import Mapping
from typing import Any

from graphboard.core.chart_data import (
    get_available_columns,
    transform_data_for_chart,
    validate_chart_config,
)
from graphboard.core.chart_series import build_chart_series
from graphboard.core.param_values import resolve_parameter_values
from graphboard.engines.sql import SQLTemplateEngine, execute_sql
from graphboard.models import GraphConfig

_log = logging.getLogger(__name__)


class ChartConfigError(ValueError):
    """Raised when a graph's chart config references columns the query did not return."""

    pass


class GraphExecutor:
    """
    run_query(query, location, values, types) -> (sql, rows)
    run_graph(graph, values) -> {"graph_id", "sql", "columns", "rows", "row_count", "data", "series"}
    """

    def run_query(
        self,
        query: str,
        location: str | None = None,
        values: Mapping[str, str] | None = None,
        types: Mapping[str, str] | None = None,
    ) -> tuple[str, list[dict[str, Any]]]:
        """Substitute *values* into *query* and execute it. Raises QueryExecutionError."""
        sql = SQLTemplateEngine().render(query, values or {}, types)
        _log.debug("Rendered SQL: %s", sql)
        rows = execute_sql(sql, location=location)
        return sql, rows

    def run_graph(
        self,
        graph: GraphConfig,
        values: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Run *graph* with request *values* overriding its parameter defaults.

        Raises QueryExecutionError when the query fails and ChartConfigError
        when the returned columns do not match the chart config.
        """
        cfg = graph.chart_config
        _values, types = resolve_parameter_values(graph.parameters, values)
        sql, rows = self.run_query(graph.query, graph.location, _values, types)
        columns = get_available_columns(rows)

        data: list[dict[str, Any]] = []
        if rows:
            check = validate_chart_config(columns, cfg.x_axis, cfg.y_axis, cfg.group_by)
            if not check.valid:
                _log.warning("Graph %s chart config invalid: %s", graph.id, check.error)
                raise ChartConfigError(check.error)
            data = transform_data_for_chart(
                rows, cfg.x_axis, cfg.y_axis, cfg.aggregate, cfg.group_by
            )

        series = build_chart_series(
            graph.chart_type, data, cfg.x_axis, cfg.y_axis, cfg.group_by
        )
        return {
            "graph_id": graph.id,
            "sql": sql,
            "columns": columns,
            "rows": rows,
            "row_count": len(rows),
            "data": data,
            "series": series,
        }
