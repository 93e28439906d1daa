"""
Ad-hoc query execution and parameter discovery, used while configuring a graph.
"""

from typing import Any

from fastapi import APIRouter

from graphboard.api.deps import ExecutorDep
from graphboard.core.chart_data import get_available_columns
from graphboard.engines import QueryExecutionError, parse_parameters
from graphboard.schemas import QueryIn, QueryParametersIn, QueryParametersOut, QueryResult

router = APIRouter(prefix="/query", tags=["query"])


@router.post("", response_model=QueryResult, response_model_exclude_none=True)
def run_query(executor: ExecutorDep, body: QueryIn) -> Any:
    """
    Run a SQL query, substituting ``parameters`` by ``parameterTypes``.

    Query failures return ``success: false`` with the error message.
    """
    try:
        _sql, rows = executor.run_query(
            body.query,
            body.location,
            body.parameters,
            body.parameter_types,
        )
    except QueryExecutionError as e:
        return QueryResult(success=False, error=str(e))
    return QueryResult(
        success=True,
        rows=rows,
        row_count=len(rows),
        columns=get_available_columns(rows),
    )


@router.post("/parameters", response_model=QueryParametersOut)
def query_parameters(body: QueryParametersIn) -> Any:
    """``:name`` parameters used in the query, in order of first appearance."""
    return QueryParametersOut(parameters=parse_parameters(body.query))
