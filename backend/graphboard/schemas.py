"""
Pydantic schemas for the graph and query APIs.

Request bodies and responses use camelCase keys, matching the stored records.
"""

from typing import Any

from pydantic import Field

from graphboard.models import (
    DEFAULT_LOCATION,
    CamelModel,
    ChartConfig,
    ChartTypeEnum,
    GraphParameter,
)


class Message(CamelModel):
    message: str


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------


class GraphCreate(CamelModel):
    """Body for POST /graphs. The id is generated server-side."""

    name: str = Field(..., min_length=1, max_length=255)
    query: str = Field(..., min_length=1)
    location: str | None = None
    chart_type: ChartTypeEnum
    chart_config: ChartConfig
    parameters: list[GraphParameter] | None = None


class GraphUpdate(CamelModel):
    """Body for PUT /graphs/{id}; omitted fields keep their stored value."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    query: str | None = Field(default=None, min_length=1)
    location: str | None = None
    chart_type: ChartTypeEnum | None = None
    chart_config: ChartConfig | None = None
    parameters: list[GraphParameter] | None = None


class GraphRunIn(CamelModel):
    """Body for POST /graphs/{id}/run; values override stored parameter defaults."""

    parameters: dict[str, str] = Field(default_factory=dict)


class GraphRunOut(CamelModel):
    """Result of running a stored graph: raw rows plus chart-ready data."""

    graph_id: str
    sql: str
    columns: list[str]
    rows: list[dict[str, Any]]
    row_count: int
    data: list[dict[str, Any]]
    series: Any


# ---------------------------------------------------------------------------
# Ad-hoc queries
# ---------------------------------------------------------------------------


class QueryIn(CamelModel):
    """Body for POST /query."""

    query: str = Field(..., min_length=1)
    location: str = DEFAULT_LOCATION
    parameters: dict[str, str] | None = None
    parameter_types: dict[str, str] | None = None


class QueryResult(CamelModel):
    success: bool
    rows: list[dict[str, Any]] | None = None
    row_count: int | None = None
    columns: list[str] | None = None
    error: str | None = None


class QueryParametersIn(CamelModel):
    query: str


class QueryParametersOut(CamelModel):
    parameters: list[str]
