"""
Graph models.

Entities: GraphConfig (persisted as one JSON file per graph), ChartConfig,
GraphParameter.

Records are stored and exchanged with camelCase keys (``chartType``,
``chartConfig``, ``xAxis``, ``defaultValue``); Python code uses snake_case
attribute names.
"""

from enum import Enum

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

DEFAULT_LOCATION = "EU"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ChartTypeEnum(str, Enum):
    """Chart types the dashboard can render."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"


class AggregateFunctionEnum(str, Enum):
    """Aggregation applied to y-axis values sharing the same x (and group)."""

    SUM = "sum"
    COUNT = "count"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


class BarLayoutEnum(str, Enum):
    GROUPED = "grouped"
    STACKED = "stacked"


class ParameterTypeEnum(str, Enum):
    """Declared type of a query parameter; drives literal formatting."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"


# ---------------------------------------------------------------------------
# Graph record
# ---------------------------------------------------------------------------


class CamelModel(SQLModel):
    """Base for models serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ChartConfig(CamelModel):
    x_axis: str = Field(..., min_length=1)
    y_axis: str = Field(..., min_length=1)
    aggregate: AggregateFunctionEnum = AggregateFunctionEnum.SUM
    group_by: str | None = None
    bar_layout: BarLayoutEnum | None = None


class GraphParameter(CamelModel):
    """A named ``:param`` used in the graph query, with its type and default."""

    name: str = Field(..., min_length=1, max_length=255)
    type: ParameterTypeEnum = ParameterTypeEnum.TEXT
    default_value: str = ""


class GraphConfig(CamelModel):
    """Stored graph definition."""

    id: str
    name: str = Field(..., min_length=1, max_length=255)
    query: str = Field(..., min_length=1)
    location: str = DEFAULT_LOCATION
    chart_type: ChartTypeEnum
    chart_config: ChartConfig
    parameters: list[GraphParameter] | None = None
