"""
Chart data transform: pivot query rows into chart-ready datums.

Rows are the dicts returned by the warehouse executor. A datum maps the x-axis
column name to the x value, and either the y-axis column name (ungrouped) or
each group value (grouped, "wide" format) to an aggregated number.

Coercion is permissive: values that are not numbers count as 0 when
aggregated.
"""

from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, NamedTuple

from graphboard.models import AggregateFunctionEnum

# Largest integer a float holds exactly.
_MAX_EXACT_INT = 2**53


class ChartConfigValidation(NamedTuple):
    valid: bool
    error: str | None = None


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------


def _unwrap(value: Any) -> Any:
    """Return the inner scalar of a temporal wrapper; other values unchanged."""
    if isinstance(value, Mapping):
        return value["value"] if "value" in value else value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if not isinstance(value, (str, bytes, int, float)) and hasattr(value, "value"):
        return value.value
    return value


def _normalize(x: int | float) -> int | float:
    """Integral floats render as ints, like JavaScript numbers."""
    if isinstance(x, float) and x.is_integer() and abs(x) <= _MAX_EXACT_INT:
        return int(x)
    return x


def _to_number(value: Any) -> int | float | None:
    """Parse *value* as a finite number, or None when it is not one."""
    if isinstance(value, (bool, numbers.Integral)):
        return int(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        if value == value.to_integral_value():
            return int(value)
        x = float(value)
    elif isinstance(value, numbers.Real):
        x = float(value)
    elif isinstance(value, str):
        s = value.strip()
        # Blank strings count as 0.
        if not s:
            return 0
        try:
            x = float(s)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(x):
        return None
    return _normalize(x)


def _float_text(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    return str(_normalize(x))


def _to_text(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=str)
    return str(value)


def extract_chart_value(value: Any) -> int | float | str:
    """
    Coerce a cell for aggregation: None -> 0; temporal wrappers are
    unwrapped; finite numbers (or numeric strings) -> number; else str.
    """
    if value is None:
        return 0
    inner = _unwrap(value)
    if inner is None:
        return 0
    n = _to_number(inner)
    if n is not None:
        return n
    return _to_text(inner)


def format_display_value(value: Any) -> str:
    """Coerce a cell for display in a raw-rows table: None -> "NULL"."""
    if value is None:
        return "NULL"
    if isinstance(value, Mapping) and "value" in value:
        return _to_text(value["value"])
    return _to_text(_unwrap(value))


def _numeric(value: Any) -> int | float:
    """Aggregation input: any non-numeric cell counts as 0."""
    v = extract_chart_value(value)
    return v if isinstance(v, (int, float)) else 0


def _key(value: Any) -> str:
    """Partition key for x-axis and group-by cells."""
    return _to_text(extract_chart_value(value))


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def _avg(values: Sequence[float]) -> float:
    return sum(values) / len(values)


_AGGREGATES: dict[str, Callable[[Sequence[float]], float]] = {
    AggregateFunctionEnum.SUM.value: sum,
    AggregateFunctionEnum.COUNT.value: len,
    AggregateFunctionEnum.AVG.value: _avg,
    AggregateFunctionEnum.MIN.value: min,
    AggregateFunctionEnum.MAX.value: max,
}


def apply_aggregation(
    values: Sequence[int | float], aggregate: AggregateFunctionEnum | str
) -> int | float:
    """
    Aggregate *values*. Every function returns 0 for an empty list,
    including min and max. Unknown function names also yield 0.
    """
    if not values:
        return 0
    if isinstance(aggregate, AggregateFunctionEnum):
        aggregate = aggregate.value
    fn = _AGGREGATES.get(aggregate)
    if fn is None:
        return 0
    return _normalize(fn(values))


# ---------------------------------------------------------------------------
# Columns / validation
# ---------------------------------------------------------------------------


def get_available_columns(rows: Sequence[Mapping[str, Any]]) -> list[str]:
    """Column names of the first row, in that row's order."""
    if not rows:
        return []
    return list(rows[0].keys())


def validate_chart_config(
    columns: Sequence[str],
    x_axis: str,
    y_axis: str,
    group_by: str | None = None,
) -> ChartConfigValidation:
    if x_axis not in columns:
        return ChartConfigValidation(False, f'X-axis column "{x_axis}" not found in data')
    if y_axis not in columns:
        return ChartConfigValidation(False, f'Y-axis column "{y_axis}" not found in data')
    if group_by and group_by not in columns:
        return ChartConfigValidation(
            False, f'Group by column "{group_by}" not found in data'
        )
    return ChartConfigValidation(True)


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------


def transform_data_for_chart(
    rows: Sequence[Mapping[str, Any]],
    x_axis: str,
    y_axis: str,
    aggregate: AggregateFunctionEnum | str,
    group_by: str | None = None,
) -> list[dict[str, Any]]:
    """
    Pivot *rows* into one datum per distinct x value, in first-seen order.

    - Ungrouped: ``{x_axis: x, y_axis: agg}``.
    - Grouped: ``{x_axis: x, group_1: agg, group_2: agg, ...}``; groups that
      never occur with an x value are absent from that datum.

    Columns must already be checked with validate_chart_config(); missing
    cells are treated as None.
    """
    if not rows:
        return []

    if not group_by:
        by_x: dict[str, list[int | float]] = {}
        for row in rows:
            x = _key(row.get(x_axis))
            by_x.setdefault(x, []).append(_numeric(row.get(y_axis)))
        return [
            {x_axis: x, y_axis: apply_aggregation(ys, aggregate)}
            for x, ys in by_x.items()
        ]

    cells: dict[str, dict[str, list[int | float]]] = {}
    for row in rows:
        x = _key(row.get(x_axis))
        group = _key(row.get(group_by))
        cells.setdefault(x, {}).setdefault(group, []).append(_numeric(row.get(y_axis)))

    result: list[dict[str, Any]] = []
    for x, groups in cells.items():
        datum: dict[str, Any] = {x_axis: x}
        for group, ys in groups.items():
            datum[group] = apply_aggregation(ys, aggregate)
        result.append(datum)
    return result
