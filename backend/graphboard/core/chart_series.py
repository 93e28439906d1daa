"""
Chart series builders.

Reshape transform_data_for_chart() output into the series each chart type
draws. Grouped datums are in wide format, so group values are the datum keys
other than the x-axis column.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from graphboard.core.chart_data import extract_chart_value
from graphboard.models import ChartTypeEnum


def _y(value: Any) -> int | float:
    v = extract_chart_value(value)
    return v if isinstance(v, (int, float)) else 0


def group_keys(data: Sequence[Mapping[str, Any]], x_axis: str) -> list[str]:
    """Distinct group values across grouped datums, in first-seen order."""
    keys: dict[str, None] = {}
    for datum in data:
        for k in datum:
            if k != x_axis:
                keys.setdefault(k, None)
    return list(keys)


def bar_series(
    data: Sequence[Mapping[str, Any]],
    x_axis: str,
    y_axis: str,
    group_by: str | None = None,
) -> dict[str, Any]:
    """One bar key per group value, or the y-axis column when ungrouped."""
    if group_by:
        keys = [k for k in group_keys(data, x_axis) if k != group_by]
    else:
        keys = [y_axis]
    return {"keys": keys, "indexBy": x_axis, "data": list(data)}


def line_series(
    data: Sequence[Mapping[str, Any]],
    x_axis: str,
    y_axis: str,
    group_by: str | None = None,
) -> list[dict[str, Any]]:
    """One line per group value (points in x order), or a single line."""
    if not group_by:
        return [
            {
                "id": y_axis,
                "data": [{"x": str(d[x_axis]), "y": _y(d.get(y_axis))} for d in data],
            }
        ]
    return [
        {
            "id": group,
            "data": [
                {"x": str(d[x_axis]), "y": _y(d[group])} for d in data if group in d
            ],
        }
        for group in group_keys(data, x_axis)
    ]


def pie_series(
    data: Sequence[Mapping[str, Any]],
    x_axis: str,
    y_axis: str,
    group_by: str | None = None,
) -> list[dict[str, Any]]:
    """One slice per group value (summed over x), or one per x value."""
    if not group_by:
        return [
            {"id": str(d[x_axis]), "label": str(d[x_axis]), "value": _y(d.get(y_axis))}
            for d in data
        ]
    return [
        {
            "id": group,
            "label": group,
            "value": sum(_y(d[group]) for d in data if group in d),
        }
        for group in group_keys(data, x_axis)
    ]


_BUILDERS = {
    ChartTypeEnum.BAR: bar_series,
    ChartTypeEnum.LINE: line_series,
    ChartTypeEnum.PIE: pie_series,
}


def build_chart_series(
    chart_type: ChartTypeEnum | str,
    data: Sequence[Mapping[str, Any]],
    x_axis: str,
    y_axis: str,
    group_by: str | None = None,
) -> Any:
    """Build the series for *chart_type*; raises ValueError for unknown types."""
    try:
        builder = _BUILDERS[ChartTypeEnum(chart_type)]
    except ValueError as e:
        raise ValueError(f"Unsupported chart type: {chart_type}") from e
    return builder(data, x_axis, y_axis, group_by)
