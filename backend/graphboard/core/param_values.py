"""
Resolve query parameter values for a graph run.

Merges request values over the defaults declared on the graph and produces the
``values``/``types`` mappings SQLTemplateEngine.render() takes. No type
validation happens here: a ``number`` value is substituted as given.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from graphboard.models import GraphParameter, ParameterTypeEnum


def _as_parameter(param_def: GraphParameter | Mapping[str, Any]) -> GraphParameter:
    if isinstance(param_def, GraphParameter):
        return param_def
    return GraphParameter.model_validate(param_def)


def resolve_parameter_values(
    parameters_definition: Sequence[GraphParameter | Mapping[str, Any]] | None,
    values: Mapping[str, Any] | None,
) -> tuple[dict[str, str], dict[str, str]]:
    """
    Return ``(values, types)`` for substitution.

    - parameters_definition: the graph's ``parameters`` (name, type, defaultValue)
    - values: raw request values by name

    A defined parameter with no request value (missing or "") falls back to its
    default; with no default either it is left out, so its placeholder stays
    unsubstituted. Values for undefined names pass through untyped (quoted as
    text).
    """
    _values = {k: str(v) for k, v in (values or {}).items() if v is not None}
    types: dict[str, str] = {}
    if not parameters_definition:
        return _values, types

    for raw_def in parameters_definition:
        param = _as_parameter(raw_def)
        name = param.name.strip()
        types[name] = ParameterTypeEnum(param.type).value

        if _values.get(name, "") == "":
            if param.default_value != "":
                _values[name] = param.default_value
            else:
                _values.pop(name, None)

    return _values, types
