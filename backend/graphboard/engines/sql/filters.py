"""
Literal formatters for query parameter substitution.

Each formatter turns a raw string value into the SQL literal written in place
of a ``:name`` placeholder, selected by the parameter's declared type.

Quoted literals escape an embedded single quote with a backslash (``\\'``),
which is the BigQuery string-literal convention; it is not the standard SQL
``''`` doubling.
"""

from typing import Any, Callable

from graphboard.models import ParameterTypeEnum

# Backslash-escape for single quotes inside quoted literals
_SQL_QUOTE_ESCAPE = str.maketrans({"'": "\\'"})


def sql_string(value: Any) -> str:
    """Wrap value in single quotes, backslash-escaping embedded quotes."""
    s = str(value).translate(_SQL_QUOTE_ESCAPE)
    return f"'{s}'"


def sql_number(value: Any) -> str:
    """
    Emit value unquoted. No numeric validation: the caller must supply a
    valid numeric literal.
    """
    return str(value)


# Dates and datetimes are written as quoted strings; the query casts them.
sql_date = sql_string
sql_datetime = sql_string


PARAMETER_FORMATTERS: dict[str, Callable[[Any], str]] = {
    ParameterTypeEnum.TEXT.value: sql_string,
    ParameterTypeEnum.NUMBER.value: sql_number,
    ParameterTypeEnum.DATE.value: sql_date,
    ParameterTypeEnum.DATETIME.value: sql_datetime,
}


def format_literal(value: Any, param_type: str | None) -> str:
    """Format *value* for *param_type*; unknown or missing types are quoted as text."""
    if isinstance(param_type, ParameterTypeEnum):
        param_type = param_type.value
    formatter = PARAMETER_FORMATTERS.get(param_type or "", sql_string)
    return formatter(value)
