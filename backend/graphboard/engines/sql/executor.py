"""
Execute rendered SQL against BigQuery.

Returns rows as a list of dicts in result-schema column order. Cells are made
JSON-ready:

- DATE / DATETIME / TIME / TIMESTAMP values become ``{"value": "<iso>"}``
  wrappers, the same shape BigQuery's JSON clients expose.
- NUMERIC / BIGNUMERIC (``Decimal``) become ``float``.
- BYTES become base64 text.

Uses core.bigquery_client (one shared client per process).
"""

import base64
import concurrent.futures
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from google.api_core import exceptions as google_exceptions

from graphboard.core.bigquery_client import get_bigquery_client
from graphboard.core.config import settings

_log = logging.getLogger(__name__)


class QueryExecutionError(ValueError):
    """Raised when the warehouse rejects or fails to run a query."""

    pass


def _to_cell(value: Any) -> Any:
    """Convert one BigQuery cell to a JSON-ready value."""
    if isinstance(value, (datetime, date, time)):
        return {"value": value.isoformat()}
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, list):
        return [_to_cell(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_cell(v) for k, v in value.items()}
    return value


def rows_to_dicts(rows: Any) -> list[dict[str, Any]]:
    """Convert a BigQuery row iterator to a list of dicts."""
    return [{k: _to_cell(v) for k, v in row.items()} for row in rows]


def execute_sql(sql: str, *, location: str | None = None) -> list[dict[str, Any]]:
    """
    Run final SQL (no parameter binding) in *location* and return its rows.

    location: BigQuery dataset location (e.g. ``EU``, ``US``); defaults to
    ``BIGQUERY_DEFAULT_LOCATION``.
    """
    loc = location or settings.BIGQUERY_DEFAULT_LOCATION
    client = get_bigquery_client()
    try:
        job = client.query(sql, location=loc)
        rows = job.result(
            timeout=settings.BIGQUERY_QUERY_TIMEOUT,
            max_results=settings.BIGQUERY_MAX_ROWS,
        )
        return rows_to_dicts(rows)
    except concurrent.futures.TimeoutError as e:
        _log.warning("BigQuery query timed out after %ss", settings.BIGQUERY_QUERY_TIMEOUT)
        raise QueryExecutionError(
            f"Query timed out after {settings.BIGQUERY_QUERY_TIMEOUT}s"
        ) from e
    except google_exceptions.BadRequest as e:
        _log.warning("BigQuery rejected query: %s", e.message)
        raise QueryExecutionError(f"SQL error: {e.message}") from e
    except google_exceptions.GoogleAPIError as e:
        _log.error("BigQuery error: %s. SQL: %s", e, sql, exc_info=True)
        raise QueryExecutionError(f"Query execution failed: {e}") from e
