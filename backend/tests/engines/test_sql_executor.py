"""Unit tests for engines.sql.executor (BigQuery client mocked)."""

import concurrent.futures
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud.bigquery.table import Row

from graphboard.engines.sql import QueryExecutionError, execute_sql
from graphboard.engines.sql.executor import rows_to_dicts


def _rows(names: list[str], *values: tuple) -> list[Row]:
    index = {name: i for i, name in enumerate(names)}
    return [Row(v, index) for v in values]


@patch("graphboard.engines.sql.executor.get_bigquery_client")
def test_execute_sql_returns_dicts_in_column_order(mock_get_client: MagicMock) -> None:
    client = mock_get_client.return_value
    client.query.return_value.result.return_value = _rows(
        ["day", "n"], ("mon", 1), ("tue", 5)
    )

    out = execute_sql("SELECT day, n FROM t", location="US")

    assert out == [{"day": "mon", "n": 1}, {"day": "tue", "n": 5}]
    assert list(out[0].keys()) == ["day", "n"]
    client.query.assert_called_once_with("SELECT day, n FROM t", location="US")


@patch("graphboard.engines.sql.executor.settings")
@patch("graphboard.engines.sql.executor.get_bigquery_client")
def test_execute_sql_default_location(
    mock_get_client: MagicMock, mock_settings: MagicMock
) -> None:
    mock_settings.BIGQUERY_DEFAULT_LOCATION = "EU"
    mock_settings.BIGQUERY_QUERY_TIMEOUT = 5.0
    mock_settings.BIGQUERY_MAX_ROWS = 10
    client = mock_get_client.return_value
    client.query.return_value.result.return_value = []

    assert execute_sql("SELECT 1") == []
    client.query.assert_called_once_with("SELECT 1", location="EU")
    client.query.return_value.result.assert_called_once_with(timeout=5.0, max_results=10)


def test_rows_to_dicts_wraps_temporal_and_converts_decimal() -> None:
    rows = _rows(
        ["d", "ts", "amount", "raw", "tags"],
        (
            date(2024, 1, 2),
            datetime(2024, 1, 2, 3, 4, 5),
            Decimal("1.50"),
            b"\x00\x01",
            ["a", "b"],
        ),
    )
    assert rows_to_dicts(rows) == [
        {
            "d": {"value": "2024-01-02"},
            "ts": {"value": "2024-01-02T03:04:05"},
            "amount": 1.5,
            "raw": "AAE=",
            "tags": ["a", "b"],
        }
    ]


@patch("graphboard.engines.sql.executor.get_bigquery_client")
def test_execute_sql_bad_request_wrapped(mock_get_client: MagicMock) -> None:
    client = mock_get_client.return_value
    client.query.return_value.result.side_effect = google_exceptions.BadRequest(
        "Unrecognized name: nope"
    )

    with pytest.raises(QueryExecutionError) as exc_info:
        execute_sql("SELECT nope")
    assert "Unrecognized name: nope" in str(exc_info.value)


@patch("graphboard.engines.sql.executor.get_bigquery_client")
def test_execute_sql_api_error_wrapped(mock_get_client: MagicMock) -> None:
    client = mock_get_client.return_value
    client.query.side_effect = google_exceptions.Forbidden("Access Denied")

    with pytest.raises(QueryExecutionError, match="Query execution failed"):
        execute_sql("SELECT 1")


@patch("graphboard.engines.sql.executor.get_bigquery_client")
def test_execute_sql_timeout_wrapped(mock_get_client: MagicMock) -> None:
    client = mock_get_client.return_value
    client.query.return_value.result.side_effect = concurrent.futures.TimeoutError()

    with pytest.raises(QueryExecutionError, match="timed out"):
        execute_sql("SELECT 1")


def test_query_execution_error_is_value_error() -> None:
    assert issubclass(QueryExecutionError, ValueError)
