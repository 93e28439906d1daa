"""Tests for the graphs API."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from graphboard.core.config import settings
from graphboard.core.storage import GraphStorage
from graphboard.engines import QueryExecutionError
from tests.utils.graph import create_random_graph, graph_payload


def _base() -> str:
    return f"{settings.API_V1_STR}/graphs"


# --- list ---


def test_list_graphs_empty(client: TestClient) -> None:
    response = client.get(_base())
    assert response.status_code == 200
    assert response.json() == []


def test_list_graphs_with_data(client: TestClient, storage: GraphStorage) -> None:
    graph = create_random_graph(storage, name="list-me")
    response = client.get(_base())
    assert response.status_code == 200
    data = response.json()
    found = next((g for g in data if g["id"] == graph.id), None)
    assert found is not None
    assert found["name"] == "list-me"
    assert found["chartConfig"]["yAxis"] == "n"


# --- create ---


def test_create_graph(client: TestClient, storage: GraphStorage) -> None:
    body = graph_payload(
        name="Orders per day",
        parameters=[{"name": "branch", "type": "text", "defaultValue": "SE"}],
    )
    response = client.post(_base(), json=body)
    assert response.status_code == 200
    content = response.json()
    assert content["id"].startswith("graph_")
    assert content["name"] == "Orders per day"
    assert content["location"] == "EU"
    assert content["chartType"] == "bar"
    assert content["parameters"] == [
        {"name": "branch", "type": "text", "defaultValue": "SE"}
    ]
    assert storage.get_graph(content["id"]) is not None


def test_create_graph_keeps_location(client: TestClient) -> None:
    response = client.post(_base(), json=graph_payload(location="US"))
    assert response.status_code == 200
    assert response.json()["location"] == "US"


def test_create_graph_missing_fields(client: TestClient) -> None:
    body = graph_payload()
    del body["chartConfig"]
    response = client.post(_base(), json=body)
    assert response.status_code == 422
    assert "chartConfig" in response.json()["detail"]


def test_create_graph_invalid_chart_type(client: TestClient) -> None:
    response = client.post(_base(), json=graph_payload(chartType="scatter"))
    assert response.status_code == 422


# --- get ---


def test_get_graph(client: TestClient, storage: GraphStorage) -> None:
    graph = create_random_graph(storage)
    response = client.get(f"{_base()}/{graph.id}")
    assert response.status_code == 200
    assert response.json()["id"] == graph.id


def test_get_graph_not_found(client: TestClient) -> None:
    response = client.get(f"{_base()}/graph_nope")
    assert response.status_code == 404
    assert response.json()["detail"] == "Graph not found"


# --- update ---


def test_update_graph_partial(client: TestClient, storage: GraphStorage) -> None:
    graph = create_random_graph(storage, name="old")
    response = client.put(
        f"{_base()}/{graph.id}",
        json={
            "name": "new",
            "chartConfig": {
                "xAxis": "day",
                "yAxis": "n",
                "aggregate": "avg",
                "groupBy": "city",
                "barLayout": "stacked",
            },
        },
    )
    assert response.status_code == 200
    content = response.json()
    assert content["id"] == graph.id
    assert content["name"] == "new"
    assert content["query"] == graph.query
    assert content["chartConfig"]["groupBy"] == "city"
    assert content["chartConfig"]["barLayout"] == "stacked"

    stored = storage.get_graph(graph.id)
    assert stored.name == "new"
    assert stored.chart_config.aggregate == "avg"


def test_update_graph_null_keeps_existing(client: TestClient, storage: GraphStorage) -> None:
    graph = create_random_graph(storage, name="keep")
    response = client.put(f"{_base()}/{graph.id}", json={"name": None})
    assert response.status_code == 200
    assert response.json()["name"] == "keep"


def test_update_graph_not_found(client: TestClient) -> None:
    response = client.put(f"{_base()}/graph_nope", json={"name": "x"})
    assert response.status_code == 404


# --- delete ---


def test_delete_graph(client: TestClient, storage: GraphStorage) -> None:
    graph = create_random_graph(storage)
    response = client.delete(f"{_base()}/{graph.id}")
    assert response.status_code == 200
    assert response.json()["message"] == "Graph deleted successfully"
    assert storage.get_graph(graph.id) is None


def test_delete_graph_not_found(client: TestClient) -> None:
    response = client.delete(f"{_base()}/graph_nope")
    assert response.status_code == 404


# --- run ---


@patch("graphboard.engines.executor.execute_sql")
def test_run_graph(
    mock_execute_sql: MagicMock, client: TestClient, storage: GraphStorage
) -> None:
    mock_execute_sql.return_value = [
        {"day": "mon", "n": 1},
        {"day": "mon", "n": 3},
        {"day": "tue", "n": 5},
    ]
    graph = create_random_graph(
        storage,
        parameters=[{"name": "branch", "type": "text", "defaultValue": "SE"}],
    )

    response = client.post(f"{_base()}/{graph.id}/run", json={"parameters": {"branch": "NO"}})

    assert response.status_code == 200
    content = response.json()
    assert content["graphId"] == graph.id
    assert content["sql"] == "SELECT day, n FROM t WHERE branch = 'NO'"
    assert content["columns"] == ["day", "n"]
    assert content["rowCount"] == 3
    assert content["data"] == [{"day": "mon", "n": 4}, {"day": "tue", "n": 5}]
    assert content["series"] == {
        "keys": ["n"],
        "indexBy": "day",
        "data": [{"day": "mon", "n": 4}, {"day": "tue", "n": 5}],
    }


@patch("graphboard.engines.executor.execute_sql")
def test_run_graph_without_body_uses_defaults(
    mock_execute_sql: MagicMock, client: TestClient, storage: GraphStorage
) -> None:
    mock_execute_sql.return_value = []
    graph = create_random_graph(
        storage,
        parameters=[{"name": "branch", "type": "text", "defaultValue": "SE"}],
    )

    response = client.post(f"{_base()}/{graph.id}/run")

    assert response.status_code == 200
    assert response.json()["sql"] == "SELECT day, n FROM t WHERE branch = 'SE'"
    assert response.json()["data"] == []


@patch("graphboard.engines.executor.execute_sql")
def test_run_graph_invalid_chart_config(
    mock_execute_sql: MagicMock, client: TestClient, storage: GraphStorage
) -> None:
    mock_execute_sql.return_value = [{"day": "mon", "total": 1}]
    graph = create_random_graph(storage)

    response = client.post(f"{_base()}/{graph.id}/run", json={})

    assert response.status_code == 400
    assert '"n"' in response.json()["detail"]


@patch("graphboard.engines.executor.execute_sql")
def test_run_graph_query_error(
    mock_execute_sql: MagicMock, client: TestClient, storage: GraphStorage
) -> None:
    mock_execute_sql.side_effect = QueryExecutionError("SQL error: Syntax error")
    graph = create_random_graph(storage)

    response = client.post(f"{_base()}/{graph.id}/run", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "SQL error: Syntax error"


def test_run_graph_not_found(client: TestClient) -> None:
    response = client.post(f"{_base()}/graph_nope/run", json={})
    assert response.status_code == 404
