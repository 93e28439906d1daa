"""
Graph management: list, create, get, update, delete, run.

Graphs are stored one JSON file each (see core.storage).
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from graphboard.api.deps import ExecutorDep, StorageDep
from graphboard.core.storage import generate_graph_id
from graphboard.models import DEFAULT_LOCATION, GraphConfig
from graphboard.schemas import GraphCreate, GraphRunIn, GraphRunOut, GraphUpdate, Message

_log = logging.getLogger(__name__)

router = APIRouter(prefix="/graphs", tags=["graphs"])


def _get_or_404(storage: StorageDep, id: str) -> GraphConfig:
    graph = storage.get_graph(id)
    if graph is None:
        raise HTTPException(status_code=404, detail="Graph not found")
    return graph


@router.get("", response_model=list[GraphConfig], response_model_exclude_none=True)
def list_graphs(storage: StorageDep) -> Any:
    """All stored graphs."""
    return storage.list_graphs()


@router.post("", response_model=GraphConfig, response_model_exclude_none=True)
def create_graph(storage: StorageDep, body: GraphCreate) -> Any:
    """Create a graph with a generated id. Location defaults to EU."""
    graph = GraphConfig(
        id=generate_graph_id(),
        name=body.name,
        query=body.query,
        location=body.location or DEFAULT_LOCATION,
        chart_type=body.chart_type,
        chart_config=body.chart_config,
        parameters=body.parameters,
    )
    storage.save_graph(graph)
    _log.info("Created graph %s (%s)", graph.id, graph.name)
    return graph


@router.get("/{id}", response_model=GraphConfig, response_model_exclude_none=True)
def get_graph(storage: StorageDep, id: str) -> Any:
    return _get_or_404(storage, id)


@router.put("/{id}", response_model=GraphConfig, response_model_exclude_none=True)
def update_graph(storage: StorageDep, id: str, body: GraphUpdate) -> Any:
    """Update a graph; fields omitted from the body keep their stored value."""
    graph = _get_or_404(storage, id)
    merged = graph.model_dump(by_alias=False)
    merged.update(body.model_dump(by_alias=False, exclude_unset=True, exclude_none=True))
    merged["id"] = id
    updated = GraphConfig.model_validate(merged)
    storage.save_graph(updated)
    return updated


@router.delete("/{id}", response_model=Message)
def delete_graph(storage: StorageDep, id: str) -> Any:
    if not storage.delete_graph(id):
        raise HTTPException(status_code=404, detail="Graph not found")
    return Message(message="Graph deleted successfully")


@router.post("/{id}/run", response_model=GraphRunOut)
def run_graph(
    storage: StorageDep,
    executor: ExecutorDep,
    id: str,
    body: GraphRunIn | None = None,
) -> Any:
    """
    Re-run the graph's query and return rows plus chart-ready data.

    ``parameters`` in the body override the graph's parameter defaults.
    Query and chart-config failures are answered with 400 by the app handlers.
    """
    graph = _get_or_404(storage, id)
    values = body.parameters if body is not None else {}
    out = executor.run_graph(graph, values)
    return GraphRunOut.model_validate(out)
