from typing import Annotated

from fastapi import Depends

from graphboard.core.storage import GraphStorage, get_graph_storage
from graphboard.engines.executor import GraphExecutor


def get_storage() -> GraphStorage:
    return get_graph_storage()


def get_executor() -> GraphExecutor:
    return GraphExecutor()


StorageDep = Annotated[GraphStorage, Depends(get_storage)]
ExecutorDep = Annotated[GraphExecutor, Depends(get_executor)]
