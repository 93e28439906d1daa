from fastapi import APIRouter

from graphboard.api.routes import graphs, query, utils

api_router = APIRouter()
api_router.include_router(graphs.router)
api_router.include_router(query.router)
api_router.include_router(utils.router)
