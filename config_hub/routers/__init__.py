from fastapi import APIRouter

from config_hub.routers import (
    dashboard,
    data_dictionary,
    data_quality,
    metadata,
    pipeline,
    reconciliation,
    source_connection,
)

api_router = APIRouter()
api_router.include_router(source_connection.router)
api_router.include_router(pipeline.router)
api_router.include_router(pipeline.temporary_tables_router)
api_router.include_router(data_dictionary.router)
api_router.include_router(reconciliation.router)
api_router.include_router(data_quality.router)
api_router.include_router(metadata.router)
api_router.include_router(dashboard.router)
