from fastapi import APIRouter

from .routes.api import health, metadata

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(metadata.router)
