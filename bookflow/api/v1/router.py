"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Services come
from bookflow.api.v1.dependencies (no manual construction in routes).
"""

from fastapi import APIRouter

from bookflow.api.v1.endpoints import events, health, workflows

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
