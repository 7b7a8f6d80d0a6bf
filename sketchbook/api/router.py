"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from sketchbook.api import health, sketches

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(sketches.router)
