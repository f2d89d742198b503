"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import health, perks

router = APIRouter()

router.include_router(perks.router, prefix="/perks", tags=["perks"])
router.include_router(health.router, prefix="/health", tags=["health"])
