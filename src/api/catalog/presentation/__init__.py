"""Catalog presentation layer - aggregate-based organization.

Each aggregate package (hoagies, comments) contains its own routes and
models.
"""

from __future__ import annotations

from fastapi import APIRouter

from catalog.presentation.comments.routes import router as comments_router
from catalog.presentation.hoagies.routes import router as hoagies_router

router = APIRouter()

router.include_router(hoagies_router)
router.include_router(comments_router)

__all__ = ["router"]
