"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from internship_registry.api.routes.crud import RESOURCES, build_crud_router
from internship_registry.api.routes.upload_routes import router as upload_router

# Main API router
api_router = APIRouter()

# Spreadsheet import
api_router.include_router(upload_router)

# One CRUD router per table
for resource in RESOURCES:
    api_router.include_router(build_crud_router(resource))
