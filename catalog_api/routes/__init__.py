"""API routes."""

from fastapi import APIRouter

from catalog_api.routes import catalog

api_router = APIRouter()

# Catalog listings (authors, available copies)
api_router.include_router(catalog.router, prefix="/v1/catalog", tags=["catalog"])
