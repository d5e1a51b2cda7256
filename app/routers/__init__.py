"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- books.py: /api/v1/books, the books resource
- specs.py: /api greeting and /api/specs OpenAPI document

Each router is imported and registered in main.py.
"""

from app.routers.books import router as books_router
from app.routers.specs import router as specs_router

__all__ = [
    "books_router",
    "specs_router",
]
