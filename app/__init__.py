"""
Books API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine and session factory
- main.py: FastAPI application factory and exception handlers
- dependencies.py: Dependency injection functions
- exceptions.py: Error taxonomy rendered into the response envelope
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Query normalization, validation, gateways, book operations
- utils/: Response envelope builder
"""

__version__ = "0.1.0"
