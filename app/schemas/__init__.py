"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Field rules live next to the request shape
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation
"""

from app.schemas.book import BookPayload, BookResponse
from app.schemas.envelope import AnyEnvelope, Envelope, Meta, Violation

__all__ = [
    # Book schemas
    "BookPayload",
    "BookResponse",
    # Envelope schemas
    "Envelope",
    "AnyEnvelope",
    "Meta",
    "Violation",
]
