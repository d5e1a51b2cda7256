"""
Specs Router

Small endpoints that sit next to the books resource:
- GET /api        : greeting, handy as a smoke test for a deployment
- GET /api/specs  : the OpenAPI document FastAPI generates for this app
"""

from fastapi import APIRouter, Query, Request

router = APIRouter(prefix="/api", tags=["Specs"])


@router.get(
    "",
    summary="Greeting",
    description="Say hi. `name` defaults to `You`.",
)
def greet(
    name: str = Query(default="You", description="Who to greet", examples=["Ada"]),
) -> dict:
    return {"message": f"Hi {name}!"}


@router.get(
    "/specs",
    summary="OpenAPI document",
    description="The OpenAPI schema describing every endpoint of this API.",
)
def read_specs(request: Request) -> dict:
    """Same document as /openapi.json, served under the API prefix."""
    return request.app.openapi()
