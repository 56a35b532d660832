"""Endpoint for the current authenticated caller."""

from fastapi import APIRouter, Depends

from api.deps import require_authenticated
from auth.schemas import AuthenticatedIdentity

router = APIRouter()


@router.get("/me", response_model=AuthenticatedIdentity)
async def get_me(identity: AuthenticatedIdentity = Depends(require_authenticated)):
    """Return the identity resolved for this request (no role check)."""
    return identity
