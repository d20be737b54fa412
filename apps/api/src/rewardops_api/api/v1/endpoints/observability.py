"""Observability endpoints for reward catalog curation."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from rewardops_api.api.dependencies.security import require_admin_api_key
from rewardops_api.observability.curation import get_curation_store


router = APIRouter(prefix="/observability", tags=["Observability"])


@router.get(
    "/curation",
    dependencies=[Depends(require_admin_api_key)],
    summary="Catalog curation observability snapshot",
)
async def get_curation_snapshot() -> dict[str, object]:
    """Retrieve aggregated bulk command and stock metrics (requires admin API key)."""
    store = get_curation_store()
    return store.snapshot().as_dict()
