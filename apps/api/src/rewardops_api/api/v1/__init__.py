from fastapi import APIRouter

from .endpoints import health, observability, rewards_curation

router = APIRouter()
router.include_router(health.router, tags=["Health"])
router.include_router(rewards_curation.router)
router.include_router(observability.router)
