"""
API v1 router: aggregates every endpoint module.
"""

from fastapi import APIRouter

from hostel_manager.api.v1.endpoints import (
    assets,
    assistant,
    auth,
    communication,
    dashboard,
    expenses,
    payments,
    portal,
    residents,
    rooms,
)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
        502: {"description": "Upstream Failure"},
    }
)

router.include_router(auth.router)
router.include_router(residents.router)
router.include_router(rooms.router)
router.include_router(payments.router)
router.include_router(expenses.router)
router.include_router(communication.router)
router.include_router(dashboard.router)
router.include_router(assets.router)
router.include_router(assistant.router)
router.include_router(portal.router)


@router.get("/health", tags=["Health"])
def health_check():
    return {"status": "ok"}


__all__ = ["router"]
