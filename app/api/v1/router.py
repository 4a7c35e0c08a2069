"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the HR access and leave service
"""
from fastapi import APIRouter

from app.api.v1 import admin, auth, leave_management

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(auth.router)
router.include_router(admin.router)
router.include_router(leave_management.router)


@router.get("/health", tags=["Health"])
def health_check():
    """Liveness check."""
    return {"status": "ok"}
