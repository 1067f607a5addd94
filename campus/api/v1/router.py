"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from campus.api.v1.dependencies.
"""

from fastapi import APIRouter

from campus.api.v1.endpoints import (
    applications,
    documents,
    enrollments,
    health,
    offerings,
    provisioning,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(provisioning.router, tags=["provisioning"])
api_router.include_router(
    applications.router, prefix="/applications", tags=["applications"]
)
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(enrollments.router, tags=["enrollments"])
api_router.include_router(offerings.router, prefix="/offerings", tags=["offerings"])
