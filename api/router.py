"""Main API router that includes versioned routers."""

from fastapi import APIRouter

from api.v1 import health, me, telegram
from api.v1.admin import contacts as admin_contacts
from api.v1.admin import session as admin_session

# Main API router
api_router = APIRouter()

# Include v1 routers
v1_router = APIRouter(prefix="/v1")
v1_router.include_router(health.router, tags=["health"])
v1_router.include_router(telegram.router, tags=["telegram"])
v1_router.include_router(me.router, tags=["users"])
v1_router.include_router(admin_session.router, tags=["admin"])
v1_router.include_router(admin_contacts.router, tags=["admin"])

api_router.include_router(v1_router)
