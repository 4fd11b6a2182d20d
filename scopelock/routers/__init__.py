from scopelock.routers.auth import router as auth_router
from scopelock.routers.proposals import router as proposals_router
from scopelock.routers.public import router as public_router
from scopelock.routers.scope_alert import router as scope_alert_router

__all__ = [
    "auth_router",
    "proposals_router",
    "public_router",
    "scope_alert_router",
]
