"""API route modules."""

from stormtrooper.api.routes.auth import router as auth_router
from stormtrooper.api.routes.streams import router as streams_router
from stormtrooper.api.routes.users import router as users_router

__all__ = ["auth_router", "streams_router", "users_router"]
