from app.routes.auth import router as auth_router
from app.routes.trips import router as trips_router

__all__ = [
    "auth_router",
    "trips_router",
]
