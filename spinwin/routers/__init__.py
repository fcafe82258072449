# Routers package
from . import verification_router
from . import offers_router
from . import admin_router
from . import maintenance_router

__all__ = [
    "verification_router",
    "offers_router",
    "admin_router",
    "maintenance_router",
]
