"""
Ecodeli Admin — FastAPI application entry point.

Configures logging, middleware and error handlers, and registers the
admin and public API routers.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecodeli_admin.api import (
    analytics,
    auth,
    bookings,
    box_rentals,
    contracts,
    dashboard,
    documents,
    matches,
    merchants,
    packages,
    payments,
    public,
    rides,
    services,
    storage_boxes,
    subscriptions,
    users,
)
from ecodeli_admin.api.deps import get_current_admin
from ecodeli_admin.config import settings
from ecodeli_admin.core.errors import register_exception_handlers
from ecodeli_admin.core.logging import RequestLoggingMiddleware, setup_logging

VERSION = "0.1.0"

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    from ecodeli_admin.database import engine
    from ecodeli_admin.redis_client import redis

    yield

    # Shutdown: close connections
    await engine.dispose()
    await redis.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Back-office API for the Ecodeli delivery and services platform.",
    version=VERSION,
    lifespan=lifespan,
)

# --- Middleware ---
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Routers ---
admin_only = [Depends(get_current_admin)]

app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/api/users", tags=["Users"], dependencies=admin_only)
app.include_router(contracts.router, prefix="/api/contracts", tags=["Contracts"], dependencies=admin_only)
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"], dependencies=admin_only)
app.include_router(matches.router, prefix="/api/matches", tags=["Matches"], dependencies=admin_only)
app.include_router(packages.router, prefix="/api/packages", tags=["Packages"], dependencies=admin_only)
app.include_router(rides.router, prefix="/api/rides", tags=["Rides"], dependencies=admin_only)
app.include_router(payments.router, prefix="/api/payments", tags=["Payments"], dependencies=admin_only)
app.include_router(merchants.router, prefix="/api/merchants", tags=["Merchants"], dependencies=admin_only)
app.include_router(
    subscriptions.router, prefix="/api/subscriptions", tags=["Subscriptions"], dependencies=admin_only,
)
app.include_router(analytics.router, prefix="/api/analytics", tags=["Analytics"], dependencies=admin_only)
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=admin_only)
app.include_router(services.router, prefix="/api/services", tags=["Services"], dependencies=admin_only)
app.include_router(bookings.router, prefix="/api/bookings", tags=["Bookings"], dependencies=admin_only)
app.include_router(
    storage_boxes.router, prefix="/api/storage-boxes", tags=["Storage Boxes"], dependencies=admin_only,
)
app.include_router(box_rentals.router, prefix="/api/box-rentals", tags=["Box Rentals"], dependencies=admin_only)
app.include_router(public.router, prefix="/api/public", tags=["Public"])


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": VERSION,
    }
