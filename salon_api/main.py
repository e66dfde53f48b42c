# salon_api/main.py

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from .bookings import AppointmentNotFound
from .config import get_settings
from .core import BookingError
from .data import seed_services
from .db import create_db_and_tables, engine
from .routers import (
    appointments_routes,
    auth_routes,
    services_routes,
    staff_routes,
    users_routes,
)

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configures logging to stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    create_db_and_tables()
    if settings.seed_services:
        with Session(engine) as session:
            seed_services(session)
    grid = settings.time_grid()
    logger.info(
        "Salon open %s-%s, %d-minute slots, closed weekdays %s",
        grid.business_start, grid.business_end, grid.granularity_minutes,
        sorted(grid.closed_weekdays),
    )
    yield


def create_app() -> FastAPI:
    setup_logging(get_settings().log_level)

    app = FastAPI(title="Salon Booking API", lifespan=lifespan)

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )

    @app.exception_handler(AppointmentNotFound)
    async def appointment_not_found_handler(request: Request, exc: AppointmentNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(auth_routes.router)
    app.include_router(users_routes.router)
    app.include_router(services_routes.router)
    app.include_router(staff_routes.router)
    app.include_router(appointments_routes.router)

    return app


app = create_app()
