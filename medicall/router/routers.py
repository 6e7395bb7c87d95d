# medicall/router/routers.py

from fastapi import FastAPI
from medicall.auth.auth_controller import router as auth_router
from medicall.modules.user.user_controller import router as user_router
from medicall.modules.patients.patients_controller import router as patients_router
from medicall.modules.doctors.doctors_controller import router as doctors_router
from medicall.modules.bookings.bookings_controller import router as bookings_router
from medicall.modules.call_logs.call_logs_controller import router as call_logs_router
from medicall.modules.webhooks.webhooks_controller import router as webhooks_router
from medicall.modules.uploads.uploads_controller import router as uploads_router
from medicall.modules.dashboard.dashboard_controller import router as dashboard_router

def include_routers(app: FastAPI) -> None:
    """Include all API routers in the FastAPI application."""
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(patients_router)
    app.include_router(doctors_router)
    app.include_router(bookings_router)
    app.include_router(call_logs_router)
    app.include_router(webhooks_router)
    app.include_router(uploads_router)
    app.include_router(dashboard_router)
