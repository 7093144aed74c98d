from fastapi import APIRouter

from trackii.api.v1.endpoints import auth
from trackii.api.v1.endpoints import profiles
from trackii.api.v1.endpoints import logs
from trackii.api.v1.endpoints import prescriptions
from trackii.api.v1.endpoints import reminders
from trackii.api.v1.endpoints import assistant

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
api_router.include_router(prescriptions.router, prefix="/prescriptions", tags=["prescriptions"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
api_router.include_router(assistant.router, prefix="/ai", tags=["assistant"])
