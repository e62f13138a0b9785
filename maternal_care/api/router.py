from fastapi import APIRouter

from maternal_care.api.routes import admin, pregnancy, reminders

api_router = APIRouter()

api_router.include_router(pregnancy.router)
api_router.include_router(reminders.router)
api_router.include_router(admin.router)
