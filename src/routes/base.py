from fastapi import APIRouter, Depends
from config.settings import get_settings, Settings

base_router = APIRouter(
    tags=["base"],
)

@base_router.get("/health")
async def health(app_settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "app_name": app_settings.APP_NAME,
        "app_version": app_settings.APP_VERSION,
        "vision_backend": app_settings.VISION_BACKEND,
    }
