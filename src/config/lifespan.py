import asyncio
from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from .settings import get_settings
from stores.llm.LLMProviderFactory import LLMProviderFactory
from stores.llm.templates.template_parser import TemplateParser

logger = logging.getLogger('uvicorn.error')

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages the application's startup and shutdown events.
    """
    # --- Startup ---
    settings = get_settings()
    environment = "Vercel (Production)" if settings.VERCEL else "Local"
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({environment}), vision backend: {settings.VISION_BACKEND}")

    # Built on first use by services.AnalysisService
    app.vision_factory = LLMProviderFactory(settings)
    app.vision_client = None
    app.vision_client_lock = asyncio.Lock()

    # Setup Template Parser
    app.template_parser = TemplateParser(language=settings.PRIMARY_LANG, default_language=settings.DEFAULT_LANG)

    yield

    # --- Shutdown ---
    client = app.vision_client
    if client is not None and hasattr(client, "close"):
        client.close()
    app.vision_client = None
