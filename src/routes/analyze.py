# FILE: src/routes/analyze.py

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response
import logging
import time
import uuid

from config.settings import get_settings, Settings
from controllers.ImageController import ImageController
from models import ResponseSignal, ResponseMode
from services.AnalysisService import AnalysisService
from services.ErrorTranslator import translate_error
from services.PromptService import DEFAULT_TIPS
from .schemes.analyze import AnalyzeRequest, AnalyzeResponse, ErrorResponse

logger = logging.getLogger('uvicorn.error')

analyze_router = APIRouter(
    prefix="/api",
    tags=["api", "analyze"],
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def read_analyze_request(request: Request):
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return AnalyzeRequest(**body)


@analyze_router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_image(request: Request, app_settings: Settings = Depends(get_settings)):
    """Turn an uploaded image (data URI) into a style prompt."""
    request_id = uuid.uuid4().hex[:7]
    start_time = time.perf_counter()
    environment = "Vercel (Production)" if app_settings.VERCEL else "Local"

    logger.info(f"[{request_id}] ======== REQUEST START ========")
    logger.info(f"[{request_id}] Environment: {environment}, backend: {app_settings.VISION_BACKEND}")

    try:
        analyze_request = await read_analyze_request(request)
        image = analyze_request.image if analyze_request else None
        logger.info(f"[{request_id}] Image data length: {len(image) if isinstance(image, str) else 0}")

        image_controller = ImageController(app_settings)
        is_valid, validation_error = image_controller.validate_image(image)
        if not is_valid:
            logger.info(f"[{request_id}] Validation failed: {validation_error}")
            return error_response(status.HTTP_400_BAD_REQUEST, validation_error)

        image_bytes, mime_type = image_controller.decode_image(image)
        if image_bytes is None:
            logger.info(f"[{request_id}] Validation failed: undecodable base64 payload")
            return error_response(status.HTTP_400_BAD_REQUEST, ResponseSignal.INVALID_IMAGE_DATA.value)

        width, height = image_controller.get_image_size(image_bytes)
        logger.info(f"[{request_id}] Validation passed ({mime_type}, {width}x{height})")

        analysis_service = AnalysisService(
            app=request.app,
            app_settings=app_settings,
            template_parser=request.app.template_parser,
        )
        result = await analysis_service.analyze(image_bytes, mime_type, width=width, height=height)
        logger.info(f"[{request_id}] Prompt complete, length: {len(result.prompt)} chars"
                    + (" (fallback)" if result.used_fallback else ""))

        if app_settings.RESPONSE_MODE == ResponseMode.PROMPT_ONLY.value or result.analysis is None:
            content = {"success": True, "prompt": result.prompt}
        else:
            content = AnalyzeResponse(
                analysis=result.analysis.to_response(),
                prompt=result.prompt,
                tips=DEFAULT_TIPS,
            ).model_dump()

        duration = (time.perf_counter() - start_time) * 1000
        logger.info(f"[{request_id}] ======== SUCCESS ({duration:.0f}ms) ========")
        return JSONResponse(content=content)

    except Exception as e:
        duration = (time.perf_counter() - start_time) * 1000
        logger.error(f"[{request_id}] ======== ERROR ({duration:.0f}ms) ========")
        logger.error(f"[{request_id}] {e.__class__.__name__}: {e}", exc_info=True)

        message = translate_error(e)
        logger.error(f"[{request_id}] Returning error: {message}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


@analyze_router.options("/analyze")
async def analyze_options():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
