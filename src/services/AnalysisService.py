import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool
from tenacity import AsyncRetrying, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from models import ImageAnalysis, PromptStrategy, ResponseMode
from stores.llm.LLMExceptions import VisionProviderError, ProviderNotConfiguredError, ProviderTimeoutError
from stores.llm.LLMInterface import LLMInterface
from stores.llm.templates.template_parser import TemplateParser
from .PromptService import PromptService

logger = logging.getLogger('uvicorn.error')

# Served instead of an error when FALLBACK_ON_ERROR is enabled
FALLBACK_ANALYSIS = ImageAnalysis(
    type="Photo",
    style="Professional portrait photography",
    lighting="Soft natural lighting",
    composition="Centered subject with balanced framing",
    colors="Natural and balanced color palette",
    mood="Neutral and balanced",
    realism="High realism with natural textures",
)

# Word limits passed into the LLM instructions
ANALYSIS_MAX_WORDS = 12
DIRECT_PROMPT_MAX_WORDS = 180


@dataclass
class AnalysisResult:
    analysis: Optional[ImageAnalysis]
    prompt: str
    used_fallback: bool = False


class AnalysisService:

    def __init__(self, app: FastAPI, app_settings, template_parser: TemplateParser):
        self.app = app
        self.app_settings = app_settings
        self.template_parser = template_parser
        self.prompt_service = PromptService(template_parser=template_parser)

    async def get_vision_client(self) -> LLMInterface:
        """Return the cached vision client, building it with exponential backoff on first use."""
        client = getattr(self.app, "vision_client", None)
        if client is not None:
            return client

        # One build at a time; concurrent first requests wait for it
        async with self.app.vision_client_lock:
            client = getattr(self.app, "vision_client", None)
            if client is None:
                client = await self.build_vision_client()
                self.app.vision_client = client
        return client

    async def build_vision_client(self) -> LLMInterface:
        provider = self.app_settings.VISION_BACKEND
        base_delay = self.app_settings.VISION_INIT_RETRY_BASE_DELAY

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.app_settings.VISION_INIT_RETRY_ATTEMPTS),
            wait=wait_exponential(multiplier=base_delay, min=base_delay, max=base_delay * 4),
            retry=retry_if_not_exception_type(ProviderNotConfiguredError),
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                attempt_no = attempt.retry_state.attempt_number
                logger.info(f"Initializing vision backend {provider} (attempt {attempt_no})")
                try:
                    client = await run_in_threadpool(self.app.vision_factory.create, provider)
                except ProviderNotConfiguredError:
                    raise
                except Exception as e:
                    logger.warning(f"Vision backend init attempt {attempt_no} failed: {e}")
                    raise

        return client

    async def call_provider(self, func, *args):
        """Run a blocking provider call in the threadpool, bounded by the configured timeout."""
        timeout = self.app_settings.VISION_TIMEOUT_SECONDS
        try:
            return await asyncio.wait_for(run_in_threadpool(func, *args), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ProviderTimeoutError(timeout) from e

    def wants_direct_prompt(self, client: LLMInterface) -> bool:
        if self.app_settings.PROMPT_STRATEGY != PromptStrategy.DIRECT.value:
            return False
        if not client.supports_direct_prompt:
            logger.warning(f"{client.__class__.__name__} cannot write prompts directly, using the template.")
            return False
        return True

    async def run_provider(self, image_bytes: bytes, mime_type: str) -> AnalysisResult:
        client = await self.get_vision_client()
        full_response = self.app_settings.RESPONSE_MODE != ResponseMode.PROMPT_ONLY.value
        direct = self.wants_direct_prompt(client)

        analysis = None
        if full_response or not direct:
            instruction = self.template_parser.get("vision", "analysis_prompt", {"max_words": ANALYSIS_MAX_WORDS})
            analysis = await self.call_provider(client.analyze_image, image_bytes, mime_type, instruction)
            logger.info(f"Vision analysis complete: {analysis.type}, {analysis.style}")

        if direct:
            instruction = self.template_parser.get("vision", "direct_prompt", {"max_words": DIRECT_PROMPT_MAX_WORDS})
            prompt = await self.call_provider(client.generate_prompt, image_bytes, mime_type, instruction)
        else:
            prompt = self.prompt_service.render(analysis)

        return AnalysisResult(analysis=analysis, prompt=prompt)

    def fallback_result(self) -> AnalysisResult:
        analysis = FALLBACK_ANALYSIS.model_copy()
        return AnalysisResult(analysis=analysis, prompt=self.prompt_service.render(analysis), used_fallback=True)

    async def analyze(self, image_bytes: bytes, mime_type: str,
                      width: Optional[int] = None, height: Optional[int] = None) -> AnalysisResult:
        try:
            result = await self.run_provider(image_bytes, mime_type)
        except VisionProviderError as e:
            if not self.app_settings.FALLBACK_ON_ERROR:
                raise
            logger.error(f"Vision provider failed, serving fallback prompt: {e}")
            result = self.fallback_result()

        if result.analysis is not None:
            # Prefer the provider's own measurement of the image
            if result.analysis.image_width is None or result.analysis.image_height is None:
                result.analysis.image_width = width
                result.analysis.image_height = height
            width = result.analysis.image_width
            height = result.analysis.image_height

        result.prompt = self.prompt_service.finalize(result.prompt, width, height)
        return result
