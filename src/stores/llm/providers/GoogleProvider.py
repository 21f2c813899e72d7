# src/stores/llm/providers/GoogleProvider.py

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
import logging
from typing import Union

from ..LLMInterface import LLMInterface
from ..LLMEnums import GoogleEnums
from ..LLMExceptions import (
    ProviderNotConfiguredError, ProviderHTTPError, ProviderTimeoutError,
    EmptyResponseError,
)
from ..parsers import parse_analysis_reply, parse_prompt_reply
from models.ImageAnalysis import ImageAnalysis

class GoogleProvider(LLMInterface):
    """
    Vision analysis with Google's Gemini models.
    """

    provider_name = "Gemini"
    supports_direct_prompt = True

    def __init__(self, api_key: str,
                       default_input_max_characters: int = 4000,
                       default_generation_max_output_tokens: int = 800,
                       default_generation_temperature: float = 0.3,
                       timeout: float = 30.0):

        if not api_key:
            raise ProviderNotConfiguredError("Google API key not provided.")

        genai.configure(api_key=api_key)

        self.timeout = timeout
        self.default_input_max_characters = default_input_max_characters
        self.default_generation_max_output_tokens = default_generation_max_output_tokens
        self.default_generation_temperature = default_generation_temperature

        self.generation_model_id = None

        self.enums = GoogleEnums
        self.logger = logging.getLogger(__name__)
        self.logger.info("GoogleProvider initialized.")

    def set_generation_model(self, model_id: str):
        self.generation_model_id = model_id
        self.logger.info(f"Google vision model set to: {model_id}")

    def process_text(self, text: str):
        return text[:self.default_input_max_characters].strip()

    def construct_prompt(self, prompt: str, image_bytes: bytes, mime_type: str):
        return {
            "role": self.enums.USER.value,
            "parts": [self.process_text(prompt), {"mime_type": mime_type, "data": image_bytes}],
        }

    def generate(self, prompt: Union[str, dict], image_bytes: bytes, mime_type: str, json_mode: bool = False) -> str:
        if not self.generation_model_id:
            raise ProviderNotConfiguredError("Google vision model was not set.")

        # Gemini takes the system text as a model-level instruction rather than a chat turn
        system_instruction = None
        user_text = prompt or ""
        if isinstance(prompt, dict):
            system_instruction = prompt.get("system")
            user_text = prompt.get("user", "")

        model = genai.GenerativeModel(self.generation_model_id, system_instruction=system_instruction)
        generation_config = genai.types.GenerationConfig(
            max_output_tokens=self.default_generation_max_output_tokens,
            temperature=self.default_generation_temperature,
            response_mime_type="application/json" if json_mode else "text/plain",
        )

        try:
            response = model.generate_content(
                [self.construct_prompt(user_text, image_bytes, mime_type)],
                generation_config=generation_config,
                request_options={"timeout": self.timeout},
            )
        except google_exceptions.DeadlineExceeded as e:
            raise ProviderTimeoutError(self.timeout) from e
        except google_exceptions.GoogleAPICallError as e:
            self.logger.error(f"Exception during Google API call: {e}")
            raise ProviderHTTPError(self.provider_name, int(e.code or 500), e.message) from e

        try:
            return response.text
        except ValueError as e:
            # Raised when the candidate was blocked or carries no text part
            self.logger.error(f"Google returned no text: {e}")
            raise EmptyResponseError(self.provider_name) from e

    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: Union[str, dict] = None) -> ImageAnalysis:
        content = self.generate(prompt, image_bytes, mime_type, json_mode=True)
        return parse_analysis_reply(content, self.provider_name)

    def generate_prompt(self, image_bytes: bytes, mime_type: str, prompt: Union[str, dict]) -> str:
        content = self.generate(prompt, image_bytes, mime_type)
        return parse_prompt_reply(content, self.provider_name)
