# src/stores/llm/providers/OpenAIProvider.py

import base64
import logging
from typing import Union

import openai
from openai import OpenAI

from ..LLMInterface import LLMInterface
from ..LLMEnums import OpenAIEnums
from ..LLMExceptions import (
    ProviderNotConfiguredError, ProviderHTTPError, ProviderTimeoutError,
    EmptyResponseError, VisionProviderError,
)
from ..parsers import parse_analysis_reply, parse_prompt_reply
from models.ImageAnalysis import ImageAnalysis

class OpenAIProvider(LLMInterface):
    """
    Vision analysis through an OpenAI-compatible chat completions API.
    The model is asked for a JSON object with the analysis fields.
    """

    provider_name = "OpenAI"
    supports_direct_prompt = True

    # SDK module whose exception types the client raises
    sdk = openai

    def __init__(self, api_key: str, api_url: str = None,
                       default_input_max_characters: int = 4000,
                       default_generation_max_output_tokens: int = 800,
                       default_generation_temperature: float = 0.3,
                       timeout: float = 30.0, client=None):

        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

        self.default_input_max_characters = default_input_max_characters
        self.default_generation_max_output_tokens = default_generation_max_output_tokens
        self.default_generation_temperature = default_generation_temperature

        self.generation_model_id = None

        if client is None:
            if not self.api_key:
                raise ProviderNotConfiguredError(f"{self.provider_name} API key not provided.")
            client = self.create_client()
        self.client = client

        self.enums = OpenAIEnums
        self.logger = logging.getLogger(__name__)
        self.logger.info(f"{self.__class__.__name__} initialized.")

    def create_client(self):
        return OpenAI(api_key=self.api_key, base_url=self.api_url, timeout=self.timeout, max_retries=0)

    def set_generation_model(self, model_id: str):
        self.generation_model_id = model_id
        self.logger.info(f"{self.provider_name} vision model set to: {model_id}")

    def process_text(self, text: str):
        return text[:self.default_input_max_characters].strip()

    def construct_prompt(self, prompt, role: str):
        return {"role": role, "content": prompt}

    def construct_image_message(self, text: str, image_bytes: bytes, mime_type: str):
        image_data_base64 = base64.b64encode(image_bytes).decode("utf-8")
        return self.construct_prompt(
            prompt=[
                {"type": "text", "text": self.process_text(text)},
                {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{image_data_base64}"}},
            ],
            role=self.enums.USER.value,
        )

    def build_messages(self, prompt: Union[str, dict], image_bytes: bytes, mime_type: str) -> list:
        messages = []
        if isinstance(prompt, dict):
            if prompt.get("system"):
                messages.append(self.construct_prompt(prompt=prompt["system"], role=self.enums.SYSTEM.value))
            user_text = prompt.get("user", "")
        else:
            user_text = prompt or ""
        messages.append(self.construct_image_message(user_text, image_bytes, mime_type))
        return messages

    def complete(self, messages: list, json_mode: bool = False) -> str:
        if not self.generation_model_id:
            raise ProviderNotConfiguredError(f"{self.provider_name} vision model was not set.")

        kwargs = {
            "model": self.generation_model_id,
            "messages": messages,
            "max_tokens": self.default_generation_max_output_tokens,
            "temperature": self.default_generation_temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**kwargs)
        except self.sdk.APITimeoutError as e:
            raise ProviderTimeoutError(self.timeout) from e
        except self.sdk.APIStatusError as e:
            self.logger.error(f"{self.provider_name} API error {e.status_code}: {e.message}")
            raise ProviderHTTPError(self.provider_name, e.status_code, e.message) from e
        except self.sdk.APIError as e:
            self.logger.error(f"Exception during {self.provider_name} API call: {e}")
            raise VisionProviderError(f"{self.provider_name} API failed: {e}") from e

        if not response or not response.choices or not response.choices[0].message:
            self.logger.error(f"Empty response while calling {self.provider_name}.")
            raise EmptyResponseError(self.provider_name)
        return response.choices[0].message.content

    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: Union[str, dict] = None) -> ImageAnalysis:
        messages = self.build_messages(prompt, image_bytes, mime_type)
        content = self.complete(messages, json_mode=True)
        return parse_analysis_reply(content, self.provider_name)

    def generate_prompt(self, image_bytes: bytes, mime_type: str, prompt: Union[str, dict]) -> str:
        messages = self.build_messages(prompt, image_bytes, mime_type)
        content = self.complete(messages)
        return parse_prompt_reply(content, self.provider_name)

    def close(self):
        if hasattr(self.client, "close"):
            self.client.close()
