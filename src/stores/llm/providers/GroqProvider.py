import groq
from groq import Groq

from .OpenAIProvider import OpenAIProvider
from ..LLMEnums import GroqEnums

class GroqProvider(OpenAIProvider):
    """
    Groq-hosted vision models (Llama 4 Scout and friends). The Groq SDK
    mirrors the OpenAI chat-completions surface, including image_url parts.
    """

    provider_name = "Groq"
    sdk = groq

    def __init__(self, api_key: str, **kwargs):
        super().__init__(api_key=api_key, **kwargs)
        self.enums = GroqEnums

    def create_client(self):
        return Groq(api_key=self.api_key, timeout=self.timeout, max_retries=0)
