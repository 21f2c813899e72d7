# src/stores/llm/providers/ZAIProvider.py

from openai import OpenAI

from .OpenAIProvider import OpenAIProvider
from ..LLMExceptions import ProviderNotConfiguredError

class ZAIProvider(OpenAIProvider):
    """
    The ZAI chat/VLM gateway. It speaks the OpenAI chat-completions protocol
    but routes by chat and user ids sent as headers.
    """

    provider_name = "ZAI"

    def __init__(self, api_key: str, api_url: str, chat_id: str = None, user_id: str = None, **kwargs):

        if kwargs.get("client") is None and (not api_key or not api_url):
            raise ProviderNotConfiguredError("ZAI is not configured (ZAI_BASE_URL / ZAI_API_KEY).")

        self.chat_id = chat_id
        self.user_id = user_id
        super().__init__(api_key=api_key, api_url=api_url, **kwargs)

    def create_client(self):
        headers = {}
        if self.chat_id:
            headers["X-Chat-Id"] = self.chat_id
        if self.user_id:
            headers["X-User-Id"] = self.user_id

        return OpenAI(
            base_url=self.api_url,
            api_key=self.api_key,
            default_headers=headers,
            timeout=self.timeout,
            max_retries=0,
        )
