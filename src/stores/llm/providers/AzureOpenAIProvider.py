# src/stores/llm/providers/AzureOpenAIProvider.py

from openai import AzureOpenAI

from .OpenAIProvider import OpenAIProvider
from ..LLMExceptions import ProviderNotConfiguredError

class AzureOpenAIProvider(OpenAIProvider):
    """
    Same chat-completions flow as OpenAIProvider, against an Azure OpenAI
    resource. The deployment name is used as the model id.
    """

    provider_name = "Azure OpenAI"

    def __init__(self, api_key: str, endpoint: str, deployment: str,
                       api_version: str = "2024-06-01", **kwargs):

        if kwargs.get("client") is None and (not api_key or not endpoint or not deployment):
            raise ProviderNotConfiguredError(
                "Azure OpenAI is not configured (AZURE_OPENAI_ENDPOINT / AZURE_OPENAI_KEY / AZURE_OPENAI_DEPLOYMENT)."
            )

        self.endpoint = endpoint
        self.api_version = api_version
        super().__init__(api_key=api_key, **kwargs)
        self.set_generation_model(deployment)

    def create_client(self):
        return AzureOpenAI(
            api_key=self.api_key,
            azure_endpoint=self.endpoint,
            api_version=self.api_version,
            timeout=self.timeout,
            max_retries=0,
        )
