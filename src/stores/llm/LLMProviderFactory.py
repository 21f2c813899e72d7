from .LLMEnums import LLMEnums
from .LLMExceptions import ProviderNotConfiguredError
from .providers.AzureVisionProvider import AzureVisionProvider
from .providers.GoogleVisionProvider import GoogleVisionProvider
from .providers.OpenAIProvider import OpenAIProvider
from .providers.AzureOpenAIProvider import AzureOpenAIProvider
from .providers.ZAIProvider import ZAIProvider
from .providers.GroqProvider import GroqProvider
from .providers.GoogleProvider import GoogleProvider
from services.StyleClassifier import StyleClassifier

# Used when VISION_MODEL_ID is not set
DEFAULT_VISION_MODELS = {
    LLMEnums.OPENAI.value: "gpt-4o-mini",
    LLMEnums.ZAI.value: "glm-4.5v",
    LLMEnums.GROQ.value: "meta-llama/llama-4-scout-17b-16e-instruct",
    LLMEnums.GOOGLE.value: "gemini-1.5-flash",
}

class LLMProviderFactory:
    def __init__(self, config):
        self.config = config

    def chat_defaults(self) -> dict:
        return {
            "default_input_max_characters": self.config.INPUT_DEFAULT_MAX_CHARACTERS,
            "default_generation_max_output_tokens": self.config.GENERATION_DEFAULT_MAX_TOKENS,
            "default_generation_temperature": self.config.GENERATION_DEFAULT_TEMPERATURE,
            "timeout": self.config.VISION_TIMEOUT_SECONDS,
        }

    def build(self, provider: str):
        if provider == LLMEnums.AZURE_VISION.value:
            return AzureVisionProvider(
                api_key=self.config.AZURE_VISION_KEY,
                endpoint=self.config.AZURE_ENDPOINT,
                classifier=StyleClassifier(),
                timeout=self.config.VISION_TIMEOUT_SECONDS,
            )

        if provider == LLMEnums.GOOGLE_VISION.value:
            return GoogleVisionProvider(
                api_key=self.config.GOOGLE_VISION_API_KEY,
                classifier=StyleClassifier(),
                timeout=self.config.VISION_TIMEOUT_SECONDS,
            )

        if provider == LLMEnums.OPENAI.value:
            return OpenAIProvider(api_key=self.config.OPENAI_API_KEY, **self.chat_defaults())

        if provider == LLMEnums.AZURE_OPENAI.value:
            return AzureOpenAIProvider(
                api_key=self.config.AZURE_OPENAI_KEY,
                endpoint=self.config.AZURE_OPENAI_ENDPOINT,
                deployment=self.config.AZURE_OPENAI_DEPLOYMENT,
                api_version=self.config.AZURE_OPENAI_API_VERSION,
                **self.chat_defaults(),
            )

        if provider == LLMEnums.ZAI.value:
            return ZAIProvider(
                api_key=self.config.ZAI_API_KEY,
                api_url=self.config.ZAI_BASE_URL,
                chat_id=self.config.ZAI_CHAT_ID,
                user_id=self.config.ZAI_USER_ID,
                **self.chat_defaults(),
            )

        if provider == LLMEnums.GROQ.value:
            return GroqProvider(api_key=self.config.GROQ_API_KEY, **self.chat_defaults())

        if provider == LLMEnums.GOOGLE.value:
            return GoogleProvider(api_key=self.config.GOOGLE_API_KEY, **self.chat_defaults())

        raise ProviderNotConfiguredError(f"Unsupported vision backend: {provider}")

    def create(self, provider: str):
        provider = (provider or "").upper()
        client = self.build(provider)

        model_id = self.config.VISION_MODEL_ID or DEFAULT_VISION_MODELS.get(provider)
        # Azure OpenAI selects its model through the deployment name
        if model_id and provider != LLMEnums.AZURE_OPENAI.value:
            client.set_generation_model(model_id=model_id)
        return client
