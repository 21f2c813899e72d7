from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    APP_NAME: str = "style-prompt-service"
    APP_VERSION: str = "0.1.0"

    # Vision backend selection (see stores.llm.LLMEnums)
    VISION_BACKEND: str = "AZURE_VISION"
    VISION_MODEL_ID: Optional[str] = None

    PRIMARY_LANG: str = "en"
    DEFAULT_LANG: str = "en"

    # "full" -> {success, analysis, prompt, tips}; "prompt_only" -> {success, prompt}
    RESPONSE_MODE: str = "full"
    # "template" renders from the analysis; "direct" lets an LLM backend write the prompt
    PROMPT_STRATEGY: str = "template"
    FALLBACK_ON_ERROR: bool = False

    VISION_TIMEOUT_SECONDS: float = 30.0
    VISION_INIT_RETRY_ATTEMPTS: int = 3
    VISION_INIT_RETRY_BASE_DELAY: float = 1.0

    IMAGE_ALLOWED_TYPES: List[str] = ["image/jpeg", "image/png", "image/webp"]

    INPUT_DEFAULT_MAX_CHARACTERS: int = 4000
    GENERATION_DEFAULT_MAX_TOKENS: int = 800
    GENERATION_DEFAULT_TEMPERATURE: float = 0.3

    # Azure Computer Vision
    AZURE_VISION_KEY: Optional[str] = None
    AZURE_ENDPOINT: Optional[str] = None

    # Azure OpenAI
    AZURE_OPENAI_ENDPOINT: Optional[str] = None
    AZURE_OPENAI_KEY: Optional[str] = None
    AZURE_OPENAI_DEPLOYMENT: Optional[str] = None
    AZURE_OPENAI_API_VERSION: str = "2024-06-01"

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None

    # Google Cloud Vision (REST) and Gemini
    GOOGLE_VISION_API_KEY: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None

    # Groq
    GROQ_API_KEY: Optional[str] = None

    # ZAI gateway (OpenAI compatible)
    ZAI_BASE_URL: Optional[str] = None
    ZAI_API_KEY: Optional[str] = None
    ZAI_CHAT_ID: Optional[str] = None
    ZAI_USER_ID: Optional[str] = None

    # Set by the Vercel runtime
    VERCEL: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def get_settings():
    return Settings()
