from enum import Enum

class ResponseSignal(Enum):

    INVALID_IMAGE_DATA = "Invalid image data"
    INVALID_IMAGE_FORMAT = "Invalid image format"
    UNSUPPORTED_IMAGE_FORMAT = "Unsupported image format. Use JPG, PNG, or WebP"

    GENERIC_ERROR = "Something went wrong. Please try again."
    EMPTY_RESPONSE = "The vision service returned an empty response. Please try again."
    INVALID_API_RESPONSE = "Could not analyze image due to invalid API response. Please try with a different image."
    QUOTA_EXCEEDED = "Vision API quota exceeded. Please check your billing or try again tomorrow."
    TIMEOUT = "Request timed out. Please try with a smaller image."
    PERMISSION_DENIED = "Vision API permission denied. Please check the key permissions of your provider account."
    INVALID_KEY = "Vision API key is invalid. Please check your provider configuration."
    NOT_CONFIGURED = "The vision service is not configured. Please contact the site owner."
    PROVIDER_UNAVAILABLE = "The vision service is unavailable right now. Please try again later."


class ResponseMode(Enum):
    FULL = "full"
    PROMPT_ONLY = "prompt_only"


class PromptStrategy(Enum):
    TEMPLATE = "template"
    DIRECT = "direct"
