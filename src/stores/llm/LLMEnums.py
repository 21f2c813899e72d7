from enum import Enum

class LLMEnums(Enum):
    AZURE_VISION = "AZURE_VISION"
    GOOGLE_VISION = "GOOGLE_VISION"
    OPENAI = "OPENAI"
    AZURE_OPENAI = "AZURE_OPENAI"
    ZAI = "ZAI"
    GROQ = "GROQ"
    GOOGLE = "GOOGLE"

class OpenAIEnums(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

class GroqEnums(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

class GoogleEnums(Enum):
    USER = "user"
    ASSISTANT = "model" # Google uses 'model' for the assistant's role

class AzureVisionEnums(Enum):
    API_VERSION = "v3.2"
    VISUAL_FEATURES = "Categories,Tags,Description,Color,ImageType,Objects,Faces"

class GoogleVisionEnums(Enum):
    ANNOTATE_URL = "https://vision.googleapis.com/v1/images:annotate"
    LABEL_DETECTION = "LABEL_DETECTION"
    IMAGE_PROPERTIES = "IMAGE_PROPERTIES"
    OBJECT_LOCALIZATION = "OBJECT_LOCALIZATION"
    FACE_DETECTION = "FACE_DETECTION"
