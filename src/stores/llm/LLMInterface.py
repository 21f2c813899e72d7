from abc import ABC, abstractmethod

from models.ImageAnalysis import ImageAnalysis

class LLMInterface(ABC):

    # Providers that can write the final prompt in a single call set this to True
    supports_direct_prompt = False

    @abstractmethod
    def set_generation_model(self, model_id: str):
        pass

    @abstractmethod
    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: str = None) -> ImageAnalysis:
        pass

    def generate_prompt(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        raise NotImplementedError(f"{self.__class__.__name__} cannot write prompts directly.")

    def close(self):
        pass
