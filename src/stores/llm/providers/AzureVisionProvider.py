# src/stores/llm/providers/AzureVisionProvider.py

import httpx
import json
import logging

from ..LLMInterface import LLMInterface
from ..LLMEnums import AzureVisionEnums
from ..LLMExceptions import (
    ProviderNotConfiguredError, ProviderHTTPError, EmptyResponseError,
    InvalidJSONError, InvalidResponseStructureError,
)
from models.ImageAnalysis import ImageAnalysis
from schemas.vision import VisionSignals

class AzureVisionProvider(LLMInterface):
    """
    Azure Computer Vision (REST v3.2 `analyze`). Returns labels, captions and
    colours only, so the style fields come from the heuristic classifier.
    """

    provider_name = "Azure Vision"

    def __init__(self, api_key: str, endpoint: str, classifier,
                       timeout: float = 30.0, http_client: httpx.Client = None):

        if not api_key or not endpoint:
            raise ProviderNotConfiguredError("Azure Vision is not configured (AZURE_VISION_KEY / AZURE_ENDPOINT).")

        self.api_key = api_key
        self.endpoint = endpoint.rstrip("/")
        self.classifier = classifier

        self.analyze_url = f"{self.endpoint}/vision/{AzureVisionEnums.API_VERSION.value}/analyze"
        self.client = http_client or httpx.Client(timeout=timeout)

        self.generation_model_id = None
        self.logger = logging.getLogger(__name__)
        self.logger.info(f"AzureVisionProvider initialized for {self.endpoint}")

    def set_generation_model(self, model_id: str):
        # The analyze endpoint has no model selection
        self.generation_model_id = model_id

    def request_analysis(self, image_bytes: bytes) -> dict:
        self.logger.info(f"Calling Azure Computer Vision: {self.analyze_url}")

        response = self.client.post(
            self.analyze_url,
            params={"visualFeatures": AzureVisionEnums.VISUAL_FEATURES.value},
            headers={
                "Content-Type": "application/octet-stream",
                "Ocp-Apim-Subscription-Key": self.api_key,
            },
            content=image_bytes,
        )
        self.logger.info(f"Azure Vision response status: {response.status_code}")

        if response.status_code < 200 or response.status_code >= 300:
            self.logger.error(f"Azure Vision API error {response.status_code}: {response.text}")
            raise ProviderHTTPError(self.provider_name, response.status_code, response.text)

        text = response.text
        if not text or not text.strip():
            self.logger.error("Empty response from Azure Vision API")
            raise EmptyResponseError(self.provider_name)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            self.logger.error(f"Azure Vision JSON parse error: {e}; preview: {text[:200]}")
            raise InvalidJSONError(self.provider_name) from e

        if not isinstance(data, dict) or "description" not in data or "tags" not in data:
            self.logger.error(f"Invalid Azure Vision response structure: {str(data)[:200]}")
            raise InvalidResponseStructureError(self.provider_name)

        return data

    def extract_signals(self, data: dict) -> VisionSignals:
        description = data.get("description") or {}
        captions = description.get("captions") or []
        caption = captions[0].get("text", "") if captions else ""

        tags = [t.get("name", "") for t in data.get("tags") or [] if t.get("name")]
        categories = [c.get("name", "") for c in data.get("categories") or [] if c.get("name")]

        image_type = data.get("imageType") or {}
        if image_type.get("lineDrawingType", 0) == 1:
            type_descriptor = "line drawing"
        elif image_type.get("clipArtType", 0) >= 2:
            type_descriptor = "clip art"
        else:
            type_descriptor = "photo"

        color = data.get("color") or {}
        metadata = data.get("metadata") or {}

        return VisionSignals(
            caption=caption,
            description=" ".join(c.get("text", "") for c in captions),
            tags=tags,
            categories=categories,
            # Tags carry the art-style hints (anime, painting, 3d) that imageType lacks
            image_type=" ".join([type_descriptor] + tags),
            dominant_colors=list(color.get("dominantColors") or []),
            objects=[o.get("object", "") for o in data.get("objects") or [] if o.get("object")],
            face_count=len(data.get("faces") or []),
            width=metadata.get("width"),
            height=metadata.get("height"),
        )

    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: str = None) -> ImageAnalysis:
        data = self.request_analysis(image_bytes)
        signals = self.extract_signals(data)

        self.logger.info(f"Caption: {signals.caption or 'No caption'}")
        self.logger.info(f"Tags count: {len(signals.tags)}, categories count: {len(signals.categories)}")

        return self.classifier.classify(signals)

    def close(self):
        self.client.close()
