# src/stores/llm/providers/GoogleVisionProvider.py

import base64
import httpx
import json
import logging

from ..LLMInterface import LLMInterface
from ..LLMEnums import GoogleVisionEnums
from ..LLMExceptions import (
    ProviderNotConfiguredError, ProviderHTTPError, EmptyResponseError,
    InvalidJSONError, InvalidResponseStructureError,
)
from models.ImageAnalysis import ImageAnalysis
from schemas.vision import VisionSignals
from services.StyleClassifier import name_color

class GoogleVisionProvider(LLMInterface):
    """
    Google Cloud Vision `images:annotate` over REST with an API key.
    Labels and dominant colours feed the heuristic classifier.
    """

    provider_name = "Google Vision"

    def __init__(self, api_key: str, classifier, max_labels: int = 20,
                       timeout: float = 30.0, http_client: httpx.Client = None):

        if not api_key:
            raise ProviderNotConfiguredError("Google Vision is not configured (GOOGLE_VISION_API_KEY).")

        self.api_key = api_key
        self.classifier = classifier
        self.max_labels = max_labels
        self.client = http_client or httpx.Client(timeout=timeout)

        self.generation_model_id = None
        self.logger = logging.getLogger(__name__)
        self.logger.info("GoogleVisionProvider initialized.")

    def set_generation_model(self, model_id: str):
        self.generation_model_id = model_id

    def build_request(self, image_bytes: bytes) -> dict:
        return {
            "requests": [{
                "image": {"content": base64.b64encode(image_bytes).decode("utf-8")},
                "features": [
                    {"type": GoogleVisionEnums.LABEL_DETECTION.value, "maxResults": self.max_labels},
                    {"type": GoogleVisionEnums.IMAGE_PROPERTIES.value, "maxResults": 10},
                    {"type": GoogleVisionEnums.OBJECT_LOCALIZATION.value, "maxResults": 10},
                    {"type": GoogleVisionEnums.FACE_DETECTION.value, "maxResults": 10},
                ],
            }]
        }

    def request_annotations(self, image_bytes: bytes) -> dict:
        response = self.client.post(
            GoogleVisionEnums.ANNOTATE_URL.value,
            params={"key": self.api_key},
            json=self.build_request(image_bytes),
        )
        self.logger.info(f"Google Vision response status: {response.status_code}")

        if response.status_code < 200 or response.status_code >= 300:
            self.logger.error(f"Google Vision API error {response.status_code}: {response.text}")
            raise ProviderHTTPError(self.provider_name, response.status_code, response.text)

        if not response.text or not response.text.strip():
            raise EmptyResponseError(self.provider_name)

        try:
            data = json.loads(response.text)
        except json.JSONDecodeError as e:
            self.logger.error(f"Google Vision JSON parse error: {e}")
            raise InvalidJSONError(self.provider_name) from e

        responses = data.get("responses") if isinstance(data, dict) else None
        if not responses or not isinstance(responses[0], dict):
            raise InvalidResponseStructureError(self.provider_name)

        result = responses[0]
        # Per-image failures come back with HTTP 200
        if result.get("error"):
            error = result["error"]
            raise ProviderHTTPError(self.provider_name, error.get("code", 500), error.get("message", ""))
        return result

    def extract_signals(self, result: dict) -> VisionSignals:
        labels = [l.get("description", "") for l in result.get("labelAnnotations") or [] if l.get("description")]

        colors = (((result.get("imagePropertiesAnnotation") or {}).get("dominantColors") or {}).get("colors")) or []
        colors = sorted(colors, key=lambda c: c.get("score", 0), reverse=True)
        color_names = []
        for c in colors:
            rgb = c.get("color") or {}
            name = name_color(rgb.get("red", 0), rgb.get("green", 0), rgb.get("blue", 0))
            if name not in color_names:
                color_names.append(name)

        faces = result.get("faceAnnotations") or []
        face_moods = []
        for face in faces:
            if face.get("joyLikelihood") in ("LIKELY", "VERY_LIKELY"):
                face_moods.append("smile")
            if face.get("sorrowLikelihood") in ("LIKELY", "VERY_LIKELY"):
                face_moods.append("sad")

        labels_text = ", ".join(labels)

        return VisionSignals(
            caption=labels_text,
            description=" ".join([labels_text] + face_moods),
            tags=labels,
            image_type=labels_text,
            dominant_colors=color_names,
            objects=[o.get("name", "") for o in result.get("localizedObjectAnnotations") or [] if o.get("name")],
            face_count=len(faces),
        )

    def analyze_image(self, image_bytes: bytes, mime_type: str, prompt: str = None) -> ImageAnalysis:
        result = self.request_annotations(image_bytes)
        signals = self.extract_signals(result)
        self.logger.info(f"Google Vision labels: {len(signals.tags)}, faces: {signals.face_count}")
        return self.classifier.classify(signals)

    def close(self):
        self.client.close()
