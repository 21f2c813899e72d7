import base64
import binascii
import io
import logging
import re
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .BaseController import BaseController
from models import ResponseSignal

logger = logging.getLogger('uvicorn.error')

_DATA_URI_HEADER_RE = re.compile(r"^data:(image/[a-z0-9.+-]+);base64,", re.IGNORECASE)


class ImageController(BaseController):

    def __init__(self, app_settings=None):
        super().__init__(app_settings)
        self.supported_prefixes = [f"data:{mime}" for mime in self.app_settings.IMAGE_ALLOWED_TYPES]

    def validate_image(self, image_data) -> Tuple[bool, Optional[str]]:
        if not image_data or not isinstance(image_data, str):
            return False, ResponseSignal.INVALID_IMAGE_DATA.value

        if not image_data.startswith("data:image/"):
            return False, ResponseSignal.INVALID_IMAGE_FORMAT.value

        if not any(image_data.startswith(prefix) for prefix in self.supported_prefixes):
            return False, ResponseSignal.UNSUPPORTED_IMAGE_FORMAT.value

        return True, None

    def decode_image(self, image_data: str) -> Tuple[Optional[bytes], Optional[str]]:
        """Split a validated data URI into raw bytes and MIME type.

        Returns ``(None, None)`` when the header or the base64 payload is malformed.
        """
        match = _DATA_URI_HEADER_RE.match(image_data)
        if not match:
            return None, None

        payload = image_data[match.end():]
        try:
            image_bytes = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            return None, None

        if not image_bytes:
            return None, None
        return image_bytes, match.group(1).lower()

    def get_image_size(self, image_bytes: bytes) -> Tuple[Optional[int], Optional[int]]:
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                return img.size
        except (UnidentifiedImageError, OSError):
            return None, None
        except Image.DecompressionBombError as e:
            # Still analyzed, only without an --ar directive
            logger.warning(f"Image too large to measure: {e}")
            return None, None
