import json
import re
from typing import Any, List

from models.ImageAnalysis import ImageAnalysis, ANALYSIS_DEFAULTS
from .LLMExceptions import EmptyResponseError, InvalidJSONError, InvalidResponseStructureError

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

_DESCRIPTION_KEYS = {
    "person_description": ("personDescription", "person_description"),
    "objects_description": ("objectsDescription", "objects_description"),
    "environment_description": ("environmentDescription", "environment_description"),
}


def strip_code_fence(text: str) -> str:
    text = text.strip()
    match = _FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def _load_json_object(text: str, provider: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Models sometimes wrap the object in a sentence
    match = _OBJECT_RE.search(text)
    if not match:
        raise InvalidJSONError(provider)
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise InvalidJSONError(provider) from e


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v).strip() for v in value if str(v).strip())
    return str(value).strip()


def _as_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, str) and value.strip():
        return [v.strip() for v in value.split(",") if v.strip()]
    return []


def parse_analysis_reply(text: str, provider: str) -> ImageAnalysis:
    """Turn a model's JSON reply into an ImageAnalysis, filling gaps with defaults."""
    if not text or not text.strip():
        raise EmptyResponseError(provider)

    data = _load_json_object(strip_code_fence(text), provider)
    if not isinstance(data, dict):
        raise InvalidResponseStructureError(provider)

    values = {}
    for key, default in ANALYSIS_DEFAULTS.items():
        values[key] = _as_text(data.get(key)) or default

    for field_name, keys in _DESCRIPTION_KEYS.items():
        for key in keys:
            found = _as_text(data.get(key))
            if found:
                values[field_name] = found
                break

    return ImageAnalysis(
        **values,
        tags=_as_list(data.get("tags")),
        objects=_as_list(data.get("objects")),
    )


def parse_prompt_reply(text: str, provider: str) -> str:
    if not text or not text.strip():
        raise EmptyResponseError(provider)
    prompt = strip_code_fence(text).strip().strip('"').strip()
    if not prompt:
        raise EmptyResponseError(provider)
    return prompt
