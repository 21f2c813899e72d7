import logging
import re
from math import gcd
from typing import Optional

from models.ImageAnalysis import ImageAnalysis
from stores.llm.templates.template_parser import TemplateParser

logger = logging.getLogger('uvicorn.error')

# Common photo aspect ratios, portrait to landscape
COMMON_ASPECT_RATIOS = [(9, 16), (3, 4), (4, 5), (1, 1), (5, 4), (4, 3), (16, 9)]
ASPECT_RATIO_TOLERANCE = 0.08

DEFAULT_TIPS = [
    "Upload a clear photo of your face first in the image tool",
    "The prompt uses a [USER FACE] placeholder - the tool will use your uploaded photo",
    "Paste the entire prompt as-is, do not edit it",
    "If results are not perfect, try regenerating the prompt",
    "For best results, use a well-lit, front-facing photo of your face",
]

_AR_DIRECTIVE_RE = re.compile(r"\s*--ar\s+\d+\s*:\s*\d+")


def ar_from_dims(width: Optional[int], height: Optional[int]) -> str:
    """Aspect-ratio directive value (``W:H``) for an image size.

    Snaps to the closest common photo ratio when it is within the tolerance,
    otherwise returns the reduced fraction.
    """
    if not width or not height or width <= 0 or height <= 0:
        return "1:1"

    ratio = width / height
    best = min(COMMON_ASPECT_RATIOS, key=lambda r: abs(ratio - r[0] / r[1]))
    if abs(ratio - best[0] / best[1]) <= ASPECT_RATIO_TOLERANCE:
        return f"{best[0]}:{best[1]}"

    divisor = gcd(width, height)
    return f"{width // divisor}:{height // divisor}"


def as_clause(text: str) -> str:
    # The templates supply their own punctuation
    return text.strip().rstrip(". ")


class PromptService:

    def __init__(self, template_parser: TemplateParser):
        self.template_parser = template_parser

    @property
    def face_lock(self) -> str:
        return self.template_parser.get("style", "face_lock")

    def render(self, analysis: ImageAnalysis) -> str:
        logger.info("Generating style prompt from analysis...")

        values = {
            "type": as_clause(analysis.type).lower(),
            "style": as_clause(analysis.style).lower(),
            "lighting": as_clause(analysis.lighting).lower(),
            "composition": as_clause(analysis.composition).lower(),
            "colors": as_clause(analysis.colors).lower(),
            "mood": as_clause(analysis.mood).lower(),
            "realism": as_clause(analysis.realism).lower(),
        }

        key = "style_prompt"
        if analysis.has_scene_details():
            key = "detailed_style_prompt"
            values.update({
                "person_description": as_clause(analysis.person_description or "No people visible").lower(),
                "objects_description": as_clause(analysis.objects_description or "No distinct objects detected"),
                "environment_description": as_clause(analysis.environment_description or "Neutral background"),
            })

        prompt = self.template_parser.get("style", key, values)
        logger.info(f"Prompt generated, length: {len(prompt)}")
        return prompt

    def strip_directives(self, prompt: str) -> str:
        face_lock = self.face_lock
        cleaned = prompt.replace(face_lock, "") if face_lock else prompt
        cleaned = _AR_DIRECTIVE_RE.sub("", cleaned)
        # Collapse the gaps left behind by removed sentences
        cleaned = re.sub(r"[ \t]+\n", "\n", cleaned)
        cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
        return cleaned.strip()

    def finalize(self, prompt: str, width: Optional[int] = None, height: Optional[int] = None) -> str:
        """Append the aspect-ratio directive and the face-lock sentence, each exactly once.

        Whatever the upstream model already wrote of either is removed first,
        so the face-lock sentence always closes the prompt.
        """
        parts = [self.strip_directives(prompt)]
        if width and height:
            parts.append(f"--ar {ar_from_dims(width, height)}")
        parts.append(self.face_lock)
        return "\n\n".join(p for p in parts if p)
