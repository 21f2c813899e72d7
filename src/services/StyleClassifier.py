import logging
from typing import List, Sequence, Tuple

from models.ImageAnalysis import ImageAnalysis, ANALYSIS_DEFAULTS
from schemas.vision import VisionSignals

logger = logging.getLogger('uvicorn.error')

# Ordered rules: the first entry whose keywords appear in the text wins.
TYPE_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("illustration", "drawing", "sketch", "cartoon", "clip art", "clipart"), "Illustration"),
    (("painting", "artwork", "digital art"), "Digital Art"),
    (("anime", "manga"), "Anime"),
    (("3d", "render"), "3D Render"),
]

STYLE_BY_TYPE = {
    "Illustration": "Digital illustration with clean lines",
    "Digital Art": "Digital artwork with rich details",
    "Anime": "Anime-style artwork",
    "3D Render": "3D rendered image",
}

REALISM_BY_TYPE = {
    "Illustration": "Medium realism - digital illustration",
    "Digital Art": "Highly detailed digital artwork",
    "Anime": "Stylized anime aesthetic",
    "3D Render": "Photorealistic 3D rendering",
}

LIGHTING_RULES = [
    (("bright", "sunny", "sunlight"), "Bright and well-lit scene"),
    (("backlit",), "Backlit subject with dramatic effect"),
    (("dark", "shadowy"), "Low light or moody atmosphere"),
    (("studio lighting", "artificial"), "Studio lighting with controlled shadows"),
    (("golden",), "Golden hour warm lighting"),
]

MOOD_RULES = [
    (("happy", "joyful", "smile"), "Cheerful and positive"),
    (("sad", "melancholic"), "Moody and melancholic"),
    (("dramatic", "intense"), "Dramatic and intense"),
    (("peaceful", "calm", "serene"), "Peaceful and serene"),
    (("energetic", "dynamic"), "Energetic and dynamic"),
    (("romantic", "intimate"), "Romantic and intimate"),
    (("professional", "elegant"), "Professional and elegant"),
]

ENVIRONMENT_RULES = [
    (("beach", "sea", "ocean", "coast"), "Seaside setting with open sky"),
    (("mountain", "forest", "nature", "field", "park", "garden"), "Natural outdoor setting"),
    (("street", "city", "building", "urban", "road"), "Urban street environment"),
    (("studio", "wall", "backdrop"), "Plain studio backdrop"),
    (("room", "indoor", "interior", "office", "kitchen", "bedroom"), "Indoor interior setting"),
    (("outdoor", "sky"), "Open outdoor setting"),
]

PERSON_TAGS = ("person", "man", "woman", "boy", "girl", "people", "human face", "face")

# Reference palette for naming RGB colours
BASIC_COLORS: Sequence[Tuple[str, Tuple[int, int, int]]] = (
    ("Black", (0, 0, 0)),
    ("White", (255, 255, 255)),
    ("Grey", (128, 128, 128)),
    ("Red", (200, 30, 30)),
    ("Orange", (240, 140, 20)),
    ("Yellow", (240, 220, 40)),
    ("Green", (40, 160, 60)),
    ("Teal", (0, 128, 128)),
    ("Blue", (30, 80, 200)),
    ("Purple", (128, 50, 160)),
    ("Pink", (240, 150, 190)),
    ("Brown", (130, 80, 40)),
    ("Beige", (225, 200, 160)),
)


def first_match(text: str, rules, default: str) -> str:
    for keywords, value in rules:
        if any(keyword in text for keyword in keywords):
            return value
    return default


def name_color(red: int, green: int, blue: int) -> str:
    """Nearest basic colour name for an RGB triple."""
    def distance(reference):
        r, g, b = reference
        return (red - r) ** 2 + (green - g) ** 2 + (blue - b) ** 2

    return min(BASIC_COLORS, key=lambda item: distance(item[1]))[0]


class StyleClassifier:
    """Maps captions, tags and colours from label-based vision APIs onto an ImageAnalysis.

    Pure and deterministic: the same signals always give the same analysis.
    """

    def classify_type(self, image_type: str) -> str:
        return first_match(image_type.lower(), TYPE_RULES, ANALYSIS_DEFAULTS["type"])

    def classify_style(self, caption: str, tags_text: str, image_type: str) -> str:
        if "portrait" in caption or "portrait" in tags_text:
            return "Professional portrait photography"
        if "landscape" in caption or "landscape" in tags_text:
            return "Landscape photography"
        if "studio" in caption or "studio" in tags_text:
            return "Studio photography"
        if "cinematic" in caption or "dramatic" in caption:
            return "Cinematic photography"
        return STYLE_BY_TYPE.get(image_type, ANALYSIS_DEFAULTS["style"])

    def classify_lighting(self, caption: str) -> str:
        return first_match(caption, LIGHTING_RULES, ANALYSIS_DEFAULTS["lighting"])

    def classify_composition(self, caption: str, tags_text: str) -> str:
        if "close-up" in caption or "close-up" in tags_text:
            return "Close-up shot"
        if "center" in caption or "centre" in caption:
            return "Centered subject with balanced framing"
        return ANALYSIS_DEFAULTS["composition"]

    def classify_colors(self, dominant_colors: List[str]) -> str:
        names = ", ".join(c for c in dominant_colors[:5] if c)
        if names:
            return f"Color palette featuring: {names}"
        return ANALYSIS_DEFAULTS["colors"]

    def classify_mood(self, description: str) -> str:
        return first_match(description, MOOD_RULES, ANALYSIS_DEFAULTS["mood"])

    def classify_realism(self, image_type: str) -> str:
        return REALISM_BY_TYPE.get(image_type, ANALYSIS_DEFAULTS["realism"])

    def describe_person(self, face_count: int, tags: List[str]) -> str:
        if face_count == 1:
            return "A single person facing the camera"
        if face_count > 1:
            return f"A group of {face_count} people"
        if any(tag in PERSON_TAGS for tag in tags):
            return "A person without a clearly visible face"
        return "No people visible"

    def describe_objects(self, objects: List[str]) -> str:
        unique = list(dict.fromkeys(o.lower() for o in objects if o))
        if not unique:
            return "No distinct objects detected"
        return "Visible objects: " + ", ".join(unique[:5])

    def describe_environment(self, text: str) -> str:
        return first_match(text, ENVIRONMENT_RULES, "Neutral, unobtrusive background")

    def classify(self, signals: VisionSignals) -> ImageAnalysis:
        caption = signals.caption.lower()
        description = (signals.description or signals.caption).lower()
        tags = [t.lower() for t in signals.tags]
        tags_text = ", ".join(tags)
        scene_text = " ".join([caption, tags_text, ", ".join(signals.categories).lower().replace("_", " ")])

        image_type = self.classify_type(signals.image_type)

        analysis = ImageAnalysis(
            type=image_type,
            style=self.classify_style(caption, tags_text, image_type),
            lighting=self.classify_lighting(caption),
            composition=self.classify_composition(caption, tags_text),
            colors=self.classify_colors(signals.dominant_colors),
            mood=self.classify_mood(" ".join([description, caption])),
            realism=self.classify_realism(image_type),
            person_description=self.describe_person(signals.face_count, tags),
            objects_description=self.describe_objects(signals.objects),
            environment_description=self.describe_environment(scene_text),
            image_width=signals.width,
            image_height=signals.height,
            tags=list(signals.tags),
            objects=list(signals.objects),
            faces=signals.face_count,
        )

        logger.debug(f"Classified image as {analysis.type} / {analysis.style}")
        return analysis
