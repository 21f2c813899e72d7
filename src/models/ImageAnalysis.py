from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ImageAnalysis(BaseModel):
    """Visual style breakdown of a single uploaded image.

    Serialised with camelCase keys (``personDescription``, ``imageWidth`` ...)
    since that is what the upload page reads.
    """
    type: str
    style: str
    lighting: str
    composition: str
    colors: str
    mood: str
    realism: str

    person_description: Optional[str] = Field(default=None, alias="personDescription")
    objects_description: Optional[str] = Field(default=None, alias="objectsDescription")
    environment_description: Optional[str] = Field(default=None, alias="environmentDescription")

    image_width: Optional[int] = Field(default=None, alias="imageWidth")
    image_height: Optional[int] = Field(default=None, alias="imageHeight")

    tags: List[str] = []
    objects: List[str] = []
    faces: int = 0

    model_config = ConfigDict(populate_by_name=True)

    def has_scene_details(self) -> bool:
        return any([self.person_description, self.objects_description, self.environment_description])

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# Used for any field a provider leaves empty
ANALYSIS_DEFAULTS = {
    "type": "Photo",
    "style": "Professional photography",
    "lighting": "Balanced natural lighting",
    "composition": "Well-composed with balanced elements",
    "colors": "Natural and balanced color palette",
    "mood": "Neutral and balanced",
    "realism": "High realism with natural textures",
}
