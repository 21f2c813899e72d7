from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class VisionSignals:
    """Provider-neutral view of what a label-based vision API returned,
    standardizing the data handed to the style classifier."""
    caption: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    image_type: str = ""
    dominant_colors: List[str] = field(default_factory=list)
    objects: List[str] = field(default_factory=list)
    face_count: int = 0
    width: Optional[int] = None
    height: Optional[int] = None
