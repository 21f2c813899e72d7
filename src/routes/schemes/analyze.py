# FILE: src/routes/schemes/analyze.py

from pydantic import BaseModel, Field
from typing import Any, List, Optional

class AnalyzeRequest(BaseModel):
    # Left untyped so a missing or non-string image is answered with our own 400 message
    image: Optional[Any] = Field(default=None, examples=["data:image/jpeg;base64,/9j/4AAQSkZJRg..."])

class AnalyzeResponse(BaseModel):
    success: bool = True
    analysis: Optional[dict] = None
    prompt: str
    tips: Optional[List[str]] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
