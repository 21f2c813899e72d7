from .enums.ResponseEnums import ResponseSignal, ResponseMode, PromptStrategy
from .ImageAnalysis import ImageAnalysis
