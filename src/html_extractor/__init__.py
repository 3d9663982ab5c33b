"""Unpack a zip archive, render its HTML documents to text and copy the rest."""

from .config import AppConfig, load_config
from .core import ExtractionService
from .errors import ErrorCode, ExtractionError
from .models import ClassifierPolicy, ExtractionResult, ExtractOptions, RenderStyle

__all__ = [
    "AppConfig",
    "ClassifierPolicy",
    "ErrorCode",
    "ExtractionError",
    "ExtractionResult",
    "ExtractionService",
    "ExtractOptions",
    "RenderStyle",
    "load_config",
]
