"""Application DTOs."""

from editrag.application.dto.source_document import SourceDocument
from editrag.application.dto.suggestion_context import Diagnostic, SuggestionContext

__all__ = [
    "Diagnostic",
    "SourceDocument",
    "SuggestionContext",
]
