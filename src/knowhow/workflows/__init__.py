"""Mode drivers: analyze and match."""

from knowhow.workflows.analyze import AnalyzeResult, AnalyzeRunner
from knowhow.workflows.match import SimilarityRunner, format_for_chat

__all__ = [
    "AnalyzeResult",
    "AnalyzeRunner",
    "SimilarityRunner",
    "format_for_chat",
]
