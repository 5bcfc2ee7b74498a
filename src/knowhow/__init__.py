"""KnowHow crash-case library

Turns a crash report and the pull request that fixed it into a structured,
searchable case, and matches new crashes against the stored cases.
"""

__version__ = "0.1.0"

# Export shared models first (no dependencies)
from knowhow.models import (
    CaseOutput, CrashSignature, PrEvidence, MinimalCase, RelatedPr,
    SimilarCaseHit, SimilarCasesResult,
)

from knowhow.config import KnowHowConfig
from knowhow.exceptions import (
    KnowHowError,
    ConfigurationError,
    MissingInputError,
    ApiError,
    ResponseParseError,
    SchemaViolationError,
)

# Lazy import for the mode drivers so that importing the models does not
# pull in aiohttp and tenacity
def __getattr__(name):
    """Lazy import for the mode drivers."""
    if name in ("AnalyzeRunner", "SimilarityRunner"):
        from knowhow import workflows
        return getattr(workflows, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

__all__ = [
    # Models
    "CaseOutput", "CrashSignature", "PrEvidence", "MinimalCase", "RelatedPr",
    "SimilarCaseHit", "SimilarCasesResult",
    # Configuration
    "KnowHowConfig",
    # Errors
    "KnowHowError", "ConfigurationError", "MissingInputError",
    "ApiError", "ResponseParseError", "SchemaViolationError",
    # Mode drivers (lazy loaded)
    "AnalyzeRunner", "SimilarityRunner",
]
