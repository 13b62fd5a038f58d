"""AI coach analysis APIs."""

from nimbus.analysis.models import (
    AnalysisContent,
    AnalysisError,
    AnalysisRequest,
    AnalysisResult,
    keys_to_camel_case,
    parse_analysis_content,
)
from nimbus.analysis.service import AnalysisClient

__all__ = [
    "AnalysisClient",
    "AnalysisContent",
    "AnalysisError",
    "AnalysisRequest",
    "AnalysisResult",
    "keys_to_camel_case",
    "parse_analysis_content",
]
