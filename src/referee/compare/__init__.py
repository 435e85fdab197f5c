"""Comparison building blocks.

Public API:
- build_prompt
- normalize
- validate_comparison_request
- ComparisonInput, OptionAnalysis, TradeOff, NormalizedResult, ComparisonRecord
- ServiceError and its subclasses
"""

from .errors import (
    AiUnavailableError,
    InternalError,
    NormalizationError,
    NormalizationFailure,
    PersistenceFailure,
    ServiceError,
    ValidationError,
)
from .normalizer import normalize
from .prompt import build_prompt
from .types import (
    ComparisonInput,
    ComparisonRecord,
    NormalizedResult,
    OptionAnalysis,
    TradeOff,
)
from .validation import validate_comparison_request

__all__ = [
    "AiUnavailableError",
    "ComparisonInput",
    "ComparisonRecord",
    "InternalError",
    "NormalizationError",
    "NormalizationFailure",
    "NormalizedResult",
    "OptionAnalysis",
    "PersistenceFailure",
    "ServiceError",
    "TradeOff",
    "ValidationError",
    "build_prompt",
    "normalize",
    "validate_comparison_request",
]
