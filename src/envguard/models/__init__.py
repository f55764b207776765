"""Data models for envguard.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from envguard.models.common import EnvGuardModel, ErrorDetail
from envguard.models.env import (
    EnvVariable,
    ParsedEnvFile,
    ParseError,
    effective_variables,
)
from envguard.models.result import (
    Finding,
    FindingType,
    SecurityAnalysis,
    Severity,
    ValidationResult,
    ValidationSummary,
)
from envguard.models.schema import (
    EnvSchema,
    SecurityRule,
    ValidationRule,
    VariableSchema,
    VariableType,
)

__all__ = [
    # Common
    "EnvGuardModel",
    "ErrorDetail",
    # Env
    "EnvVariable",
    "ParsedEnvFile",
    "ParseError",
    "effective_variables",
    # Result
    "Finding",
    "FindingType",
    "SecurityAnalysis",
    "Severity",
    "ValidationResult",
    "ValidationSummary",
    # Schema
    "EnvSchema",
    "SecurityRule",
    "ValidationRule",
    "VariableSchema",
    "VariableType",
]
