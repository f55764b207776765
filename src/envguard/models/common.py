"""Common model types shared across modules."""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class EnvGuardModel(BaseModel):
    """Base for serialized models.

    Documents on disk and JSON output use camelCase keys; Python code uses
    the snake_case field names.
    """

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ErrorDetail(BaseModel):
    """Represents an error that stopped an envguard operation."""

    model_config = {"frozen": True}

    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional error context",
    )

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
