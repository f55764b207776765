"""Renderer protocol, output formats and render options."""

from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from envguard.models.result import ValidationResult


class OutputFormat(str, Enum):
    """Report formats accepted by ``--format``."""

    TEXT = "text"
    JSON = "json"
    JUNIT = "junit"


class RenderContext(BaseModel):
    """Options for a single render call."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TEXT, description="Report format")
    output_path: Path | None = Field(default=None, description="Report file, stdout when unset")
    verbose: bool = Field(default=False, description="Verbose output")
    color: bool = Field(default=True, description="Keep ANSI styles in text reports")
    indent: int = Field(default=2, description="Indentation for JSON and XML, 0 for compact")


@runtime_checkable
class Renderer(Protocol):
    """Anything that turns a ValidationResult into a report."""

    @property
    def format(self) -> OutputFormat: ...

    def render(self, result: ValidationResult, context: RenderContext) -> str: ...

    def render_to_file(self, result: ValidationResult, context: RenderContext) -> None: ...


class BaseRenderer:
    """Shared file output for the built-in renderers.

    Subclasses provide ``format`` and ``render``.
    """

    def render(self, result: ValidationResult, context: RenderContext) -> str:
        raise NotImplementedError

    def render_to_file(self, result: ValidationResult, context: RenderContext) -> None:
        """Write the rendered report to ``context.output_path``.

        Missing parent directories are created.

        Raises:
            ValueError: If the context has no output path
        """
        if context.output_path is None:
            raise ValueError("render_to_file needs a context with output_path set")

        report = self.render(result, context)
        context.output_path.parent.mkdir(parents=True, exist_ok=True)
        context.output_path.write_text(report, encoding="utf-8")
