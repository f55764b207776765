"""JSON report renderer."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from envguard.models.result import ValidationResult
from envguard.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Machine-readable report.

    The document holds ``isValid``, ``errors``, ``warnings``, ``info`` and
    ``summary`` with camelCase keys, plus a UTC ISO-8601 ``timestamp``.
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def to_dict(self, result: ValidationResult) -> dict[str, Any]:
        document = result.model_dump(mode="json", by_alias=True)
        document["timestamp"] = datetime.now(timezone.utc).isoformat()
        return document

    def render(self, result: ValidationResult, context: RenderContext) -> str:
        indent = context.indent or None
        return json.dumps(self.to_dict(result), indent=indent, ensure_ascii=False)
