"""JUnit XML renderer for CI systems."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from envguard.models.result import Finding, Severity, ValidationResult
from envguard.renderers.base import BaseRenderer, OutputFormat, RenderContext

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


class JUnitRenderer(BaseRenderer):
    """Renderer for JUnit XML output.

    Every finding becomes a testcase. Only errors are reported as
    failures; warnings and info go to ``system-out``.
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.JUNIT

    def render(self, result: ValidationResult, context: RenderContext) -> str:
        """Render a result to a JUnit XML document.

        Args:
            result: The validation result to render
            context: Rendering context with options

        Returns:
            XML string with declaration
        """
        suite = ET.Element(
            "testsuite",
            {
                "name": "EnvGuard",
                "tests": str(len(result.findings)),
                "failures": str(len(result.errors)),
                "time": f"{result.summary.validation_time / 1000:.3f}",
            },
        )

        for finding in result.findings:
            self._add_testcase(suite, finding)

        if context.indent:
            ET.indent(suite, space=" " * context.indent)
        return XML_DECLARATION + ET.tostring(suite, encoding="unicode")

    @staticmethod
    def _add_testcase(suite: ET.Element, finding: Finding) -> None:
        case = ET.SubElement(
            suite,
            "testcase",
            {
                "classname": f"EnvGuard.{finding.type.value}",
                "name": f"{finding.variable or 'general'}_{finding.severity.value}",
            },
        )

        if finding.severity == Severity.ERROR:
            failure = ET.SubElement(
                case,
                "failure",
                {"message": finding.message, "type": finding.type.value},
            )
            text = finding.message
            if finding.suggestion:
                text += f"\nSuggestion: {finding.suggestion}"
            failure.text = text
        else:
            out = ET.SubElement(case, "system-out")
            out.text = finding.message
