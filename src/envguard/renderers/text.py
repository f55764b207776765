"""Human-readable text renderer built on Rich."""

from __future__ import annotations

import io

from rich.console import Console
from rich.markup import escape

from envguard.models.result import Finding, ValidationResult
from envguard.renderers.base import BaseRenderer, OutputFormat, RenderContext

SECTION_STYLES = {
    "ERRORS": "red",
    "WARNINGS": "yellow",
    "INFO": "blue",
}


class TextRenderer(BaseRenderer):
    """Renderer for the text report.

    Output is recorded on an off-screen Rich console and exported, so the
    same string can be printed or written to a file. Colors are kept only
    when ``context.color`` is set.

    Example:
        renderer = TextRenderer()
        print(renderer.render(result, RenderContext(color=False)))
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TEXT

    def render(self, result: ValidationResult, context: RenderContext) -> str:
        """Render a result to a text report.

        Args:
            result: The validation result to render
            context: Rendering context with options

        Returns:
            Report text, with ANSI styles when color is enabled
        """
        console = Console(
            file=io.StringIO(),
            record=True,
            force_terminal=context.color,
            no_color=not context.color,
            soft_wrap=True,
            emoji=False,
            highlight=False,
            width=120,
        )

        if result.is_valid:
            console.print("[bold green]PASSED[/bold green] - Environment validation completed")
        else:
            console.print("[bold red]FAILED[/bold red] - Environment validation completed")
        console.print()

        self._print_section(console, "ERRORS", result.errors)
        self._print_section(console, "WARNINGS", result.warnings)
        self._print_section(console, "INFO", result.info)

        summary = result.summary
        console.print("[bold]SUMMARY:[/bold]")
        console.print(f"  Total variables: [cyan]{summary.total_variables}[/cyan]")
        console.print(f"  Required variables: [cyan]{summary.required_variables}[/cyan]")
        if summary.missing_variables > 0:
            console.print(f"  Missing variables: [red]{summary.missing_variables}[/red]")
        if summary.unused_variables > 0:
            console.print(f"  Unused variables: [yellow]{summary.unused_variables}[/yellow]")
        if summary.security_issues > 0:
            console.print(f"  Security issues: [red]{summary.security_issues}[/red]")
        console.print(f"  Validation time: [dim]{summary.validation_time:.2f}ms[/dim]")

        return console.export_text(styles=context.color).rstrip("\n")

    def _print_section(self, console: Console, title: str, findings: list[Finding]) -> None:
        if not findings:
            return
        style = SECTION_STYLES[title]
        console.print(f"[bold {style}]{title} ({len(findings)}):[/bold {style}]")
        for finding in findings:
            console.print(self._format_finding(finding, style))
        console.print()

    @staticmethod
    def _format_finding(finding: Finding, style: str) -> str:
        variable = f"[cyan]{escape(finding.variable)}[/cyan]" if finding.variable else ""
        location = f"[dim]:{finding.line_number}[/dim]" if finding.line_number else ""
        line = f"  {variable}{location}: [{style}]{escape(finding.message)}[/{style}]"
        if finding.suggestion:
            line += f"\n    [dim]Suggestion: {escape(finding.suggestion)}[/dim]"
        return line
