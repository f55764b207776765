"""Report renderers: text, JSON and JUnit XML."""

from envguard.renderers.base import BaseRenderer, OutputFormat, RenderContext, Renderer
from envguard.renderers.json import JSONRenderer
from envguard.renderers.junit import JUnitRenderer
from envguard.renderers.text import TextRenderer

RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.TEXT: TextRenderer,
    OutputFormat.JSON: JSONRenderer,
    OutputFormat.JUNIT: JUnitRenderer,
}


def get_renderer(format: OutputFormat | str) -> BaseRenderer:
    """Create the renderer for a report format.

    Args:
        format: Format enum member or its string value

    Returns:
        A new renderer instance

    Raises:
        ValueError: If the format is unknown
    """
    try:
        return RENDERERS[OutputFormat(format)]()
    except (ValueError, KeyError):
        raise ValueError(
            f"Unsupported output format: {format!r} (choose from {', '.join(f.value for f in OutputFormat)})"
        ) from None


__all__ = [
    "BaseRenderer",
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "JSONRenderer",
    "JUnitRenderer",
    "TextRenderer",
    "RENDERERS",
    "get_renderer",
]
