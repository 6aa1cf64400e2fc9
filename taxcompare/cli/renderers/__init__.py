"""Rich renderers for CLI output."""

from .result_renderer import (
    render_tax_result,
    render_comparison,
    render_countries,
    render_brackets,
)

__all__ = [
    "render_tax_result",
    "render_comparison",
    "render_countries",
    "render_brackets",
]
