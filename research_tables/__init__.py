"""
Research Tables
===============

Render tabular research results as styled HTML tables, as images for
word-processor documents, or as LaTeX longtables for PDF reports.

This package provides:
- A jinja2-based HTML table builder with a fixed document style
- Headless-browser rasterization with Playwright or a Chrome binary
- LaTeX longtable generation for typeset output
- A bilingual (Japanese/English) preset for hypothesis tables
"""

from research_tables.core.rendering.renderer import (
    TableRenderer,
    render,
    render_html,
    render_image,
    render_typeset_document,
    render_preset,
    create_hypothesis_table,
)
from research_tables.core.errors import ExternalToolError, FormatError, TableRenderError
from research_tables.models.schemas import Locale, OutputFormat, RenderOptions, TypesetOptions

__version__ = "1.0.0"

__all__ = [
    "TableRenderer",
    "render",
    "render_html",
    "render_image",
    "render_typeset_document",
    "render_preset",
    "create_hypothesis_table",
    "TableRenderError",
    "FormatError",
    "ExternalToolError",
    "Locale",
    "OutputFormat",
    "RenderOptions",
    "TypesetOptions",
]
