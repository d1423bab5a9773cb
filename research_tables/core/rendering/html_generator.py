"""
HTML Generator
==============

Convert tabular datasets into a self-contained, styled HTML document.
The document carries its own CSS so it renders the same in any browser
and in the headless rasterizer.
"""

from typing import Any, Dict, List
from pathlib import Path

import jinja2
from markupsafe import Markup, escape

from research_tables.config.logging import get_logger
from research_tables.core.dataset import iter_rows, resolve_labels, to_dataframe
from research_tables.core.errors import FormatError
from research_tables.models.schemas import RenderOptions, RenderedDocument

logger = get_logger(__name__)

FOOTNOTE = "***p<.001, **p<.01, *p<.05, .p<.1"


class HTMLTableGenerator:
    """Jinja2-based HTML table generator."""

    template_name = "table.html"

    def __init__(self) -> None:
        self.logger: Any = logger.bind(generator="jinja2")  # structlog.BoundLoggerBase
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            undefined=jinja2.StrictUndefined,
        )

        self._register_template_functions()

    def _register_template_functions(self) -> None:
        """Register custom Jinja2 filters."""

        def px(value: float) -> str:
            """Convert numeric value to CSS pixels."""
            return f"{value}px"

        @jinja2.pass_context
        def cell(context: Any, value: str) -> Markup:
            """Escape cell text unless the caller allows inline markup."""
            if context.get("escape_cells"):
                return escape(value)
            return Markup(value)

        self.env.filters["px"] = px
        self.env.filters["cell"] = cell

    def generate(self, data: Any, options: RenderOptions) -> RenderedDocument:
        """
        Build the HTML document for a dataset.

        Args:
            data: Tabular dataset (DataFrame or anything DataFrame accepts)
            options: Rendering options

        Returns:
            RenderedDocument with the complete HTML

        Raises:
            FormatError: If the dataset cannot be turned into markup
        """
        try:
            df = to_dataframe(data)
            labels = resolve_labels(df, options.col_names)
            rows = iter_rows(df)

            template = self.env.get_template(self.template_name)
            context = self._prepare_context(labels, rows, options)
            html = template.render(**context)
            # Unencodable text fails here, before any file is opened
            html.encode("utf-8")

            self.logger.debug(
                "HTML generation completed",
                columns=len(labels),
                rows=len(rows),
                html_length=len(html),
            )

            return RenderedDocument(html=html, labels=labels, row_count=len(rows))

        except FormatError as e:
            self.logger.error("HTML generation failed", **e.to_dict())
            raise
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("HTML generation failed", error=error_msg)
            raise FormatError(error_msg) from e
        except UnicodeEncodeError as e:
            error_msg = f"Dataset text is not encodable as UTF-8: {e}"
            self.logger.error("HTML generation failed", error=error_msg)
            raise FormatError(error_msg) from e
        except (TypeError, ValueError) as e:
            error_msg = f"Dataset could not be serialized to markup: {e}"
            self.logger.error("HTML generation failed", error=error_msg)
            raise FormatError(error_msg) from e

    def _prepare_context(
        self, labels: List[str], rows: List[List[str]], options: RenderOptions
    ) -> Dict[str, Any]:
        """Prepare template rendering context."""
        return {
            "title": options.title,
            "font_size": options.font_size,
            "labels": labels,
            "rows": rows,
            "escape_cells": options.escape,
            "footnote": Markup(FOOTNOTE),
        }

    def write(self, document: RenderedDocument, path: Path) -> Path:
        """
        Write a rendered document as UTF-8.

        Raises:
            FormatError: If the document text is not encodable as UTF-8
            OSError: If the destination is not writable
        """
        try:
            content = document.html.encode("utf-8")
        except UnicodeEncodeError as e:
            raise FormatError("Document text is not encodable as UTF-8", path=str(path)) from e

        try:
            path.write_bytes(content)
        except OSError as e:
            self.logger.error("Failed to write HTML file", path=str(path), error=str(e))
            raise
        return path


def generate_html(data: Any, options: RenderOptions) -> RenderedDocument:
    """
    Generate the HTML document for a dataset.

    Args:
        data: Tabular dataset
        options: Rendering options

    Returns:
        RenderedDocument
    """
    return HTMLTableGenerator().generate(data, options)

