"""
Typeset Generator
=================

LaTeX longtable output for PDF reports. Tables use booktabs rules, repeat
their header after page breaks, stretch to the text width and carry the
significance footnote on the last page.
"""

from typing import Any, Dict, List, Tuple
from pathlib import Path
import math

import jinja2
from pydantic import BaseModel, Field

from research_tables.config.logging import get_logger
from research_tables.core.dataset import iter_rows, resolve_labels, to_dataframe
from research_tables.core.errors import FormatError
from research_tables.core.rendering.html_generator import FOOTNOTE
from research_tables.models.schemas import Locale, TypesetOptions

logger = get_logger(__name__)

FOOTNOTE_TITLES: Dict[Locale, str] = {
    Locale.JA: "注：",
    Locale.EN: "Note:",
}

LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}


def latex_escape(text: str) -> str:
    """Escape LaTeX special characters."""
    return "".join(LATEX_SPECIAL_CHARS.get(char, char) for char in text)


class TypesetTable(BaseModel):
    """In-memory LaTeX longtable ready to embed in a document body."""

    labels: List[str] = Field(..., description="Header labels in display order")
    row_count: int = Field(..., ge=0, description="Number of body rows")
    font_size: int = Field(..., description="Font size in pt")
    footnote: str = Field(FOOTNOTE, description="Footnote text")
    latex: str = Field(..., description="LaTeX source of the table")

    # Packages the source relies on; fontenc T1 keeps "<" in the footnote literal
    packages: Tuple[str, ...] = ("booktabs", "longtable", "array", "[T1]{fontenc}")

    def to_latex(self) -> str:
        return self.latex

    def preamble(self) -> str:
        """\\usepackage lines for the packages the table needs."""
        lines = []
        for package in self.packages:
            if package.startswith("["):
                lines.append(f"\\usepackage{package}")
            else:
                lines.append(f"\\usepackage{{{package}}}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.latex


class LatexTableGenerator:
    """Jinja2-based LaTeX longtable generator."""

    template_name = "table.tex"

    def __init__(self) -> None:
        self.logger: Any = logger.bind(generator="latex")  # structlog.BoundLoggerBase
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Jinja2 environment with delimiters that do not clash with LaTeX braces."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            block_start_string=r"\BLOCK{",
            block_end_string="}",
            variable_start_string=r"\VAR{",
            variable_end_string="}",
            comment_start_string=r"\#{",
            comment_end_string="}",
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            undefined=jinja2.StrictUndefined,
        )

    def generate(self, data: Any, options: TypesetOptions) -> TypesetTable:
        """
        Build the longtable for a dataset.

        Raises:
            FormatError: If the dataset cannot be typeset
        """
        try:
            df = to_dataframe(data)
            labels = resolve_labels(df, options.col_names)
            if not labels:
                raise FormatError("Dataset has no columns to typeset")

            rows = iter_rows(df)
            template = self.env.get_template(self.template_name)
            latex = template.render(**self._prepare_context(labels, rows, options))

            self.logger.debug("LaTeX generation completed", columns=len(labels), rows=len(rows))

            return TypesetTable(
                labels=labels,
                row_count=len(rows),
                font_size=options.font_size,
                latex=latex,
            )

        except FormatError as e:
            self.logger.error("LaTeX generation failed", **e.to_dict())
            raise
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("LaTeX generation failed", error=error_msg)
            raise FormatError(error_msg) from e

    def _prepare_context(
        self, labels: List[str], rows: List[List[str]], options: TypesetOptions
    ) -> Dict[str, Any]:
        """Prepare template rendering context."""
        fmt = latex_escape if options.escape else str

        body = []
        for row in rows:
            cells = [fmt(value) for value in row]
            body.append(cells)

        return {
            "font_size": options.font_size,
            "line_height": math.ceil(options.font_size * 1.2),
            "column_spec": self._column_spec(len(labels), options.first_column_width),
            "column_count": len(labels),
            "header": " & ".join(f"\\textbf{{{fmt(label)}}}" for label in labels),
            "rows": body,
            "footnote_title": options.footnote_title,
            "footnote": FOOTNOTE,
        }

    @staticmethod
    def _column_spec(column_count: int, first_width: str) -> str:
        """First column bold with a fixed width, remaining columns left aligned."""
        first = f">{{\\bfseries\\raggedright\\arraybackslash}}p{{{first_width}}}"
        return first + "l" * (column_count - 1)


def generate_typeset(data: Any, options: TypesetOptions) -> TypesetTable:
    """Generate the LaTeX longtable for a dataset."""
    return LatexTableGenerator().generate(data, options)
