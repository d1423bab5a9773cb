"""
Pydantic Models and Schemas
===========================

Data models for render options and rendered table documents.
All models include validation and type hints.
"""

from typing import Optional, List
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from research_tables.config.settings import get_settings


# Enums
class OutputFormat(str, Enum):
    """Output format selector."""
    HTML = "html"
    IMAGE = "image"
    TYPESET = "typeset"


class Locale(str, Enum):
    """Locales supported by the header label presets."""
    JA = "ja"
    EN = "en"


def _default_width() -> int:
    return get_settings().default_width


def _default_height() -> int:
    return get_settings().default_height


def _default_zoom() -> float:
    return get_settings().default_zoom


def _default_html_font_size() -> int:
    return get_settings().html_font_size


def _default_pdf_font_size() -> int:
    return get_settings().pdf_font_size


# Rendering Models
class RenderOptions(BaseModel):
    """Options for rendering a dataset to HTML, PNG or LaTeX."""
    filename: str = Field("table", min_length=1, description="Output name without extension")
    output_dir: Optional[Path] = Field(None, description="Output directory (settings default if unset)")

    # Geometry
    width: int = Field(default_factory=_default_width, gt=0, le=8000, description="Image width")
    height: int = Field(default_factory=_default_height, gt=0, le=8000, description="Image height")
    zoom: float = Field(default_factory=_default_zoom, gt=0, le=8.0, description="Device scale factor")

    # Table content
    col_names: Optional[List[str]] = Field(None, description="Column display labels")
    escape: bool = Field(False, description="HTML-escape cell values")
    font_size: int = Field(default_factory=_default_html_font_size, gt=0, description="Font size in px")
    title: str = Field("Research Table", description="HTML document title")

    # Output selection
    output_format: OutputFormat = Field(OutputFormat.IMAGE, description="Output format")
    locale: Locale = Field(Locale.JA, description="Locale for preset labels")

    # Rasterizer options
    delay: Optional[float] = Field(None, ge=0, description="Settle delay in seconds before capture")
    trim: bool = Field(False, description="Crop white margin from the captured image")

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Strip a trailing extension the caller may have supplied."""
        v = v.strip()
        for suffix in (".html", ".png"):
            if v.lower().endswith(suffix):
                v = v[: -len(suffix)]
        if not v:
            raise ValueError("Filename cannot be empty")
        return v

    def resolved_output_dir(self) -> Path:
        """Output directory, falling back to the configured default."""
        return self.output_dir if self.output_dir is not None else get_settings().output_dir

    def resolved_delay(self) -> float:
        """Settle delay, falling back to the configured default."""
        return self.delay if self.delay is not None else get_settings().rasterizer_delay


class TypesetOptions(BaseModel):
    """Options for LaTeX longtable output."""
    font_size: int = Field(default_factory=_default_pdf_font_size, gt=0, description="Font size in pt")
    col_names: Optional[List[str]] = Field(None, description="Column display labels")
    first_column_width: str = Field("1.5cm", description="Fixed width of the first column")
    footnote_title: str = Field("注：", description="Title printed before the footnote")
    escape: bool = Field(False, description="Escape LaTeX special characters in cells")


class RenderedDocument(BaseModel):
    """A self-contained HTML document holding one styled table."""
    html: str = Field(..., description="Complete HTML document")
    labels: List[str] = Field(..., description="Header labels in display order")
    row_count: int = Field(..., ge=0, description="Number of body rows")

    def __str__(self) -> str:
        return self.html
