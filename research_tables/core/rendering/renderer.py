"""
Table Renderer
==============

Entry points that sequence the HTML builder, the rasterizer and the LaTeX
builder into finished artifacts.

    dataset -> HTML document -> file
    dataset -> HTML document -> temporary file -> rasterizer -> PNG
    dataset -> LaTeX longtable object
"""

from typing import Any, Optional, Union
from pathlib import Path
import tempfile

from research_tables.config.logging import get_logger
from research_tables.config.settings import get_settings
from research_tables.core.errors import ExternalToolError
from research_tables.core.rendering.html_generator import HTMLTableGenerator
from research_tables.core.rendering.png_generator import (
    BaseRasterizer,
    RasterizerFactory,
    trim_whitespace,
)
from research_tables.core.rendering.presets import hypothesis_labels, lang_to_locale, to_locale
from research_tables.core.rendering.typeset_generator import (
    FOOTNOTE_TITLES,
    LatexTableGenerator,
    TypesetTable,
)
from research_tables.models.schemas import (
    Locale,
    OutputFormat,
    RenderedDocument,
    RenderOptions,
    TypesetOptions,
)

logger = get_logger(__name__)

SCREENSHOT_GUIDANCE = "Open the HTML file in a browser and take a screenshot"


class TableRenderer:
    """Render datasets as HTML files, PNG images or LaTeX tables."""

    def __init__(
        self,
        rasterizer: Optional[BaseRasterizer] = None,
        html_generator: Optional[HTMLTableGenerator] = None,
        typeset_generator: Optional[LatexTableGenerator] = None,
    ) -> None:
        self.settings = get_settings()
        self._rasterizer = rasterizer
        self.html_generator = html_generator or HTMLTableGenerator()
        self.typeset_generator = typeset_generator or LatexTableGenerator()
        self.logger: Any = logger.bind(component="table_renderer")  # structlog.BoundLoggerBase

    @property
    def rasterizer(self) -> BaseRasterizer:
        """Rasterizer in use, created from settings on first access."""
        if self._rasterizer is None:
            self._rasterizer = RasterizerFactory.create_rasterizer(self.settings.rasterizer)
        return self._rasterizer

    def build_document(self, data: Any, options: Optional[RenderOptions] = None) -> RenderedDocument:
        """Build the HTML document without touching the filesystem."""
        return self.html_generator.generate(data, options or RenderOptions())

    def render_html(self, data: Any, options: Optional[RenderOptions] = None) -> Path:
        """
        Write the styled HTML table to ``<output_dir>/<filename>.html``.

        Raises:
            FormatError: If the dataset cannot be turned into markup
            OSError: If the destination is not writable
        """
        options = options or RenderOptions()
        document = self.build_document(data, options)
        path = self._output_path(options, ".html")

        self.html_generator.write(document, path)
        self.logger.info(
            "HTML file written",
            path=str(path),
            columns=len(document.labels),
            rows=document.row_count,
        )
        return path

    def render_image(self, data: Any, options: Optional[RenderOptions] = None) -> Path:
        """
        Rasterize the styled HTML table to ``<output_dir>/<filename>.png``.

        The markup goes through a temporary file that is removed on every
        exit path. When the rasterizer is unavailable or fails, the markup is
        kept as ``<output_dir>/<filename>.html`` and that path is returned.

        Raises:
            FormatError: If the dataset cannot be turned into markup
            OSError: If the output or temporary files cannot be written
        """
        options = options or RenderOptions()
        document = self.build_document(data, options)
        png_path = self._output_path(options, ".png")
        temp_path: Optional[Path] = None

        try:
            temp_path = self._write_temp_markup(document, options)
            self.rasterizer.rasterize(temp_path, png_path, options)
            if options.trim:
                trim_whitespace(png_path)

            self.logger.info(
                "Image file written",
                path=str(png_path),
                width=options.width,
                height=options.height,
                zoom=options.zoom,
            )
            return png_path

        except ExternalToolError as e:
            fallback_path = self.html_generator.write(document, self._output_path(options, ".html"))
            self.logger.warning(
                "Rasterizer unavailable, HTML kept for manual screenshot",
                fallback_path=str(fallback_path),
                guidance=SCREENSHOT_GUIDANCE,
                **e.to_dict(),
            )
            return fallback_path

        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

    def render_typeset_document(
        self, data: Any, options: Optional[TypesetOptions] = None
    ) -> TypesetTable:
        """
        Build the LaTeX longtable for a dataset. Nothing is written to disk.

        Raises:
            FormatError: If the dataset cannot be typeset
        """
        table = self.typeset_generator.generate(data, options or TypesetOptions())
        self.logger.info(
            "Typeset table built", columns=len(table.labels), rows=table.row_count
        )
        return table

    def render_preset(
        self,
        data: Any,
        filename: str = "hypotheses",
        locale: Union[Locale, str] = Locale.JA,
        options: Optional[RenderOptions] = None,
    ) -> Path:
        """
        Render a hypothesis table image with the fixed header labels of a locale.

        Raises:
            FormatError: If the locale is unsupported or the dataset does not
                have one column per preset label
        """
        locale = to_locale(locale)
        base = (options or RenderOptions()).model_dump()
        base.update(filename=filename, locale=locale, col_names=hypothesis_labels(locale))
        return self.render_image(data, RenderOptions.model_validate(base))

    def render(
        self, data: Any, options: Optional[RenderOptions] = None
    ) -> Union[Path, TypesetTable]:
        """Render in the format selected by ``options.output_format``."""
        options = options or RenderOptions()

        if options.output_format == OutputFormat.HTML:
            return self.render_html(data, options)
        if options.output_format == OutputFormat.TYPESET:
            typeset_options = TypesetOptions(
                col_names=options.col_names,
                footnote_title=FOOTNOTE_TITLES[options.locale],
            )
            return self.render_typeset_document(data, typeset_options)
        return self.render_image(data, options)

    def _output_path(self, options: RenderOptions, suffix: str) -> Path:
        output_dir = options.resolved_output_dir()
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir / f"{options.filename}{suffix}"

    def _write_temp_markup(self, document: RenderedDocument, options: RenderOptions) -> Path:
        """
        Markup for the rasterizer, in the configured temporary directory.

        The file is removed again if writing it fails.
        """
        temp_dir = self.settings.temp_path
        if temp_dir is not None:
            temp_dir.mkdir(parents=True, exist_ok=True)

        content = document.html.encode("utf-8")
        handle = tempfile.NamedTemporaryFile(
            mode="wb",
            suffix=".html",
            prefix=f"{options.filename}_",
            dir=temp_dir,
            delete=False,
        )
        temp_path = Path(handle.name)

        try:
            with handle:
                handle.write(content)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

        return temp_path


# Global renderer instance - will be initialized when needed
_default_renderer: Optional[TableRenderer] = None


def get_renderer() -> TableRenderer:
    """Get the shared renderer instance."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = TableRenderer()
    return _default_renderer


def render_html(data: Any, options: Optional[RenderOptions] = None) -> Path:
    """Write a dataset as a styled HTML table file."""
    return get_renderer().render_html(data, options)


def render_image(data: Any, options: Optional[RenderOptions] = None) -> Path:
    """Write a dataset as a PNG table image, or the HTML fallback."""
    return get_renderer().render_image(data, options)


def render_typeset_document(data: Any, options: Optional[TypesetOptions] = None) -> TypesetTable:
    """Build a LaTeX longtable for a dataset."""
    return get_renderer().render_typeset_document(data, options)


def render_preset(
    data: Any,
    filename: str = "hypotheses",
    locale: Union[Locale, str] = Locale.JA,
    options: Optional[RenderOptions] = None,
) -> Path:
    """Render a hypothesis table image with localized header labels."""
    return get_renderer().render_preset(data, filename, locale, options)


def render(data: Any, options: Optional[RenderOptions] = None) -> Union[Path, TypesetTable]:
    """Render a dataset in the format selected by the options."""
    return get_renderer().render(data, options)


def create_hypothesis_table(
    data: Any,
    filename: str = "hypotheses",
    lang: str = "ja",
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Path:
    """
    Hypothesis table image with the width/height keyword interface.

    Any ``lang`` other than ``ja`` selects the English labels.
    """
    geometry = {}
    if width is not None:
        geometry["width"] = width
    if height is not None:
        geometry["height"] = height
    return render_preset(data, filename, lang_to_locale(lang), RenderOptions(**geometry))
