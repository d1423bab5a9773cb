"""
PNG Generator
=============

Headless-browser rasterization of HTML table files into PNG images.
Rasterizers share one interface so the renderer can swap Playwright for a
Chrome binary, or for a fake in tests.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type
from abc import ABC, abstractmethod
from pathlib import Path
import shutil
import subprocess

from PIL import Image, ImageChops  # type: ignore

from research_tables.config.logging import get_logger
from research_tables.config.settings import get_settings
from research_tables.core.errors import ExternalToolError
from research_tables.models.schemas import RenderOptions

logger = get_logger(__name__)

CHROME_CANDIDATES = (
    "google-chrome",
    "google-chrome-stable",
    "chromium",
    "chromium-browser",
    "chrome",
)

TRIM_PADDING = 10


def load_playwright() -> Tuple[Callable[[], Any], Type[Exception]]:
    """
    Import the Playwright sync API on first use.

    Returns:
        The ``sync_playwright`` entry point and Playwright's base error class

    Raises:
        ExternalToolError: If the playwright package is not installed
    """
    try:
        from playwright.sync_api import Error as PlaywrightError, sync_playwright
    except ImportError as e:
        raise ExternalToolError("Playwright is not installed", tool="playwright") from e
    return sync_playwright, PlaywrightError


class BaseRasterizer(ABC):
    """Abstract base class for HTML-to-PNG rasterizers."""

    name = "base"

    @abstractmethod
    def rasterize(self, html_path: Path, output_path: Path, options: RenderOptions) -> Path:
        """
        Capture an HTML file as a PNG image.

        Raises:
            ExternalToolError: If the tool is unavailable or fails
        """
        pass


class PlaywrightRasterizer(BaseRasterizer):
    """Chromium screenshots through the Playwright sync API."""

    name = "playwright"

    def __init__(self) -> None:
        self.settings = get_settings()
        self.logger: Any = logger.bind(rasterizer=self.name)  # structlog.BoundLoggerBase

    def rasterize(self, html_path: Path, output_path: Path, options: RenderOptions) -> Path:
        sync_playwright, PlaywrightError = load_playwright()
        delay_ms = options.resolved_delay() * 1000
        self.logger.info(
            "Rasterizing HTML with Playwright",
            html_path=str(html_path),
            width=options.width,
            height=options.height,
            zoom=options.zoom,
        )

        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(
                    headless=self.settings.playwright_headless,
                    args=[
                        "--no-sandbox",
                        "--disable-setuid-sandbox",
                        "--disable-dev-shm-usage",
                    ],
                )
                try:
                    context = browser.new_context(**self._context_options(options))
                    page = context.new_page()
                    page.set_default_timeout(self.settings.rasterizer_timeout * 1000)
                    page.goto(html_path.resolve().as_uri(), wait_until="load")
                    page.wait_for_timeout(delay_ms)
                    page.screenshot(path=str(output_path), type="png", full_page=True)
                finally:
                    browser.close()
        except PlaywrightError as e:
            error_msg = f"Playwright screenshot failed: {e}"
            self.logger.error("Rasterization failed", error=error_msg)
            raise ExternalToolError(error_msg, tool=self.name) from e

        return output_path

    def _context_options(self, options: RenderOptions) -> Dict[str, Any]:
        """Browser context with the requested viewport and scale."""
        return {
            "viewport": {"width": options.width, "height": options.height},
            "device_scale_factor": options.zoom,
        }


class ChromeCLIRasterizer(BaseRasterizer):
    """Screenshots by running a headless Chrome/Chromium binary."""

    name = "chrome"

    def __init__(self, binary: Optional[str] = None) -> None:
        self.settings = get_settings()
        self.binary = binary or self.settings.chrome_binary
        self.logger: Any = logger.bind(rasterizer=self.name)  # structlog.BoundLoggerBase

    def find_binary(self) -> str:
        """Locate the browser executable."""
        candidates: Sequence[str] = (self.binary,) if self.binary else CHROME_CANDIDATES
        for candidate in candidates:
            found = shutil.which(candidate)
            if found:
                return found

        raise ExternalToolError(
            "Chrome/Chromium executable not found", tool=self.name, searched=list(candidates)
        )

    def build_command(
        self, binary: str, html_path: Path, output_path: Path, options: RenderOptions
    ) -> List[str]:
        """Command line for one headless screenshot."""
        delay_ms = int(options.resolved_delay() * 1000)
        return [
            binary,
            "--headless=new",
            "--disable-gpu",
            "--no-sandbox",
            "--hide-scrollbars",
            f"--screenshot={output_path.resolve()}",
            f"--window-size={options.width},{options.height}",
            f"--force-device-scale-factor={options.zoom}",
            f"--virtual-time-budget={delay_ms}",
            html_path.resolve().as_uri(),
        ]

    def rasterize(self, html_path: Path, output_path: Path, options: RenderOptions) -> Path:
        binary = self.find_binary()
        command = self.build_command(binary, html_path, output_path, options)
        self.logger.info("Rasterizing HTML with Chrome", binary=binary, html_path=str(html_path))

        try:
            subprocess.run(
                command,
                check=True,
                capture_output=True,
                timeout=self.settings.rasterizer_timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            self.logger.error("Rasterization failed", returncode=e.returncode, stderr=stderr)
            raise ExternalToolError(
                "Chrome screenshot failed", tool=self.name, returncode=e.returncode
            ) from e
        except subprocess.TimeoutExpired as e:
            self.logger.error("Rasterization timed out", timeout=e.timeout)
            raise ExternalToolError("Chrome screenshot timed out", tool=self.name) from e
        except OSError as e:
            self.logger.error("Rasterization failed", error=str(e))
            raise ExternalToolError(f"Chrome could not be started: {e}", tool=self.name) from e

        if not output_path.exists():
            raise ExternalToolError("Chrome produced no screenshot", tool=self.name)

        return output_path


def trim_whitespace(png_path: Path, padding: int = TRIM_PADDING) -> Path:
    """
    Crop the white margin around the table in a screenshot.

    The image is left untouched when it has no non-white content or cannot
    be processed.
    """
    try:
        with Image.open(png_path) as image:
            rgb = image.convert("RGB")

        background = Image.new("RGB", rgb.size, (255, 255, 255))
        bbox = ImageChops.difference(rgb, background).getbbox()
        if bbox is None:
            return png_path

        left, top, right, bottom = bbox
        cropped = rgb.crop(
            (
                max(left - padding, 0),
                max(top - padding, 0),
                min(right + padding, rgb.width),
                min(bottom + padding, rgb.height),
            )
        )
        cropped.save(png_path, format="PNG", optimize=True)

        logger.debug(
            "PNG trim completed",
            original_size=list(rgb.size),
            trimmed_size=list(cropped.size),
        )

    except OSError as e:
        logger.warning("PNG trim failed, using original", error=str(e))

    return png_path


class RasterizerFactory:
    """Factory for creating rasterizers."""

    _rasterizers: Dict[str, Type[BaseRasterizer]] = {
        "playwright": PlaywrightRasterizer,
        "chrome": ChromeCLIRasterizer,
    }

    @classmethod
    def create_rasterizer(cls, rasterizer_type: Optional[str] = None) -> BaseRasterizer:
        """
        Create rasterizer instance.

        Args:
            rasterizer_type: Type of rasterizer, configured default if omitted

        Returns:
            Rasterizer instance

        Raises:
            ValueError: If rasterizer type is not supported
        """
        rasterizer_type = rasterizer_type or get_settings().rasterizer
        if rasterizer_type not in cls._rasterizers:
            raise ValueError(f"Unsupported rasterizer type: {rasterizer_type}")

        return cls._rasterizers[rasterizer_type]()
