"""
Test Mocks
===========

Fake rasterizers standing in for the headless browser.
"""

from pathlib import Path
from typing import List, Tuple

from PIL import Image  # type: ignore

from research_tables.core.errors import ExternalToolError
from research_tables.core.rendering.png_generator import BaseRasterizer
from research_tables.models.schemas import RenderOptions


class FakeRasterizer(BaseRasterizer):
    """Writes a white PNG of the requested geometry and records each call."""

    name = "fake"

    def __init__(self) -> None:
        self.calls: List[Tuple[Path, Path, RenderOptions]] = []
        self.seen_markup: List[str] = []

    def rasterize(self, html_path: Path, output_path: Path, options: RenderOptions) -> Path:
        self.calls.append((html_path, output_path, options))
        self.seen_markup.append(html_path.read_text(encoding="utf-8"))

        size = (int(options.width * options.zoom), int(options.height * options.zoom))
        Image.new("RGB", size, (255, 255, 255)).save(output_path, format="PNG")
        return output_path


class UnavailableRasterizer(BaseRasterizer):
    """Behaves like a rasterizer whose browser is not installed."""

    name = "unavailable"

    def __init__(self) -> None:
        self.calls: List[Path] = []

    def rasterize(self, html_path: Path, output_path: Path, options: RenderOptions) -> Path:
        self.calls.append(html_path)
        raise ExternalToolError("Browser executable not found", tool=self.name)


class CrashingRasterizer(BaseRasterizer):
    """Fails with an error that is not an external tool error."""

    name = "crashing"

    def rasterize(self, html_path: Path, output_path: Path, options: RenderOptions) -> Path:
        raise RuntimeError("unexpected crash")
