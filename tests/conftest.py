"""
Test Configuration
==================

Pytest configuration with settings overrides, sample datasets and fake
rasterizers. No browser is needed to run the suite.
"""

import os

os.environ.setdefault("RESEARCH_TABLES_ENVIRONMENT", "testing")

from pathlib import Path
from typing import Generator

import pandas as pd
import pytest

from research_tables.config import settings as settings_module
from research_tables.config.settings import Settings
from research_tables.core.rendering import renderer as renderer_module
from research_tables.core.rendering.renderer import TableRenderer
from research_tables.models.schemas import RenderOptions

from tests.utils.data_generators import DatasetGenerator
from tests.utils.mocks import FakeRasterizer, UnavailableRasterizer


class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    log_level: str = "DEBUG"
    rasterizer_delay: float = 0.0


@pytest.fixture
def test_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Settings, None, None]:
    """Settings with output and temp directories under tmp_path."""
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    output_dir = tmp_path / "out"
    output_dir.mkdir()

    settings = TestSettings(output_dir=output_dir, temp_path=temp_dir)
    monkeypatch.setattr(settings_module, "settings", settings)
    monkeypatch.setattr(renderer_module, "_default_renderer", None)
    yield settings


@pytest.fixture
def output_dir(test_settings: Settings) -> Path:
    return test_settings.output_dir


@pytest.fixture
def temp_dir(test_settings: Settings) -> Path:
    assert test_settings.temp_path is not None
    return test_settings.temp_path


@pytest.fixture
def simple_df() -> pd.DataFrame:
    """Columns id/value with two rows."""
    return DatasetGenerator.generate_simple()


@pytest.fixture
def hypotheses_df() -> pd.DataFrame:
    return DatasetGenerator.generate_hypotheses()


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def unavailable_rasterizer() -> UnavailableRasterizer:
    return UnavailableRasterizer()


@pytest.fixture
def renderer(test_settings: Settings, fake_rasterizer: FakeRasterizer) -> TableRenderer:
    """Renderer wired to the fake rasterizer."""
    return TableRenderer(rasterizer=fake_rasterizer)


@pytest.fixture
def options(test_settings: Settings) -> RenderOptions:
    return RenderOptions(filename="table")
