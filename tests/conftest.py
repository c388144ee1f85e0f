"""
Pytest configuration and shared fixtures for bookmark importer tests.

This module provides temporary files, sample exports and configuration
instances shared across multiple test modules.
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from bookmark_importer.config.pydantic_config import (
    MAX_BOOKMARKS_ENV_VAR,
    ImporterConfig,
    LimitsConfig,
)
from bookmark_importer.core.import_module import BookmarkImporter
from tests.fixtures.test_data import (
    CHROME_JSON_EXPORT,
    CHROME_NETSCAPE_EXPORT,
    GENERIC_HTML_EXPORT,
)

# ============================================================================
# Pytest Configuration
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep a developer's environment from leaking into configuration."""
    monkeypatch.delenv(MAX_BOOKMARKS_ENV_VAR, raising=False)


# ============================================================================
# Temporary Directory and File Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp(prefix="bookmark_import_test_"))
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path)


@pytest.fixture
def netscape_file(temp_dir: Path) -> Path:
    """Chrome Netscape export written to disk."""
    path = temp_dir / "bookmarks.html"
    path.write_text(CHROME_NETSCAPE_EXPORT, encoding="utf-8")
    return path


@pytest.fixture
def generic_html_file(temp_dir: Path) -> Path:
    """Generic bookmark HTML written to disk."""
    path = temp_dir / "exported.htm"
    path.write_text(GENERIC_HTML_EXPORT, encoding="utf-8")
    return path


@pytest.fixture
def chrome_json_file(temp_dir: Path) -> Path:
    """Chrome JSON bookmark file written to disk."""
    path = temp_dir / "Bookmarks.json"
    path.write_text(json.dumps(CHROME_JSON_EXPORT), encoding="utf-8")
    return path


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary TOML configuration file."""
    config_path = temp_dir / "bookmark_importer.toml"
    config_path.write_text(
        """
[limits]
html_max_mb = 10
netscape_max_mb = 5
json_max_mb = 2
max_nesting_depth = 40

[defaults]
max_bookmarks = 250
validate_urls = true
include_folders = false
filter_duplicates = true
""",
        encoding="utf-8",
    )
    return config_path


# ============================================================================
# Configuration and Importer Fixtures
# ============================================================================


@pytest.fixture
def default_config() -> ImporterConfig:
    """Configuration with built-in defaults."""
    return ImporterConfig()


@pytest.fixture
def tiny_limits_config() -> ImporterConfig:
    """Configuration whose ceilings every sample export exceeds."""
    return ImporterConfig(
        limits=LimitsConfig(html_max_mb=0.0001, netscape_max_mb=0.0001, json_max_mb=0.0001)
    )


@pytest.fixture
def importer(default_config: ImporterConfig) -> BookmarkImporter:
    """Create a BookmarkImporter with default configuration."""
    return BookmarkImporter(config=default_config)


@pytest.fixture
def empty_cwd(monkeypatch, temp_dir: Path) -> Path:
    """Run from an empty directory so no default config file is picked up."""
    monkeypatch.chdir(temp_dir)
    return temp_dir
