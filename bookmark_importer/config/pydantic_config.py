"""
Pydantic-based configuration system for the Bookmark Importer.

Configuration covers the ceilings the importer enforces and the default
import options. It can be provided as a TOML or JSON file; every value has a
default so an empty configuration is valid.
"""

import json
import os
import sys
from pathlib import Path
from typing import Dict, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..utils.error_handler import ConfigurationError

MAX_BOOKMARKS_ENV_VAR = "BOOKMARK_IMPORTER_MAX_BOOKMARKS"


class LimitsConfig(BaseModel):
    """Size and structure ceilings applied before and during parsing."""

    html_max_mb: float = Field(
        default=50,
        gt=0,
        le=500,
        description="Maximum size of a generic HTML export in MB",
        json_schema_extra={
            "error_msg": "HTML size limit must be between 0 and 500 MB."
        },
    )
    netscape_max_mb: float = Field(
        default=30,
        gt=0,
        le=500,
        description="Maximum size of a Netscape bookmark export in MB",
        json_schema_extra={
            "error_msg": "Netscape size limit must be between 0 and 500 MB."
        },
    )
    json_max_mb: float = Field(
        default=20,
        gt=0,
        le=500,
        description="Maximum size of a JSON export in MB",
        json_schema_extra={
            "error_msg": "JSON size limit must be between 0 and 500 MB."
        },
    )
    max_nesting_depth: int = Field(
        default=100,
        ge=8,
        le=200,
        description="Maximum folder nesting depth accepted in an export",
        json_schema_extra={
            "error_msg": "Nesting depth must be between 8 and 200. "
            "Browser exports rarely nest deeper than 20 levels."
        },
    )

    def max_bytes(self) -> Dict[str, int]:
        """Byte ceilings keyed by format name."""
        return {
            "html": int(self.html_max_mb * 1024 * 1024),
            "netscape": int(self.netscape_max_mb * 1024 * 1024),
            "json": int(self.json_max_mb * 1024 * 1024),
        }


class DefaultsConfig(BaseModel):
    """Default import options used when a caller does not pass its own."""

    max_bookmarks: int = Field(
        default=5000,
        ge=1,
        le=1_000_000,
        description="Maximum number of bookmarks kept from one file",
        json_schema_extra={
            "error_msg": "Max bookmarks must be between 1 and 1,000,000."
        },
    )
    validate_urls: bool = Field(
        default=True, description="Drop records whose URL is not absolute"
    )
    include_folders: bool = Field(
        default=True, description="Return folder names with the records"
    )
    filter_duplicates: bool = Field(
        default=True, description="Keep only the first record per URL"
    )

    @field_validator("max_bookmarks")
    @classmethod
    def validate_max_bookmarks(cls, v):
        """Warn about caps large enough to stress downstream storage."""
        if v > 50_000:
            import warnings

            warnings.warn(
                f"High bookmark cap ({v}) may produce imports too large to "
                f"persist one record at a time. Consider 5000-10000.",
                UserWarning,
            )
        return v


class ImporterConfig(BaseModel):
    """Main configuration model."""

    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)


class ConfigurationManager:
    """Manages loading and validation of configuration from multiple sources."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file (TOML or JSON)
        """
        self._config: Optional[ImporterConfig] = None
        self._load_configuration(Path(config_path) if config_path else None)

    def _get_default_config_paths(self) -> list[Path]:
        """Get list of default configuration file paths to try."""
        if getattr(sys, "frozen", False):
            app_dir = Path(sys.executable).parent
        else:
            app_dir = Path.cwd()

        return [
            app_dir / "bookmark_importer.toml",
            app_dir / "bookmark_importer.json",
        ]

    def _load_configuration(self, config_path: Optional[Path] = None) -> None:
        """Load configuration from file or use defaults."""
        config_data = {}

        if config_path:
            config_data = self._load_config_file(config_path)
        else:
            for path in self._get_default_config_paths():
                if path.exists():
                    config_data = self._load_config_file(path)
                    break

        self._load_overrides_from_env(config_data)

        try:
            self._config = ImporterConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    def _load_config_file(self, config_path: Path) -> Dict:
        """Load configuration from TOML or JSON file."""
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            if config_path.suffix.lower() == ".toml":
                return toml.load(config_path)
            elif config_path.suffix.lower() == ".json":
                with open(config_path, "r", encoding="utf-8") as f:
                    return json.load(f)
        except (OSError, ValueError, toml.TomlDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {config_path}: {e}"
            ) from e

        raise ConfigurationError(
            f"Unsupported configuration file format: {config_path.suffix}"
        )

    def _load_overrides_from_env(self, config_data: Dict) -> None:
        """Apply environment variable overrides on top of file values."""
        max_bookmarks = os.getenv(MAX_BOOKMARKS_ENV_VAR)
        if max_bookmarks:
            config_data.setdefault("defaults", {})["max_bookmarks"] = max_bookmarks

    @property
    def config(self) -> ImporterConfig:
        """Get the current configuration."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    def create_sample_config(self, output_path: Path, format: str = "toml") -> None:
        """Create a sample configuration file."""
        sample_config = ImporterConfig().model_dump()

        if format.lower() == "toml":
            with open(output_path, "w", encoding="utf-8") as f:
                toml.dump(sample_config, f)
        elif format.lower() == "json":
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(sample_config, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")


def format_config_error(error: ValidationError) -> str:
    """
    Convert a Pydantic ValidationError into a user-friendly error message.

    Args:
        error: Pydantic ValidationError instance

    Returns:
        Formatted error message
    """
    error_messages = []

    for error_detail in error.errors():
        location = " -> ".join(str(part) for part in error_detail["loc"]) or (
            "Configuration"
        )
        message = error_detail.get("msg", "Invalid configuration value")
        input_value = error_detail.get("input", "N/A")
        error_messages.append(f"  {location}: {message} (got: {input_value})")

    return "Configuration validation failed:\n" + "\n".join(error_messages)


__all__ = [
    "LimitsConfig",
    "DefaultsConfig",
    "ImporterConfig",
    "ConfigurationManager",
    "format_config_error",
    "MAX_BOOKMARKS_ENV_VAR",
]
