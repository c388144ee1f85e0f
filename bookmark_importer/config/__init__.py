"""Configuration models and loading."""

from .pydantic_config import ConfigurationManager, ImporterConfig

__all__ = ["ConfigurationManager", "ImporterConfig"]
