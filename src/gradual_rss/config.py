"""
Configuration management using Pydantic Settings.

Parser settings are loaded from environment variables (prefix ``GRADUAL_RSS_``)
and an optional ``.env`` file, or explicitly from a YAML file. Provides
type-safe access to:
- The item delimiter tag
- Read chunk size for byte sources
- Tokenizer options
"""

import codecs
from pathlib import Path
from typing import Optional, Union
import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParserSettings(BaseSettings):
    """
    Runtime options for ItemParser.

    Environment Variables (from .env):
        GRADUAL_RSS_ITEM_TAG: Record-delimiting element name (default "item")
        GRADUAL_RSS_CHUNK_SIZE: Bytes requested per source read
        GRADUAL_RSS_SKIP_WHITESPACE_TEXT: Drop whitespace-only text events
        GRADUAL_RSS_ENCODING: Override the document's declared encoding

    Example:
        >>> settings = ParserSettings(item_tag='Entry')
        >>> settings.item_tag
        'entry'
        >>> settings.chunk_size
        65536
    """

    item_tag: str = Field(
        default="item",
        description="Element name delimiting one record (matched case-insensitively)"
    )

    chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Number of bytes requested from the source per read"
    )

    skip_whitespace_text: bool = Field(
        default=True,
        description="Drop text events consisting only of whitespace, so "
                    "<title>   </title> yields no value"
    )

    encoding: Optional[str] = Field(
        default=None,
        description="Encoding override (any Python codec); None honours the XML declaration"
    )

    model_config = SettingsConfigDict(
        env_prefix='GRADUAL_RSS_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @field_validator('item_tag')
    @classmethod
    def normalize_item_tag(cls, value: str) -> str:
        """Lowercase the delimiter; reject empty names and names with whitespace."""
        value = value.strip()
        if not value or any(ch.isspace() for ch in value):
            raise ValueError(f"Invalid item tag: {value!r}")
        return value.lower()

    @field_validator('encoding')
    @classmethod
    def check_encoding(cls, value: Optional[str]) -> Optional[str]:
        """Reject names Python has no codec for."""
        if value is None:
            return None
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown encoding: {value!r}")
        return value

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'ParserSettings':
        """
        Load settings from a YAML mapping.

        Keys in the file override environment values; missing keys fall back
        to environment variables and then defaults.

        Args:
            path: Path to a YAML file, e.g. config/parser.yaml

        Returns:
            ParserSettings instance

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not contain a mapping

        Example:
            >>> settings = ParserSettings.from_yaml('config/parser.yaml')
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found at {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ValueError(
                f"Config file {config_path} must contain a mapping, "
                f"got {type(yaml_data).__name__}"
            )

        return cls(**yaml_data)


# Singleton pattern - loaded once, cached until reset
_settings: Optional[ParserSettings] = None


def get_settings() -> ParserSettings:
    """
    Get global parser settings (lazy-loaded singleton).

    Returns:
        Singleton ParserSettings instance built from the environment

    Example:
        >>> settings = get_settings()
        >>> settings is get_settings()
        True
    """
    global _settings
    if _settings is None:
        _settings = ParserSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
