"""
Configuration management for the regex-unescape command line tool.

Supports environment variables, .env files, and command-line arguments.
The decoder itself takes no configuration; these settings only shape how
the CLI reads input and reports results.
"""

import logging
import sys
from typing import Optional, Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    CLI settings with environment variable support.

    All settings can be configured via:
    - Environment variables (prefix: REGEX_UNESCAPE_)
    - .env file
    - Command-line arguments (via argparse in __main__.py)
    """

    model_config = SettingsConfigDict(
        env_prefix="REGEX_UNESCAPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =======
    # Logging
    # =======
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level for messages written to stderr"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging format string"
    )

    # =============
    # Input/Output
    # =============
    encoding: str = Field(
        default="utf-8",
        description="Text encoding for --file input, stdin and stdout"
    )
    output_errors: Literal["backslashreplace", "surrogatepass", "replace", "strict"] = Field(
        default="backslashreplace",
        description="Codec error handler for characters stdout cannot encode (e.g. lone surrogates)"
    )
    output_format: Literal["text", "json"] = Field(
        default="text",
        description="Output format: 'text' for decoded text, 'json' for a report"
    )
    line_mode: bool = Field(
        default=False,
        description="Decode each input line independently"
    )
    max_input_chars: int = Field(
        default=0,
        ge=0,
        description="Refuse inputs longer than this many characters (0 = unlimited)"
    )

    def logging_config(self) -> dict:
        """Keyword arguments for logging.basicConfig."""
        return {
            "level": getattr(logging, self.log_level),
            "format": self.log_format,
            "handlers": [logging.StreamHandler(sys.stderr)],
        }

    def exceeds_limit(self, text: str) -> bool:
        """Whether text is longer than max_input_chars allows."""
        return self.max_input_chars > 0 and len(text) > self.max_input_chars


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset settings to default."""
    global _settings
    _settings = None
