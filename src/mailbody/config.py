"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Processing limits
    max_email_size_mb: int = 25
    max_mime_depth: int = 50  # Nesting levels below the top-level part
    max_mime_parts: int = 1000  # Parts visited per message before the walk stops

    # Link hardening
    html_link_style: str = "color:#3b82f6; text-decoration:underline;"
    text_link_style: str = "color:#3b82f6;"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
