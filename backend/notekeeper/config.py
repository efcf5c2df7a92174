"""
NoteKeeper — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the server lifecycle manager and handlers.
When:  Loaded once at module import time.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running locally; every value can
    be overridden with an environment variable of the same (case-insensitive)
    name, e.g. SERVER_PORT=9000.
    """

    # ── Server ────────────────────────────────────────────────────────────
    server_host: str = Field(default="127.0.0.1")
    server_port: int = Field(default=8081, ge=1, le=65535)

    # ── Timeouts (seconds) ────────────────────────────────────────────────
    # read_timeout bounds how long a handler waits for the request body.
    # write_timeout bounds how long an idle keep-alive connection is held.
    read_timeout: float = Field(default=15.0, gt=0)
    write_timeout: float = Field(default=15.0, gt=0)

    # What: Time allowed for in-flight requests to finish once shutdown starts
    # After it elapses, remaining request tasks are cancelled.
    shutdown_grace_period: float = Field(default=15.0, gt=0)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def server_address(self) -> str:
        """host:port string used in log lines."""
        return f"{self.server_host}:{self.server_port}"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # SERVER_PORT and server_port both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
