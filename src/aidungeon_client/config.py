"""
Configuration management for the AI Dungeon client.

This module handles configuration from multiple sources with the following
precedence (highest to lowest):

1. Command-line arguments (--api-url, --timeout, --log-level)
2. Environment variables (AIDUNGEON_API_URL, AIDUNGEON_TIMEOUT, ...)
3. Default values

The configuration is immutable once created. The transport is configured
from it once, at bind time; individual requests never override it.

Example:
    # Library use: environment + defaults
    config = Config.from_env()

    # CLI use
    config = Config.from_args(["--api-url", "http://localhost:8080"])
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# DEFAULT CONFIGURATION VALUES
# =============================================================================

DEFAULT_API_URL = "https://api.aidungeon.io"

# Generation requests can take a while on the server side.
DEFAULT_TIMEOUT = 60.0

# Sent as User-Agent on every request.
DEFAULT_USER_AGENT = "aidungeon-client"

DEFAULT_LOG_LEVEL = "WARNING"

ENV_API_URL = "AIDUNGEON_API_URL"
ENV_TIMEOUT = "AIDUNGEON_TIMEOUT"
ENV_USER_AGENT = "AIDUNGEON_USER_AGENT"
ENV_LOG_LEVEL = "AIDUNGEON_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for the client.

    Attributes:
        base_url: Root URL of the API, without trailing slash.
        timeout: HTTP request timeout in seconds, applied to every call.
        user_agent: Fixed client identification header value.
        log_level: Level name applied by :func:`configure_logging`.
    """

    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """
        Validate configuration values after initialization.

        Raises:
            ValueError: If a value is empty, out of range or unknown.
        """
        if not self.base_url:
            raise ValueError("base_url cannot be empty")

        if not self.timeout > 0:
            raise ValueError("timeout must be a positive number")

        if not self.user_agent:
            raise ValueError("user_agent cannot be empty")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

    @classmethod
    def from_env(cls) -> Config:
        """Create a Config from environment variables and defaults."""
        return cls._resolve(api_url=None, timeout=None, log_level=None)

    @classmethod
    def from_args(cls, args: Sequence[str] | None = None) -> Config:
        """
        Create a Config from command-line arguments.

        Unknown arguments are ignored so this can share an argv with a
        larger parser.

        Args:
            args: Arguments to parse. If None, uses sys.argv[1:].
        """
        parsed, _ = add_arguments(argparse.ArgumentParser(add_help=False)).parse_known_args(args)
        return cls.from_namespace(parsed)

    @classmethod
    def from_namespace(cls, parsed: argparse.Namespace) -> Config:
        """Create a Config from a namespace built with :func:`add_arguments`."""
        return cls._resolve(
            api_url=parsed.api_url,
            timeout=parsed.timeout,
            log_level=parsed.log_level,
        )

    @classmethod
    def _resolve(
        cls,
        *,
        api_url: str | None,
        timeout: float | None,
        log_level: str | None,
    ) -> Config:
        # CLI > ENV > DEFAULT for each value
        base_url = api_url or os.environ.get(ENV_API_URL) or DEFAULT_API_URL
        base_url = base_url.rstrip("/")

        if timeout is None:
            if ENV_TIMEOUT in os.environ:
                timeout = float(os.environ[ENV_TIMEOUT])
            else:
                timeout = DEFAULT_TIMEOUT

        level = log_level or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL
        user_agent = os.environ.get(ENV_USER_AGENT) or DEFAULT_USER_AGENT

        return cls(
            base_url=base_url,
            timeout=timeout,
            user_agent=user_agent,
            log_level=level.upper(),
        )


def add_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the shared connection options on ``parser``."""
    parser.add_argument(
        "--api-url",
        dest="api_url",
        default=None,  # None means "check env var, then use default"
        help=f"API root URL (default: {DEFAULT_API_URL}, or {ENV_API_URL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT}, or {ENV_TIMEOUT})",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=[level.lower() for level in _LOG_LEVELS] + list(_LOG_LEVELS),
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL}, or {ENV_LOG_LEVEL})",
    )
    return parser


def configure_logging(config: Config) -> None:
    """Apply ``config.log_level`` to the package logger."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("aidungeon_client").setLevel(config.log_level.upper())
