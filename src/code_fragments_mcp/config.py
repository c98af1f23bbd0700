"""
Configuration Management for Code Fragments MCP

Sensible defaults with optional environment variable overrides.
"""

import logging
import os
from typing import Optional

from core.ignore_rules import DEFAULT_IGNORE_FILE

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ServerConfig:
    """Server and indexing configuration"""

    DEFAULT_IGNORE_FILE = DEFAULT_IGNORE_FILE
    DEFAULT_IGNORE_CASE = True
    DEFAULT_ALLOW_OVERWRITE = False
    DEFAULT_LOG_LEVEL = "ERROR"

    def __init__(self):
        # Load from environment variables with fallback to defaults
        self.base_path = os.path.abspath(os.environ.get("CODE_FRAGMENTS_BASE_PATH") or os.getcwd())
        self.ignore_file = os.environ.get("CODE_FRAGMENTS_IGNORE_FILE") or self.DEFAULT_IGNORE_FILE
        self.ignore_case = self._get_bool_env("CODE_FRAGMENTS_IGNORE_CASE", self.DEFAULT_IGNORE_CASE)
        self.allow_overwrite = self._get_bool_env(
            "CODE_FRAGMENTS_ALLOW_OVERWRITE", self.DEFAULT_ALLOW_OVERWRITE
        )
        self.log_level = (os.environ.get("CODE_FRAGMENTS_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL).upper()
        self.log_file: Optional[str] = os.environ.get("CODE_FRAGMENTS_LOG_FILE") or None

        self._validate_config()

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean from environment variable with fallback"""
        value = os.environ.get(key)
        if value is None:
            return default
        value = value.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if "/" in self.ignore_file or "\\" in self.ignore_file:
            raise ValueError(f"ignore_file must be a bare file name, got {self.ignore_file!r}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def get_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def __repr__(self) -> str:
        return (
            f"ServerConfig("
            f"base_path={self.base_path!r}, "
            f"ignore_file={self.ignore_file!r}, "
            f"ignore_case={self.ignore_case}, "
            f"allow_overwrite={self.allow_overwrite}, "
            f"log_level={self.log_level!r}, "
            f"log_file={self.log_file!r})"
        )


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get global server configuration instance"""
    global _config
    if _config is None:
        _config = ServerConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Code Fragments Configuration Environment Variables:

- CODE_FRAGMENTS_BASE_PATH: Project root served by the tools (default: current directory)
- CODE_FRAGMENTS_IGNORE_FILE: Per-directory ignore file name (default: .gitignore)
- CODE_FRAGMENTS_IGNORE_CASE: Case-insensitive ignore patterns (default: true)
- CODE_FRAGMENTS_ALLOW_OVERWRITE: Let create_file replace existing files (default: false)
- CODE_FRAGMENTS_LOG_LEVEL: Logging level (default: ERROR)
- CODE_FRAGMENTS_LOG_FILE: Optional file receiving log records as well

Example usage:
    export CODE_FRAGMENTS_BASE_PATH=/path/to/project
    export CODE_FRAGMENTS_LOG_LEVEL=INFO
"""
