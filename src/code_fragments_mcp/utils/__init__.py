"""
Utility modules for the Code Fragments MCP server.

This package contains shared utilities:
- error_handler: Decorator-based error handling for MCP entry points
- paths: Request path resolution against the project root
"""

from .error_handler import create_error_response, handle_mcp_errors
from .paths import relative_to_base, resolve_file_path, to_sub_path

__all__ = [
    'create_error_response',
    'handle_mcp_errors',
    'relative_to_base',
    'resolve_file_path',
    'to_sub_path',
]
