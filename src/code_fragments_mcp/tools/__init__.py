"""
Tools - MCP tool collection

Plain functions over the core indexer and extractor, dispatched by name.
"""

from .fragment_tools import (get_project_root, reset_project_root, set_project_root,
                             tool_create_file, tool_get_file_content, tool_get_symbol_content,
                             tool_list_files, tool_list_symbols, tool_set_project_path)
from .registry import execute_tool, get_tool_registry

__all__ = [
    'execute_tool',
    'get_project_root',
    'get_tool_registry',
    'reset_project_root',
    'set_project_root',
    'tool_create_file',
    'tool_get_file_content',
    'tool_get_symbol_content',
    'tool_list_files',
    'tool_list_symbols',
    'tool_set_project_path',
]
