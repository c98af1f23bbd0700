"""
Tool Registry

Maps operation names to tool functions so the server has one dispatch point.
"""

from typing import Any, Callable, Dict


def _import_tools() -> Dict[str, Callable[..., Dict[str, Any]]]:
    """Deferred import to avoid a cycle with the tools package"""
    from .fragment_tools import (
        tool_create_file,
        tool_get_file_content,
        tool_get_symbol_content,
        tool_list_files,
        tool_list_symbols,
        tool_set_project_path,
    )

    return {
        "set_project_path": tool_set_project_path,
        "list_files": tool_list_files,
        "get_file_content": tool_get_file_content,
        "list_symbols": tool_list_symbols,
        "get_symbol_content": tool_get_symbol_content,
        "create_file": tool_create_file,
    }


def get_tool_registry() -> Dict[str, Callable[..., Dict[str, Any]]]:
    return _import_tools()


def execute_tool(tool_name: str, **kwargs) -> Dict[str, Any]:
    """
    Run a registered tool by name.

    Unknown names come back as error responses; everything else is
    handled by the tool's own handle_mcp_errors wrapper.
    """
    tools = get_tool_registry()
    tool_func = tools.get(tool_name)

    if not tool_func:
        return {"success": False, "error": f"Unknown tool: {tool_name}", "status": 400}

    return tool_func(**kwargs)
