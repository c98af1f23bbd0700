"""
Code Fragments MCP Server

Registers the fragment tools with FastMCP; every tool dispatches through
execute_tool.
"""

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .config import get_config
from .logger import configure_logging
from .tools import execute_tool

logger = logging.getLogger(__name__)

mcp = FastMCP("CodeFragments")


@mcp.tool()
def set_project_path(path: str) -> Dict[str, Any]:
    """Set the project directory the other tools work on."""
    return execute_tool("set_project_path", path=path)


@mcp.tool()
def list_files(sub_path: Optional[str] = None) -> Dict[str, Any]:
    """List project files, honoring .gitignore rules; optionally below one subdirectory."""
    return execute_tool("list_files", sub_path=sub_path)


@mcp.tool()
def get_file_content(
    file_name: str,
    start_byte: Optional[int] = None,
    end_byte: Optional[int] = None,
) -> Dict[str, Any]:
    """Read a file, or the byte range [start_byte, end_byte) of it. Directories list their files."""
    return execute_tool(
        "get_file_content",
        file_name=file_name,
        start_byte=start_byte,
        end_byte=end_byte,
    )


@mcp.tool()
def list_symbols(file_name: Optional[str] = None) -> Dict[str, Any]:
    """List top-level functions and methods with byte offsets, for the project or one file."""
    return execute_tool("list_symbols", file_name=file_name)


@mcp.tool()
def get_symbol_content(file_name: str, name: str) -> Dict[str, Any]:
    """Get one function's full source and a minimized first/last line view."""
    return execute_tool("get_symbol_content", file_name=file_name, name=name)


@mcp.tool()
def create_file(file_name: str, content: str) -> Dict[str, Any]:
    """Create a new file in the project."""
    return execute_tool("create_file", file_name=file_name, content=content)


def main():
    config = get_config()
    configure_logging(config.get_log_level(), config.log_file)
    logger.info("Serving %s", config.base_path)
    mcp.run()


if __name__ == '__main__':
    main()
