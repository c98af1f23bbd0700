"""
Decorator-based error handling for MCP tool entry points.

Tools raise; this module turns the exception into the standard
``{"success": False, "error": ..., "status": ...}`` response and logs it.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, cast

from core.errors import NotIndexedError

logger = logging.getLogger(__name__)


def create_error_response(error: Exception, context: str = "") -> Dict[str, Any]:
    """Map an exception to a response; the order of checks matters for OSError subclasses."""
    if isinstance(error, NotIndexedError):
        return {"success": False, "error": str(error), "status": 404}
    elif isinstance(error, FileNotFoundError):
        return {"success": False, "error": f"File not found: {error.filename}", "status": 404}
    elif isinstance(error, PermissionError):
        return {"success": False, "error": f"Permission denied: {error.filename}", "status": 403}
    elif isinstance(error, FileExistsError):
        return {"success": False, "error": f"File already exists: {error.filename}", "status": 400}
    elif isinstance(error, (NotADirectoryError, IsADirectoryError)):
        return {"success": False, "error": f"{error.strerror}: {error.filename}", "status": 400}
    elif isinstance(error, SyntaxError):
        location = f"{error.filename}:{error.lineno}:{error.offset}"
        return {"success": False, "error": f"Syntax error at {location}: {error.msg}", "status": 422}
    elif isinstance(error, ValueError):
        return {"success": False, "error": f"Invalid value: {error}", "status": 400}
    else:
        error_msg = f"{context}: {error}" if context else str(error)
        return {"success": False, "error": error_msg, "status": 500}


def handle_mcp_errors(func: Callable) -> Callable:
    """
    Standardize tool results.

    Successful dict results get ``success: True``; exceptions are logged and
    converted with create_error_response.
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)
            if isinstance(result, dict) and "success" not in result:
                result["success"] = True
            return cast(Dict[str, Any], result)
        except Exception as e:
            logger.error("%s failed: %s", func.__name__, e)
            response = create_error_response(e, func.__name__)
            response["function"] = func.__name__
            return response

    return wrapper
