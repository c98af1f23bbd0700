"""
Code Fragments MCP - browse, fetch and minimize TypeScript functions over MCP.
"""

__version__ = "0.1.0"
