"""
MCP tools exposed by the Eywa server.
"""

from .base import ToolHandler, error_envelope, to_text_content

__all__ = ['ToolHandler', 'error_envelope', 'to_text_content']
