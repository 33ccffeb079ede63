"""MCP server exposing the mind map tools over stdio.

Tool and argument names follow the wire contract (camelCase), so the
registered functions are thin wrappers around MindMapTools.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from mcp.server.fastmcp import FastMCP

from .config import Settings, load_settings
from .store import DocumentStore
from .tools import MindMapTools


def build_server(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
) -> FastMCP:
    """Create a FastMCP server bound to one document store."""
    settings = settings or load_settings()
    tools = MindMapTools(store if store is not None else DocumentStore(), settings)
    mcp = FastMCP(settings.server_name)

    @mcp.tool()
    async def create_mindmap(title: str, rootTitle: str) -> Dict[str, Any]:
        """Create a new mind map with a root topic."""
        return tools.create_mindmap(title, rootTitle)

    @mcp.tool()
    async def add_topic(mindMapId: str, parentTopicId: str, title: str) -> Dict[str, Any]:
        """Add a new topic to an existing topic in the mind map."""
        return tools.add_topic(mindMapId, parentTopicId, title)

    @mcp.tool()
    async def get_mindmap(mindMapId: str) -> Dict[str, Any]:
        """Get the structure of a mind map."""
        return tools.get_mindmap(mindMapId)

    @mcp.tool()
    async def list_mindmaps() -> List[Dict[str, Any]]:
        """List all created mind maps."""
        return tools.list_mindmaps()

    @mcp.tool()
    async def save_mindmap(mindMapId: str, filePath: str) -> Dict[str, Any]:
        """Save a mind map to an XMind file (path should end with .xmind)."""
        return await tools.save_mindmap(mindMapId, filePath)

    logger.info(f"MCP server '{settings.server_name}' initialized")
    return mcp


def run(settings: Optional[Settings] = None) -> None:
    """Serve until stdin closes."""
    mcp = build_server(settings)
    logger.info("XMind MCP server running on stdio")
    mcp.run(transport="stdio")
