"""Tool implementations exposed by the MCP server.

Each method takes the tool's arguments and returns JSON-ready data. Failures
are returned, not raised: ``{"error": message, "kind": error_kind}``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from . import writer
from .config import Settings
from .errors import InvalidArgument, XMindToolsError
from .store import DocumentStore


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidArgument(f"Argument '{name}' must be a string")
    return value


def _failure(tool: str, error: XMindToolsError) -> Dict[str, Any]:
    logger.warning(f"{tool} failed ({error.kind.value}): {error}")
    return {"error": str(error), "kind": error.kind.value}


class MindMapTools:
    """Dispatches tool calls to a DocumentStore and the archive writer."""

    def __init__(self, store: DocumentStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or Settings()

    def _call(self, tool: str, func: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        try:
            return func()
        except XMindToolsError as e:
            return _failure(tool, e)

    def create_mindmap(self, title: Any, root_title: Any) -> Dict[str, Any]:
        def run():
            mind_map_id, root_topic_id = self.store.create(
                _require_text("title", title),
                _require_text("rootTitle", root_title),
            )
            return {
                "mindMapId": mind_map_id,
                "rootTopicId": root_topic_id,
                "message": f'Mind map "{title}" created successfully',
            }
        return self._call("create_mindmap", run)

    def add_topic(self, mind_map_id: Any, parent_topic_id: Any, title: Any) -> Dict[str, Any]:
        def run():
            topic_id = self.store.add_topic(
                _require_text("mindMapId", mind_map_id),
                _require_text("parentTopicId", parent_topic_id),
                _require_text("title", title),
            )
            return {
                "topicId": topic_id,
                "message": f'Topic "{title}" added successfully',
            }
        return self._call("add_topic", run)

    def get_mindmap(self, mind_map_id: Any) -> Dict[str, Any]:
        def run():
            return self.store.get(_require_text("mindMapId", mind_map_id)).to_dict()
        return self._call("get_mindmap", run)

    def list_mindmaps(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.store.list()]

    async def save_mindmap(self, mind_map_id: Any, file_path: Any) -> Dict[str, Any]:
        """Package a map as an .xmind archive.

        The snapshot is taken under the store lock; the file write happens
        afterwards in a worker thread.
        """
        try:
            snapshot = self.store.get(_require_text("mindMapId", mind_map_id))
            path = self.settings.resolve_output_path(_require_text("filePath", file_path))
            written = await asyncio.to_thread(writer.write, snapshot, path)
        except XMindToolsError as e:
            return _failure("save_mindmap", e)

        return {
            "message": f"Mind map saved successfully to {written}",
            "path": str(written),
        }
