"""In-memory document store for mind maps.

The store owns every MindMap and Topic it creates. Callers only ever receive
copies, so nothing outside the store can change a tree behind its back.
"""

from __future__ import annotations

import threading

from loguru import logger

from .errors import MindMapNotFound, TopicNotFound
from .models import MindMap, MindMapSummary, Topic


class DocumentStore:
    """Process-lifetime collection of mind maps.

    A single re-entrant lock serializes mutations and reads, so id allocation
    and child appends are atomic and reads never see a half-applied change.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._mind_maps: dict[str, MindMap] = {}
        self._mind_map_counter = 0
        self._topic_counter = 0

    def _next_mind_map_id(self) -> str:
        self._mind_map_counter += 1
        return f"mindmap_{self._mind_map_counter}"

    def _next_topic_id(self) -> str:
        self._topic_counter += 1
        return f"topic_{self._topic_counter}"

    def _lookup(self, mind_map_id: str) -> MindMap:
        mind_map = self._mind_maps.get(mind_map_id)
        if mind_map is None:
            raise MindMapNotFound(mind_map_id)
        return mind_map

    def create(self, title: str, root_title: str) -> tuple[str, str]:
        """Create a map with a childless root topic.

        Returns:
            (mind_map_id, root_topic_id)
        """
        with self._lock:
            mind_map_id = self._next_mind_map_id()
            root_topic_id = self._next_topic_id()
            self._mind_maps[mind_map_id] = MindMap(
                id=mind_map_id,
                title=title,
                root=Topic(id=root_topic_id, title=root_title),
            )
        logger.debug(f"Created {mind_map_id} with root {root_topic_id}")
        return mind_map_id, root_topic_id

    def add_topic(self, mind_map_id: str, parent_topic_id: str, title: str) -> str:
        """Append a new topic as the last child of `parent_topic_id`.

        Raises:
            MindMapNotFound: If the map doesn't exist.
            TopicNotFound: If no topic in the map has the parent id.
        """
        with self._lock:
            mind_map = self._lookup(mind_map_id)
            parent = mind_map.find(parent_topic_id)
            if parent is None:
                raise TopicNotFound(parent_topic_id)

            # Ids are only allocated once both lookups have succeeded
            topic_id = self._next_topic_id()
            parent.children.append(
                Topic(id=topic_id, title=title, parent_id=parent_topic_id)
            )
        logger.debug(f"Added {topic_id} under {parent_topic_id} in {mind_map_id}")
        return topic_id

    def get(self, mind_map_id: str) -> MindMap:
        """Return a deep copy of the map's current tree."""
        with self._lock:
            return self._lookup(mind_map_id).copy()

    def list(self) -> list[MindMapSummary]:
        """Summaries of every map, in creation order."""
        with self._lock:
            return [m.summary() for m in self._mind_maps.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._mind_maps)

    def __contains__(self, mind_map_id: object) -> bool:
        with self._lock:
            return mind_map_id in self._mind_maps

    def __repr__(self) -> str:
        return f"DocumentStore({len(self)} mind maps)"
