"""Data models for mind map documents."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Topic:
    """A single topic node in a mind map.

    Topics form a tree structure via the `children` list. The link back to
    the enclosing topic is a plain id (`parent_id`), never an object reference.
    """
    id: str = ""
    title: str = ""

    # Tree structure
    children: list[Topic] = field(default_factory=list)
    parent_id: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def find(self, topic_id: str) -> Optional[Topic]:
        """Find the first topic with this id, pre-order (self, then children in order)."""
        if self.id == topic_id:
            return self
        for child in self.children:
            result = child.find(topic_id)
            if result is not None:
                return result
        return None

    def walk(self):
        """Yield this topic and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def count(self) -> int:
        """Total number of descendants (including self)."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "children": [child.to_dict() for child in self.children],
        }
        if self.parent_id is not None:
            data["parentId"] = self.parent_id
        return data

    def __str__(self) -> str:
        return self.title

    def __repr__(self) -> str:
        child_count = len(self.children)
        suffix = f" ({child_count} children)" if child_count else ""
        return f"Topic({self.id!r}, {self.title!r}{suffix})"


@dataclass
class MindMap:
    """A named mind map document owning exactly one root topic."""
    id: str = ""
    title: str = ""
    root: Topic = field(default_factory=Topic)

    @property
    def topic_count(self) -> int:
        return self.root.count()

    def find(self, topic_id: str) -> Optional[Topic]:
        return self.root.find(topic_id)

    def walk(self):
        """Iterate all topics depth-first."""
        yield from self.root.walk()

    def summary(self) -> MindMapSummary:
        return MindMapSummary(id=self.id, title=self.title, root_topic_id=self.root.id)

    def copy(self) -> MindMap:
        """Deep copy, detached from any store."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "rootTopic": self.root.to_dict(),
        }

    def __repr__(self) -> str:
        return f"MindMap({self.id!r}, {self.title!r}, {self.topic_count} topics)"


@dataclass(frozen=True)
class MindMapSummary:
    """Listing entry for a mind map: no tree, just the root's id."""
    id: str
    title: str
    root_topic_id: str

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "rootTopicId": self.root_topic_id}
