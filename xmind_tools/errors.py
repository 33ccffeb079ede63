"""Exceptions raised by the document store and the archive writer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Distinguishable failure kinds, surfaced verbatim to tool callers."""
    MINDMAP_NOT_FOUND = "mindmap_not_found"
    TOPIC_NOT_FOUND = "topic_not_found"
    IO_FAILURE = "io_failure"
    INVALID_ARGUMENT = "invalid_argument"


class XMindToolsError(Exception):
    """Base class for all xmind-tools failures."""
    kind: ErrorKind


class NotFoundError(XMindToolsError):
    pass


class MindMapNotFound(NotFoundError):
    kind = ErrorKind.MINDMAP_NOT_FOUND

    def __init__(self, mind_map_id: str):
        super().__init__(f"Mind map with ID {mind_map_id} not found")
        self.mind_map_id = mind_map_id


class TopicNotFound(NotFoundError):
    kind = ErrorKind.TOPIC_NOT_FOUND

    def __init__(self, topic_id: str):
        super().__init__(f"Topic with ID {topic_id} not found")
        self.topic_id = topic_id


class ArchiveWriteError(XMindToolsError):
    """Creating the destination directory or writing the archive failed."""
    kind = ErrorKind.IO_FAILURE


class InvalidArgument(XMindToolsError):
    kind = ErrorKind.INVALID_ARGUMENT
