"""xmind-tools: Build mind maps in memory and save them as XMind files.

An in-memory document store for mind maps, a writer for the XMind (.xmind)
archive format, and an MCP server exposing both as tools.

Usage:
    import xmind_tools

    store = xmind_tools.DocumentStore()

    # Create a map and grow its tree
    map_id, root_id = store.create("Project Plan", "Project")
    phase = store.add_topic(map_id, root_id, "Phase 1")
    store.add_topic(map_id, phase, "Task A")

    # Read back a snapshot
    m = store.get(map_id)
    print(m)  # MindMap('mindmap_1', 'Project Plan', 3 topics)

    # Save as .xmind
    xmind_tools.write(m, "out/plan.xmind")

Run the MCP server with ``xmind-tools serve``.
"""

__version__ = "0.1.0"

from .errors import (
    ArchiveWriteError,
    ErrorKind,
    InvalidArgument,
    MindMapNotFound,
    NotFoundError,
    TopicNotFound,
    XMindToolsError,
)
from .models import MindMap, MindMapSummary, Topic
from .store import DocumentStore
from .writer import build_archive, escape, render_content, render_manifest, render_meta, write

__all__ = [
    "DocumentStore",
    "write",
    "build_archive",
    "render_content",
    "render_meta",
    "render_manifest",
    "escape",
    "MindMap",
    "MindMapSummary",
    "Topic",
    "ErrorKind",
    "XMindToolsError",
    "NotFoundError",
    "MindMapNotFound",
    "TopicNotFound",
    "ArchiveWriteError",
    "InvalidArgument",
]
