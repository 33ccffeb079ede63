"""Write MindMap objects to .xmind files.

An .xmind file is a ZIP container holding three XML documents:

    content.xml            the sheet and its topic tree
    meta.xml               authoring tool metadata
    META-INF/manifest.xml  list of members and their media types

Only content.xml depends on the map; the other two are fixed.
"""

from __future__ import annotations

import zipfile
from io import BytesIO
from pathlib import Path
from typing import Union

from loguru import logger

from .errors import ArchiveWriteError
from .models import MindMap, Topic

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'

CONTENT_NS = "urn:xmind:xmap:xmlns:content:2.0"
META_NS = "urn:xmind:xmap:xmlns:meta:2.0"
MANIFEST_NS = "urn:xmind:xmap:xmlns:manifest:1.0"

AUTHOR_NAME = "XMind MCP Server"

# Topics and sheets carry no real clock value
TIMESTAMP = "0"

CONTENT_PATH = "content.xml"
META_PATH = "meta.xml"
META_INF_DIR = "META-INF"
MANIFEST_PATH = "META-INF/manifest.xml"

_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
})


def escape(text: str) -> str:
    """Escape the five XML special characters in one pass."""
    return text.translate(_ESCAPES)


def render_content(mindmap: MindMap) -> str:
    """Render the content.xml document for a map."""
    lines = [
        XML_DECLARATION,
        f'<xmap-content xmlns="{CONTENT_NS}"'
        ' xmlns:fo="http://www.w3.org/1999/XSL/Format"'
        ' xmlns:svg="http://www.w3.org/2000/svg"'
        ' xmlns:xhtml="http://www.w3.org/1999/xhtml"'
        ' xmlns:xlink="http://www.w3.org/1999/xlink"'
        ' version="2.0">',
        f'  <sheet id="sheet_1" timestamp="{TIMESTAMP}">',
        f"    <title>{escape(mindmap.title)}</title>",
    ]
    _topic_to_xml(mindmap.root, lines, depth=2)
    lines.append("  </sheet>")
    lines.append("</xmap-content>")
    return "\n".join(lines)


def _topic_to_xml(topic: Topic, lines: list[str], depth: int) -> None:
    """Recursively render a topic element.

    Leaf topics get no <children> element at all.
    """
    indent = "  " * depth

    lines.append(f'{indent}<topic id="{topic.id}" timestamp="{TIMESTAMP}">')
    lines.append(f"{indent}  <title>{escape(topic.title)}</title>")

    if topic.children:
        lines.append(f"{indent}  <children>")
        for child in topic.children:
            lines.append(f'{indent}    <topics type="attached">')
            _topic_to_xml(child, lines, depth + 3)
            lines.append(f"{indent}    </topics>")
        lines.append(f"{indent}  </children>")

    lines.append(f"{indent}</topic>")


def render_meta() -> str:
    """Render the fixed meta.xml document."""
    return "\n".join([
        XML_DECLARATION,
        f'<meta xmlns="{META_NS}" version="2.0">',
        "  <Author>",
        f"    <Name>{escape(AUTHOR_NAME)}</Name>",
        "  </Author>",
        "</meta>",
    ])


def render_manifest() -> str:
    """Render the fixed META-INF/manifest.xml document."""
    entries = [
        (CONTENT_PATH, "text/xml"),
        (f"{META_INF_DIR}/", ""),
        (MANIFEST_PATH, "text/xml"),
        (META_PATH, "text/xml"),
    ]
    lines = [XML_DECLARATION, f'<manifest xmlns="{MANIFEST_NS}">']
    for full_path, media_type in entries:
        lines.append(f'  <file-entry full-path="{full_path}" media-type="{media_type}"/>')
    lines.append("</manifest>")
    return "\n".join(lines)


def build_archive(mindmap: MindMap) -> bytes:
    """Build the .xmind ZIP container in memory."""
    buf = BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(CONTENT_PATH, render_content(mindmap).encode("utf-8"))
        zf.writestr(META_PATH, render_meta().encode("utf-8"))
        zf.mkdir(META_INF_DIR)
        zf.writestr(MANIFEST_PATH, render_manifest().encode("utf-8"))
    return buf.getvalue()


def write(mindmap: MindMap, path: Union[str, Path]) -> Path:
    """Write a MindMap to an .xmind file.

    Missing parent directories are created and an existing file at `path`
    is overwritten.

    Args:
        mindmap: The MindMap to write.
        path: Output path for the .xmind file.

    Returns:
        The resolved path written to.

    Raises:
        ArchiveWriteError: If the directory or the file can't be written,
            or the path itself is invalid.
    """
    path = Path(path)
    data = build_archive(mindmap)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except (OSError, ValueError) as e:
        raise ArchiveWriteError(f"Failed to save mind map to {path}: {e}") from e

    logger.info(f"Wrote {mindmap.id} ({mindmap.topic_count} topics, {len(data)} bytes) to {path}")
    return path.resolve()
