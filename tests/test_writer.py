"""Tests for the .xmind archive writer."""

import os
import tempfile
import xml.etree.ElementTree as ET
import zipfile
from io import BytesIO
from pathlib import Path

import pytest

import xmind_tools
from xmind_tools import ArchiveWriteError, DocumentStore, ErrorKind, MindMap, Topic
from xmind_tools.writer import CONTENT_NS, MANIFEST_NS, META_NS

_C = f"{{{CONTENT_NS}}}"


def _project_plan():
    store = DocumentStore()
    map_id, root_id = store.create("Project Plan", "Project")
    phase = store.add_topic(map_id, root_id, "Phase 1")
    store.add_topic(map_id, phase, "Task A")
    return store.get(map_id)


def _parse(text):
    return ET.fromstring(text.encode("utf-8"))


def test_escape():
    assert xmind_tools.escape("a & b") == "a &amp; b"
    assert xmind_tools.escape("<tag attr=\"x\" y='z'>") == "&lt;tag attr=&quot;x&quot; y=&apos;z&apos;&gt;"
    # Already-escaped text is escaped again, not left alone
    assert xmind_tools.escape("&lt;") == "&amp;lt;"
    assert xmind_tools.escape("plain") == "plain"


def test_content_nesting_order():
    content = xmind_tools.render_content(_project_plan())
    assert content.startswith('<?xml version="1.0" encoding="UTF-8" standalone="no"?>')

    root = _parse(content)
    assert root.tag == f"{_C}xmap-content"
    assert root.get("version") == "2.0"

    sheet = root.find(f"{_C}sheet")
    assert sheet.get("id") == "sheet_1"
    assert sheet.findtext(f"{_C}title") == "Project Plan"

    t1 = sheet.find(f"{_C}topic")
    assert t1.get("id") == "topic_1"
    assert t1.get("timestamp") == "0"
    t2 = t1.find(f"{_C}children/{_C}topics/{_C}topic")
    assert t2.get("id") == "topic_2"
    assert t2.findtext(f"{_C}title") == "Phase 1"
    t3 = t2.find(f"{_C}children/{_C}topics/{_C}topic")
    assert t3.get("id") == "topic_3"
    assert t3.findtext(f"{_C}title") == "Task A"

    assert content.index('id="topic_1"') < content.index('id="topic_2"') < content.index('id="topic_3"')


def test_leaf_has_no_children_element():
    m = MindMap(id="m", title="M", root=Topic(id="r", title="Root"))
    root = _parse(xmind_tools.render_content(m))
    topic = root.find(f"{_C}sheet/{_C}topic")
    assert topic.find(f"{_C}children") is None
    assert "<children>" not in xmind_tools.render_content(m)


def test_children_wrapper_per_child():
    m = MindMap(id="m", title="M", root=Topic(id="r", title="Root"))
    for i in range(3):
        m.root.children.append(Topic(id=f"c{i}", title=f"C{i}", parent_id="r"))

    topic = _parse(xmind_tools.render_content(m)).find(f"{_C}sheet/{_C}topic")
    children = topic.findall(f"{_C}children")
    assert len(children) == 1
    wrappers = children[0].findall(f"{_C}topics")
    assert [w.get("type") for w in wrappers] == ["attached"] * 3
    assert [w.find(f"{_C}topic").get("id") for w in wrappers] == ["c0", "c1", "c2"]
    for w in wrappers:
        assert w.find(f"{_C}topic/{_C}children") is None


def test_special_characters_roundtrip():
    title = "R&D <2024> \"quoted\" 'single'"
    m = MindMap(id="m", title=title, root=Topic(id="r", title=title))
    root = _parse(xmind_tools.render_content(m))
    assert root.findtext(f"{_C}sheet/{_C}title") == title
    assert root.findtext(f"{_C}sheet/{_C}topic/{_C}title") == title


def test_meta_and_manifest_are_fixed():
    meta = _parse(xmind_tools.render_meta())
    assert meta.tag == f"{{{META_NS}}}meta"
    assert meta.findtext(f"{{{META_NS}}}Author/{{{META_NS}}}Name") == "XMind MCP Server"

    manifest = _parse(xmind_tools.render_manifest())
    entries = manifest.findall(f"{{{MANIFEST_NS}}}file-entry")
    assert [(e.get("full-path"), e.get("media-type")) for e in entries] == [
        ("content.xml", "text/xml"),
        ("META-INF/", ""),
        ("META-INF/manifest.xml", "text/xml"),
        ("meta.xml", "text/xml"),
    ]


def test_archive_members():
    m = _project_plan()
    with zipfile.ZipFile(BytesIO(xmind_tools.build_archive(m))) as zf:
        assert zf.namelist() == ["content.xml", "meta.xml", "META-INF/", "META-INF/manifest.xml"]
        assert zf.getinfo("META-INF/").is_dir()
        assert zf.read("content.xml").decode("utf-8") == xmind_tools.render_content(m)
        assert zf.read("meta.xml").decode("utf-8") == xmind_tools.render_meta()
        assert zf.read("META-INF/manifest.xml").decode("utf-8") == xmind_tools.render_manifest()


def test_write_creates_directories_and_overwrites():
    m = _project_plan()
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "a" / "b" / "plan.xmind"

        written = xmind_tools.write(m, path)
        assert written == path.resolve()
        assert path.exists()

        path.write_bytes(b"stale")
        xmind_tools.write(m, str(path))
        with zipfile.ZipFile(path) as zf:
            assert "topic_3" in zf.read("content.xml").decode("utf-8")


def test_write_failure_raises_archive_error():
    m = _project_plan()
    with tempfile.TemporaryDirectory() as tmp:
        blocker = Path(tmp) / "file"
        blocker.write_text("not a directory")

        with pytest.raises(ArchiveWriteError) as exc:
            xmind_tools.write(m, blocker / "plan.xmind")
        assert exc.value.kind == ErrorKind.IO_FAILURE


def test_write_invalid_path_raises_archive_error():
    m = _project_plan()
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(ArchiveWriteError) as exc:
            xmind_tools.write(m, os.path.join(tmp, "bad\x00name.xmind"))
        assert exc.value.kind == ErrorKind.IO_FAILURE
        assert isinstance(exc.value.__cause__, ValueError)


def test_write_does_not_mutate_map():
    m = _project_plan()
    before = m.to_dict()
    with tempfile.TemporaryDirectory() as tmp:
        xmind_tools.write(m, os.path.join(tmp, "plan.xmind"))
    assert m.to_dict() == before
