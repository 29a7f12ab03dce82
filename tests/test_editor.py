"""Tests for the document model and workspace events."""

import pytest
from pathlib import Path

from project_on_save.editor.base import Document, DocumentEventSource
from project_on_save.editor.workspace import Workspace


@pytest.fixture
def workspace() -> Workspace:
    return Workspace()


class TestDocument:
    def test_insert_moves_point(self, tmp_path: Path):
        doc = Document(path=tmp_path / "a.txt", text="hello")
        doc.point = 5
        doc.insert(" world")
        assert doc.text == "hello world"
        assert doc.point == 11
        assert doc.modified

    def test_revert_keeps_valid_offsets(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_text("0123456789")
        doc = Document(path=path, text="0123", point=3, scroll=1)

        assert doc.revert() is True
        assert doc.text == "0123456789"
        assert doc.point == 3
        assert doc.scroll == 1
        assert not doc.modified

    def test_revert_clamps_offsets(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_text("ab")
        doc = Document(path=path, text="0123456789", point=8, scroll=6)

        assert doc.revert() is True
        assert doc.point == 2
        assert doc.scroll == 2

    def test_revert_closed_document(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_text("on disk")
        doc = Document(path=path, text="in memory", live=False)

        assert doc.revert() is False
        assert doc.text == "in memory"

    def test_revert_deleted_file(self, tmp_path: Path):
        doc = Document(path=tmp_path / "gone.txt", text="in memory")
        assert doc.revert() is False
        assert doc.text == "in memory"


class TestWorkspace:
    def test_is_event_source(self, workspace: Workspace):
        assert isinstance(workspace, DocumentEventSource)

    def test_open_reads_file(self, workspace: Workspace, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_text("content")
        doc = workspace.open(path)
        assert doc.text == "content"
        assert doc.path == path.resolve()

    def test_open_missing_file(self, workspace: Workspace, tmp_path: Path):
        doc = workspace.open(tmp_path / "new.txt")
        assert doc.text == ""

    def test_open_reuses_document(self, workspace: Workspace, tmp_path: Path):
        first = workspace.open(tmp_path / "a.txt")
        second = workspace.open(str(tmp_path / "a.txt"))
        assert first is second
        assert workspace.documents == [first]

    def test_open_listeners(self, workspace: Workspace, tmp_path: Path):
        seen = []
        workspace.add_open_listener(seen.append)
        doc = workspace.open(tmp_path / "a.txt")
        workspace.open(tmp_path / "a.txt")
        assert seen == [doc]

    @pytest.mark.asyncio
    async def test_save_writes_and_notifies(self, workspace: Workspace, tmp_path: Path):
        events = []

        async def listener(event):
            events.append(event)

        doc = workspace.open(tmp_path / "sub" / "a.txt")
        doc.insert("saved text")
        workspace.add_save_listener(doc, listener)

        await workspace.save(doc)

        assert (tmp_path / "sub" / "a.txt").read_text() == "saved text"
        assert not doc.modified
        assert len(events) == 1
        assert events[0].document is doc
        assert events[0].path == doc.path

    @pytest.mark.asyncio
    async def test_save_listeners_are_per_document(self, workspace: Workspace, tmp_path: Path):
        calls = []

        async def listener(event):
            calls.append(event.document.name)

        a = workspace.open(tmp_path / "a.txt")
        b = workspace.open(tmp_path / "b.txt")
        workspace.add_save_listener(a, listener)
        workspace.add_save_listener(a, listener)  # duplicate ignored

        await workspace.save(a)
        await workspace.save(b)
        assert calls == ["a.txt"]

        workspace.remove_save_listener(a, listener)
        await workspace.save(a)
        assert calls == ["a.txt"]

    @pytest.mark.asyncio
    async def test_save_closed_document_raises(self, workspace: Workspace, tmp_path: Path):
        doc = workspace.open(tmp_path / "a.txt")
        workspace.close(doc)
        with pytest.raises(RuntimeError, match="closed document"):
            await workspace.save(doc)

    @pytest.mark.asyncio
    async def test_undecodable_bytes_round_trip(self, workspace: Workspace, tmp_path: Path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"na\xefve\n")

        doc = workspace.open(path)
        assert doc.text == "na\udcefve\n"

        doc.point = len(doc.text)
        doc.insert("ok\n")
        await workspace.save(doc)

        assert path.read_bytes() == b"na\xefve\nok\n"
        path.write_bytes(b"\xff\xfe")
        assert doc.revert() is True
        assert doc.text == "\udcff\udcfe"

    def test_close(self, workspace: Workspace, tmp_path: Path):
        closed = []
        workspace.add_close_listener(closed.append)
        doc = workspace.open(tmp_path / "a.txt")

        workspace.close(doc)
        workspace.close(doc)

        assert not doc.live
        assert workspace.documents == []
        assert closed == [doc]

    def test_message(self, tmp_path: Path):
        echoed = []
        workspace = Workspace(echo=echoed.append)
        workspace.message("hello")
        assert workspace.messages == ["hello"]
        assert echoed == ["hello"]
