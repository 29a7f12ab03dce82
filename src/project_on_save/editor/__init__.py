"""Editor model: documents and the workspace that emits their lifecycle events."""

from project_on_save.editor.base import Document, DocumentEventSource, SaveEvent
from project_on_save.editor.workspace import Workspace

__all__ = ["Document", "DocumentEventSource", "SaveEvent", "Workspace"]
