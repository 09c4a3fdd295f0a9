"""Inbox capture: append a ``- [ ] text`` line to the inbox note."""

from __future__ import annotations

import logging
from datetime import date

from app.goals.documents import DocumentStore, ensure_folder, join_path

logger = logging.getLogger(__name__)

INBOX_TEMPLATE = "# Inbox\n\n"


def detect_eol(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def format_attribute(name: str, value: str, use_dataview: bool) -> str:
    """``@due(2025-01-31)`` by default, ``[due:: 2025-01-31]`` for Dataview."""
    if use_dataview:
        return f"[{name}:: {value}]"
    return f"@{name}({value})"


class InboxService:
    def __init__(
        self,
        store: DocumentStore,
        folder: str = "To-Dos",
        file_name: str = "Inbox.md",
        due_attribute: str = "due",
        use_dataview: bool = False,
    ):
        self.store = store
        self.folder = folder
        self.file_name = file_name
        self.due_attribute = due_attribute
        self.use_dataview = use_dataview

    @property
    def path(self) -> str:
        return join_path(self.folder, self.file_name)

    def format_todo(self, text: str, due: date | None = None) -> str:
        body = text
        if due is not None:
            body += " " + format_attribute(self.due_attribute, due.isoformat(), self.use_dataview)
        return f"- [ ] {body}"

    async def append_todo(self, text: str, due: date | None = None) -> str:
        """Append a todo to the inbox, creating the note if needed. Returns the line."""
        await ensure_folder(self.store, self.folder)
        if not await self.store.exists(self.path):
            await self.store.create(self.path, INBOX_TEMPLATE)

        content = await self.store.read(self.path) or ""
        eol = detect_eol(content)
        line = self.format_todo(text, due)
        separator = "" if not content or content.endswith(eol) else eol
        await self.store.modify(self.path, f"{content}{separator}{line}{eol}")
        logger.info("Appended todo to %s", self.path)
        return line
