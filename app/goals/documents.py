"""Document store: async access to markdown notes under a vault root.

Paths are ``/``-separated and relative to the store root, e.g.
``Goals/2025-W05.md``. The service only needs five capabilities (exists,
create folder, read, create, modify); anything that provides them can be
plugged in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import aiofiles
import aiofiles.os as aios

from app.goals.exceptions import StorageError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    async def exists(self, path: str) -> bool: ...

    async def create_folder(self, path: str) -> None: ...

    async def read(self, path: str) -> str | None:
        """Full text of the document, or None when there is no such document."""
        ...

    async def create(self, path: str, content: str) -> None: ...

    async def modify(self, path: str, content: str) -> None: ...


class FileSystemDocumentStore:
    """DocumentStore over a local directory.

    Text is read and written with ``newline=""`` so line terminators reach
    the section parser exactly as they are on disk. Any OSError becomes a
    StorageError carrying the vault-relative path.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path).resolve()
        if target != root and root not in target.parents:
            raise StorageError(f"Path escapes the vault: {path}", path=path)
        return target

    async def exists(self, path: str) -> bool:
        return await aios.path.exists(self._resolve(path))

    async def create_folder(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await aios.mkdir(target)
        except FileExistsError:
            if not await aios.path.isdir(target):
                raise StorageError(f"Not a folder: {path}", path=path)
        except OSError as exc:
            raise StorageError(f"Failed to create folder {path}: {exc}", path=path) from exc

    async def read(self, path: str) -> str | None:
        target = self._resolve(path)
        if not await aios.path.isfile(target):
            return None
        try:
            async with aiofiles.open(target, mode="r", encoding="utf-8", newline="") as f:
                return await f.read()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}", path=path) from exc

    async def create(self, path: str, content: str) -> None:
        target = self._resolve(path)
        try:
            async with aiofiles.open(target, mode="x", encoding="utf-8", newline="") as f:
                await f.write(content)
        except OSError as exc:
            raise StorageError(f"Failed to create {path}: {exc}", path=path) from exc
        logger.info("Created document %s", path)

    async def modify(self, path: str, content: str) -> None:
        target = self._resolve(path)
        if not await aios.path.isfile(target):
            raise StorageError(f"No such document: {path}", path=path)
        try:
            async with aiofiles.open(target, mode="w", encoding="utf-8", newline="") as f:
                await f.write(content)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}", path=path) from exc


# ---------------------------------------------------------------------------
# Helpers shared by the goals and inbox services
# ---------------------------------------------------------------------------


def join_path(folder: str, name: str) -> str:
    folder = folder.strip("/")
    return f"{folder}/{name}" if folder else name


def parent_folder(path: str) -> str:
    idx = path.rfind("/")
    return path[:idx] if idx >= 0 else ""


async def ensure_folder(store: DocumentStore, folder: str) -> None:
    """Create `folder` and any missing parents, one level at a time."""
    current = ""
    for part in (p for p in folder.split("/") if p):
        current = f"{current}/{part}" if current else part
        if not await store.exists(current):
            await store.create_folder(current)


async def write_document(store: DocumentStore, path: str, content: str) -> None:
    """Overwrite `path`, creating it (and its folders) when missing."""
    if await store.exists(path):
        await store.modify(path, content)
        return
    await ensure_folder(store, parent_folder(path))
    await store.create(path, content)
