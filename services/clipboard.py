"""Clipboard targets for copying generated text out of a workflow."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol


class ClipboardWriter(Protocol):
    def write(self, text: str) -> None: ...


class Clipboard:
    """A write-only clipboard accessed through a scoped session.

    Subclasses implement `_write`; `session()` holds the clipboard for the
    duration of the `async with` block.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[ClipboardWriter]:
        async with self._lock:
            yield _Writer(self)

    def _write(self, text: str) -> None:
        raise NotImplementedError


class _Writer:
    def __init__(self, clipboard: Clipboard) -> None:
        self._clipboard = clipboard

    def write(self, text: str) -> None:
        if not text:
            raise ValueError("Nothing to copy.")
        self._clipboard._write(text)


class BufferedClipboard(Clipboard):
    """Keep the last copied text in memory so the browser can pick it up."""

    def __init__(self) -> None:
        super().__init__()
        self.contents = ""

    def _write(self, text: str) -> None:
        self.contents = text
