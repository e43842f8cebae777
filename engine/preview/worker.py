"""
Barq Preview: Preview Worker

Runs preview builds off the event loop. Communication is by message:
PreviewRequest (id + files) in, PreviewResult (id + html) out. Ids grow
monotonically; a result whose id is no longer the latest request is
discarded, never queued or merged.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Executor

from engine.preview.assembler import build_preview_html
from engine.preview.hashing import hash_files
from engine.preview.types import PreviewRequest, PreviewResult, VirtualFile

logger = logging.getLogger(__name__)

BuildFn = Callable[[list[VirtualFile]], str | None]


class PreviewWorker:
    """
    Builds previews in an executor thread with stale-result suppression.

    One worker per preview surface. The build function must be pure;
    builds for superseded requests still run to completion but their
    results are dropped.
    """

    def __init__(self, build: BuildFn = build_preview_html, executor: Executor | None = None) -> None:
        self._build = build
        self._executor = executor
        self._ids = itertools.count(1)
        self._pending_id = 0
        self.latest: PreviewResult | None = None

    def handle(self, request: PreviewRequest) -> PreviewResult:
        """Synchronous message handler: build one request."""
        digest = hash_files(request.files)
        try:
            html = self._build(list(request.files))
        except Exception as e:
            logger.exception("preview worker: build %d failed", request.id)
            return PreviewResult(id=request.id, html=None, digest=digest, error=str(e))
        return PreviewResult(id=request.id, html=html, digest=digest)

    async def submit(self, files: Iterable[VirtualFile]) -> PreviewResult | None:
        """
        Build a preview for `files`.

        Returns the result, or None if a newer submission superseded this
        one before it finished. An unchanged file set reuses the last result.
        """
        request = PreviewRequest(id=next(self._ids), files=tuple(files))
        self._pending_id = request.id

        latest = self.latest
        if latest is not None and latest.error is None and latest.digest == hash_files(request.files):
            result = PreviewResult(id=request.id, html=latest.html, digest=latest.digest)
        else:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(self._executor, self.handle, request)

        if result.id != self._pending_id:
            logger.debug("preview worker: discarding stale result %d (latest request %d)", result.id, self._pending_id)
            return None

        self.latest = result
        return result
