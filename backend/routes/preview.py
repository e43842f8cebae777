"""Preview routes: build preview documents from virtual file sets."""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from fastapi import APIRouter, Header, HTTPException, Response, status
from fastapi.responses import HTMLResponse

from backend.config import settings
from backend.models.preview import (
    ApplyOperationsRequest,
    ApplyOperationsResponse,
    FileIn,
    PreviewRequest,
    PreviewResponse,
)
from engine.preview import (
    FileOperation,
    VirtualFile,
    apply_operations,
    build_preview_html,
    classify_files,
    hash_files,
    render_frame,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/preview", tags=["preview"])


def _virtual_files(files: list[FileIn]) -> list[VirtualFile]:
    """Convert request files, enforcing the configured limits."""
    if len(files) > settings.PREVIEW_MAX_FILES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Too many files ({len(files)} > {settings.PREVIEW_MAX_FILES}).",
        )
    for f in files:
        if len(f.content.encode("utf-8")) > settings.PREVIEW_MAX_FILE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File {f.name} exceeds {settings.PREVIEW_MAX_FILE_BYTES} bytes.",
            )
    return [f.to_virtual_file() for f in files]


async def _build(files: list[VirtualFile]) -> tuple[str | None, str]:
    # CPU-bound; keep it off the event loop
    html = await asyncio.to_thread(build_preview_html, files)
    return html, hash_files(files)


@router.post("")
async def build_preview(req: PreviewRequest) -> PreviewResponse:
    """
    Build a preview for a file set.

    Returns the document (null when no file is a component) together with
    the file-set digest and what the classifier found.
    """
    files = _virtual_files(req.files)
    html, digest = await _build(files)
    classified = classify_files(files)

    logger.info("preview: built %d files (digest %s, root %s)", len(files), digest, bool(classified.root))
    return PreviewResponse(
        html=html,
        digest=digest,
        root=classified.root.name if classified.root else None,
        components=[f.component_name for f in classified.components],
    )


@router.post("/document", response_class=HTMLResponse)
async def preview_document(
    req: PreviewRequest,
    if_none_match: str | None = Header(default=None),
) -> Response:
    """
    Serve the preview document itself.

    Cache headers:
    - ETag: the file-set digest (previews are pure functions of their files)
    - 304 when If-None-Match matches, 204 when there is nothing to preview
    """
    files = _virtual_files(req.files)
    etag = f'"{hash_files(files)}"'
    headers = {"ETag": etag, "Cache-Control": settings.PREVIEW_CACHE_CONTROL}

    if if_none_match == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)

    html, _ = await _build(files)
    if html is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return Response(
        content=html,
        media_type="text/html; charset=utf-8",
        headers={**headers, "X-Content-Type-Options": "nosniff"},
    )


@router.post("/frame", response_class=HTMLResponse)
async def preview_frame(
    req: PreviewRequest,
    device: Literal["desktop", "tablet", "mobile"] = "desktop",
) -> Response:
    """Serve the preview inside a sandboxed iframe sized for a device."""
    files = _virtual_files(req.files)
    html, _ = await _build(files)
    if html is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return HTMLResponse(content=render_frame(html, device))


@router.post("/apply")
async def apply_file_operations(req: ApplyOperationsRequest) -> ApplyOperationsResponse:
    """Apply create / update / delete operations, then rebuild the preview."""
    files = _virtual_files(req.files)
    operations = [FileOperation(path=op.path, action=op.action, content=op.content) for op in req.operations]
    updated = _virtual_files([FileIn.from_virtual_file(f) for f in apply_operations(files, operations)])
    html, digest = await _build(updated)

    return ApplyOperationsResponse(
        files=[FileIn.from_virtual_file(f) for f in updated],
        html=html,
        digest=digest,
    )
