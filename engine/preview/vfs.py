"""
Barq Preview: Virtual File Operations

Applies create / update / delete operations produced by the generation
pipeline to a file list. Pure: returns a new list, never mutates the input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from engine.preview.types import VirtualFile

logger = logging.getLogger(__name__)

ACTIONS: set[str] = {"create", "update", "delete"}

_EXTENSION_LANGUAGES: dict[str, str] = {
    ".css": "css",
    ".tsx": "tsx",
    ".jsx": "jsx",
    ".ts": "ts",
    ".js": "js",
    ".json": "json",
}


def infer_language(path: str) -> str:
    """Language tag for a path, by extension. Anything unknown is treated as html."""
    for ext, language in _EXTENSION_LANGUAGES.items():
        if path.endswith(ext):
            return language
    return "html"


@dataclass(frozen=True)
class FileOperation:
    path: str
    action: str
    content: str = ""

    def __post_init__(self) -> None:
        if self.action not in ACTIONS:
            raise ValueError(f"Unknown file operation {self.action!r}, expected one of {sorted(ACTIONS)}")


def apply_operations(files: Iterable[VirtualFile], operations: Iterable[FileOperation]) -> list[VirtualFile]:
    """
    Apply operations in order and return the resulting file list.

    create  appends a new file, or overwrites the content of an existing one
    update  overwrites the content of an existing file; ignored if missing
    delete  removes the file; ignored if missing

    Overwritten files keep their position and language.
    """
    result = list(files)

    for op in operations:
        index = next((i for i, f in enumerate(result) if f.name == op.path), None)

        if op.action == "delete":
            if index is not None:
                del result[index]
        elif index is not None:
            current = result[index]
            result[index] = VirtualFile(name=current.name, content=op.content, language=current.language)
        elif op.action == "create":
            result.append(VirtualFile(name=op.path, content=op.content, language=infer_language(op.path)))
        else:
            logger.warning("vfs: update for missing file %s ignored", op.path)

    return result
