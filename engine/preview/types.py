"""
Barq Preview: Shared Types

Data classes passed between the classifier, rewriter, assembler and worker.
Everything here is immutable or treated as read-only by the pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Language tags
# ---------------------------------------------------------------------------

LANGUAGES: set[str] = {"tsx", "jsx", "html", "css", "js", "ts", "json"}

COMPONENT_LANGUAGES: set[str] = {"tsx", "jsx", "html"}
COMPONENT_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx")

STYLESHEET_LANGUAGE = "css"
STYLESHEET_EXTENSION = ".css"

ROOT_COMPONENT = "App"

_SOURCE_EXT_RE = re.compile(r"\.(tsx|jsx|ts|js)$")


def component_name(file_name: str) -> str:
    """
    Derive the component name from a file name.

    "Header.tsx" -> "Header", "src/components/Hero.jsx" -> "Hero".
    Only source extensions are stripped; "index.html" stays "index.html".
    """
    base = file_name.rsplit("/", 1)[-1] or file_name
    return _SOURCE_EXT_RE.sub("", base)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VirtualFile:
    """One generated file. Owned by the caller's virtual filesystem."""

    name: str
    content: str
    language: str = "tsx"

    @property
    def component_name(self) -> str:
        return component_name(self.name)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "content": self.content, "language": self.language}

    @classmethod
    def from_dict(cls, d: dict[str, str]) -> VirtualFile:
        return cls(
            name=d["name"],
            content=d.get("content", ""),
            language=d.get("language", "tsx"),
        )


@dataclass
class ClassifiedFiles:
    """Classifier output: stylesheets, component candidates and the root (if any)."""

    stylesheets: list[VirtualFile] = field(default_factory=list)
    components: list[VirtualFile] = field(default_factory=list)
    root: VirtualFile | None = None
    duplicates: list[VirtualFile] = field(default_factory=list)

    @property
    def children(self) -> list[VirtualFile]:
        """Component candidates other than the root, in input order."""
        return [f for f in self.components if f is not self.root]


@dataclass(frozen=True)
class PreviewRequest:
    """Message sent to the worker: request id plus the full file set."""

    id: int
    files: tuple[VirtualFile, ...]


@dataclass(frozen=True)
class PreviewResult:
    """Message returned by the worker for one request."""

    id: int
    html: str | None
    digest: str
    error: str | None = None
