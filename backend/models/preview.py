"""Preview models: file sets in, documents out."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from engine.preview.types import VirtualFile

Language = Literal["tsx", "jsx", "html", "css", "js", "ts", "json"]


class FileIn(BaseModel):
    """One virtual file as sent by the client."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, max_length=500)
    content: str = ""
    language: Language = "tsx"

    def to_virtual_file(self) -> VirtualFile:
        return VirtualFile(name=self.name, content=self.content, language=self.language)

    @classmethod
    def from_virtual_file(cls, f: VirtualFile) -> FileIn:
        return cls(name=f.name, content=f.content, language=f.language)


class PreviewRequest(BaseModel):
    """What the client sends to build a preview."""

    model_config = {"extra": "forbid"}

    files: list[FileIn] = Field(default_factory=list)


class PreviewResponse(BaseModel):
    """What the preview endpoint returns. `html` is null when there is no component."""

    html: str | None
    digest: str
    root: str | None = None
    components: list[str] = Field(default_factory=list)


class FileOperationIn(BaseModel):
    """One create / update / delete operation from the generation pipeline."""

    model_config = {"extra": "forbid"}

    path: str = Field(min_length=1, max_length=500)
    action: Literal["create", "update", "delete"]
    content: str = ""


class ApplyOperationsRequest(BaseModel):
    """What the client sends to apply operations and rebuild."""

    model_config = {"extra": "forbid"}

    files: list[FileIn] = Field(default_factory=list)
    operations: list[FileOperationIn] = Field(default_factory=list)


class ApplyOperationsResponse(BaseModel):
    """The updated file list plus its preview."""

    files: list[FileIn]
    html: str | None
    digest: str
