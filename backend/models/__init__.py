"""
Pydantic models for Barq Preview.

All data shapes defined here. No imports from routes.
"""

from backend.models.preview import (
    ApplyOperationsRequest,
    ApplyOperationsResponse,
    FileIn,
    FileOperationIn,
    PreviewRequest,
    PreviewResponse,
)

__all__ = [
    "FileIn",
    "PreviewRequest",
    "PreviewResponse",
    "FileOperationIn",
    "ApplyOperationsRequest",
    "ApplyOperationsResponse",
]
