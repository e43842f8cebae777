"""File-set hashing for memoization and change detection."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable

from engine.preview.types import VirtualFile


def hash_files(files: Iterable[VirtualFile]) -> str:
    """
    Compute a deterministic hash of a file set.

    Order matters: the preview depends on input order, so the same files in
    a different order hash differently.

    Returns:
        Hexadecimal hash string (first 16 characters of SHA-256)
    """
    serialized = json.dumps(
        [[f.name, f.language, f.content] for f in files],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]
