"""
Barq Preview: File Classifier

Partitions the virtual file set into stylesheets and component candidates
and picks the root component. Pure, no IO.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from engine.preview.types import (
    COMPONENT_EXTENSIONS,
    COMPONENT_LANGUAGES,
    ROOT_COMPONENT,
    STYLESHEET_EXTENSION,
    STYLESHEET_LANGUAGE,
    ClassifiedFiles,
    VirtualFile,
)

logger = logging.getLogger(__name__)


def is_stylesheet(f: VirtualFile) -> bool:
    return f.language == STYLESHEET_LANGUAGE or f.name.endswith(STYLESHEET_EXTENSION)


def is_component(f: VirtualFile) -> bool:
    return f.language in COMPONENT_LANGUAGES or f.name.endswith(COMPONENT_EXTENSIONS)


def classify_files(files: Iterable[VirtualFile]) -> ClassifiedFiles:
    """
    Split files into stylesheets and component candidates, keeping input order.

    A file can be both (e.g. language "css" but named "X.tsx"); it is then
    counted in both lists, matching the independent predicates.

    Two components reducing to the same name: the first one wins and the
    later ones are reported in `duplicates` with a warning.
    """
    result = ClassifiedFiles()
    seen: dict[str, VirtualFile] = {}

    for f in files:
        if is_stylesheet(f):
            result.stylesheets.append(f)
        if not is_component(f):
            continue

        name = f.component_name
        if name in seen:
            logger.warning(
                "classifier: duplicate component %r (%s shadowed by %s), keeping the first",
                name,
                f.name,
                seen[name].name,
            )
            result.duplicates.append(f)
            continue

        seen[name] = f
        result.components.append(f)
        if name == ROOT_COMPONENT and result.root is None:
            result.root = f

    return result
