"""
Barq Preview: Composition Assembler

Pure function: files → preview document (or None).
No IO. Deterministic: same files in the same order → same string, always.

Two branches:
  root present  the App fragment is the body; every reference to a child
                component (self-closing or with children) is replaced by
                that child's fragment, one level deep
  root absent   child fragments are concatenated, header-like sections
                first and footer-like sections last
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from engine.preview.classifier import classify_files
from engine.preview.rewriter import rewrite_component, rewrite_component_cached
from engine.preview.shell import render_document
from engine.preview.types import ClassifiedFiles, VirtualFile

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Section ordering (root-absent branch), matched case-insensitively
# ---------------------------------------------------------------------------

LEADING_SECTIONS: tuple[str, ...] = ("Header", "Navbar", "Nav", "Hero", "Banner")
TRAILING_SECTIONS: tuple[str, ...] = ("Footer", "CTA", "Contact", "ContactForm")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_preview_html(files: Iterable[VirtualFile]) -> str | None:
    """
    Build the complete preview document for a file set.

    Returns None when no file is a component candidate, however many
    stylesheets there are.
    """
    classified = classify_files(files)
    if not classified.components:
        return None

    body = assemble_body(classified)
    return render_document(body, (f.content for f in classified.stylesheets))


def assemble_body(classified: ClassifiedFiles) -> str:
    """Body fragment for already classified files."""
    if classified.root is not None:
        return _compose_from_root(classified.root, classified.children)
    return "\n".join(rewrite_component_cached(f.content) for f in order_sections(classified.children))


def order_sections(components: list[VirtualFile]) -> list[VirtualFile]:
    """
    Order components for the root-absent branch.

    Leading names come first in table order, each at most once; trailing
    names are held back and emitted last in table order; everything else
    keeps input order in between.
    """
    by_name: dict[str, VirtualFile] = {}
    for f in components:
        by_name.setdefault(f.component_name.lower(), f)

    leading = [by_name[n.lower()] for n in LEADING_SECTIONS if n.lower() in by_name]
    trailing = [by_name[n.lower()] for n in TRAILING_SECTIONS if n.lower() in by_name]
    placed = {id(f) for f in leading + trailing}
    middle = [f for f in components if id(f) not in placed]

    return leading + middle + trailing


# ---------------------------------------------------------------------------
# Root-present branch
# ---------------------------------------------------------------------------


def _compose_from_root(root: VirtualFile, children: list[VirtualFile]) -> str:
    fragments = {f.component_name: rewrite_component_cached(f.content) for f in children}
    logger.debug("assembler: composing %s with %d child components", root.name, len(fragments))
    return rewrite_component(root.content, fragments)
