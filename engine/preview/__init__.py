"""
Barq Preview: the pure preview compiler.

Three stages:
  classifier  files → stylesheets, component candidates, root ("App")
  rewriter    component source → static HTML fragment
  assembler   fragments → complete RTL preview document (or None)

Around them:
  worker      off-loop builds with stale-result suppression
  vfs         create / update / delete operations on a file list
  frame       sandboxed iframe page sized per device
"""

from engine.preview.assembler import build_preview_html, order_sections
from engine.preview.classifier import classify_files
from engine.preview.frame import DEVICE_SIZES, render_frame
from engine.preview.hashing import hash_files
from engine.preview.rewriter import rewrite_component
from engine.preview.types import VirtualFile, component_name
from engine.preview.vfs import FileOperation, apply_operations, infer_language
from engine.preview.worker import PreviewWorker

__all__ = [
    "VirtualFile",
    "component_name",
    "classify_files",
    "rewrite_component",
    "build_preview_html",
    "order_sections",
    "hash_files",
    "FileOperation",
    "apply_operations",
    "infer_language",
    "DEVICE_SIZES",
    "render_frame",
    "PreviewWorker",
]
