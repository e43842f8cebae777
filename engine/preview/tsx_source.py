"""
Barq Preview: TSX Source Extraction

Uses tree-sitter (TSX grammar) to find the markup a component returns.
Falls back to stripping module boilerplate line by line when the source
has no usable return.

Reference: steps 1 and 2 of the component rewrite.
"""

from __future__ import annotations

import re
import threading
from typing import Any

import tree_sitter_typescript as _ts_mod
from tree_sitter import Language, Parser

_LANG = Language(_ts_mod.language_tsx())

# tree-sitter parsers are not safe to share between threads
_local = threading.local()


def _parser() -> Parser:
    parser = getattr(_local, "parser", None)
    if parser is None:
        parser = _local.parser = Parser(_LANG)
    return parser


_FUNCTION_TYPES: set[str] = {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
}

# ---------------------------------------------------------------------------
# Boilerplate patterns (fallback path)
# ---------------------------------------------------------------------------

_IMPORT_LINE_RE = re.compile(r"^[ \t]*import\b.*(?:\n|$)", re.MULTILINE)
_EXPORT_LINE_RE = re.compile(r"^[ \t]*export\b.*(?:\n|$)", re.MULTILINE)
_FUNCTION_LINE_RE = re.compile(
    r"^[ \t]*(?:async\s+)?function\s*\*?\s*\w*\s*(?:<[^>\n]*>)?\s*\([^)]*\)\s*(?::[^{\n]*)?\{[ \t]*(?:\n|$)",
    re.MULTILINE,
)
_ARROW_LINE_RE = re.compile(
    r"^[ \t]*(?:const|let|var)\s+\w+\s*(?::[^=\n]*)?=\s*(?:async\s*)?(?:\([^)]*\)|\w+)\s*(?::[^=\n]*)?=>\s*[{(]?[ \t]*(?:\n|$)",
    re.MULTILINE,
)
_RETURN_LINE_RE = re.compile(r"^[ \t]*return\s*\(?[ \t]*(?:\n|$)", re.MULTILINE)
_TRAILING_CLOSERS_RE = re.compile(r"[\s)};]+\Z")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_markup(content: str) -> str:
    """
    Return the markup a component returns, or the boilerplate-free source.

    Components are the functions declared at module level, directly or as
    the initializer of a top-level `const`. The default export is tried
    first, then the others in source order; a component's markup is its own
    `return (...)` / `return <jsx/>`, or an arrow's expression body. If no
    component has markup, the outermost `return` anywhere in the file is
    used (class `render()` methods). A parenthesized candidate whose ")" is
    missing is not balanced and is skipped.
    """
    source = content.encode("utf-8")
    tree = _parser().parse(source)

    components, default_name = _top_level_components(tree.root_node)
    components.sort(key=lambda c: not (c[1] or (c[0] is not None and c[0] == default_name)))

    span = next((s for s in (_function_markup(fn) for _, _, fn in components) if s), None)
    if span is None:
        span = _outermost_return_markup(tree.root_node)
    if span is not None:
        start, end = span
        return source[start:end].decode("utf-8")

    return strip_boilerplate(content, tree)


def strip_boilerplate(content: str, tree: Any = None) -> str:
    """
    Remove module syntax around component markup.

    Drops import statements (multi-line ones via the syntax tree), whole
    lines starting with `export`, function and arrow-function wrapper lines,
    a dangling `return (` line, and the closing `);` / `}` run at the end.
    """
    if tree is None:
        tree = _parser().parse(content.encode("utf-8"))

    source = content.encode("utf-8")
    spans = [(n.start_byte, n.end_byte) for n, _ in _walk(tree.root_node) if n.type == "import_statement"]
    if spans:
        kept: list[bytes] = []
        cursor = 0
        for start, end in sorted(spans):
            if start < cursor:
                continue
            kept.append(source[cursor:start])
            cursor = end
        kept.append(source[cursor:])
        content = b"".join(kept).decode("utf-8")

    text = _IMPORT_LINE_RE.sub("", content)
    text = _EXPORT_LINE_RE.sub("", text)
    text = _FUNCTION_LINE_RE.sub("", text)
    text = _ARROW_LINE_RE.sub("", text)
    text = _RETURN_LINE_RE.sub("", text)
    return _TRAILING_CLOSERS_RE.sub("", text)


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


def _walk(root: Any):
    """Yield (node, number of enclosing function nodes), pre-order."""
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        child_depth = depth + 1 if node.type in _FUNCTION_TYPES else depth
        for child in reversed(node.children):
            stack.append((child, child_depth))


def _top_level_components(root: Any) -> tuple[list[tuple[str | None, bool, Any]], str | None]:
    """
    Module-level function nodes as (name, exported as default, node), in
    source order, plus the name given in `export default Name;` if any.
    """
    components: list[tuple[str | None, bool, Any]] = []
    default_name: str | None = None

    for stmt in root.named_children:
        is_default = False
        decls = [stmt]
        if stmt.type == "export_statement":
            is_default = any(c.type == "default" for c in stmt.children)
            decls = stmt.named_children

        for decl in decls:
            if decl.type in _FUNCTION_TYPES:
                name = decl.child_by_field_name("name")
                components.append((name.text.decode("utf-8") if name else None, is_default, decl))
            elif decl.type in ("lexical_declaration", "variable_declaration"):
                for declarator in decl.named_children:
                    if declarator.type != "variable_declarator":
                        continue
                    fn = _unwrap_function(declarator.child_by_field_name("value"))
                    if fn is not None:
                        name = declarator.child_by_field_name("name")
                        components.append((name.text.decode("utf-8"), is_default, fn))
            elif decl.type == "call_expression" and is_default:
                fn = _unwrap_function(decl)
                if fn is not None:
                    components.append((None, True, fn))
            elif decl.type == "identifier" and is_default:
                default_name = decl.text.decode("utf-8")

    return components, default_name


def _unwrap_function(node: Any) -> Any:
    """The function node of `() => ...`, `function () {}` or `memo(() => ...)`, else None."""
    if node is None:
        return None
    if node.type in _FUNCTION_TYPES:
        return node
    if node.type == "call_expression":
        args = node.child_by_field_name("arguments")
        if args is not None:
            return next((a for a in args.named_children if a.type in _FUNCTION_TYPES), None)
    return None


def _function_markup(fn: Any) -> tuple[int, int] | None:
    """Span of the markup a function returns from its own body (not from nested functions)."""
    body = fn.child_by_field_name("body")
    if body is None:
        return None
    if body.type != "statement_block":
        return _markup_span(body)

    for node, depth in _walk(body):
        if depth == 0 and node.type == "return_statement":
            span = _return_span(node)
            if span is not None:
                return span
    return None


def _outermost_return_markup(root: Any) -> tuple[int, int] | None:
    best: tuple[tuple[int, int], tuple[int, int]] | None = None
    for node, depth in _walk(root):
        if node.type != "return_statement":
            continue
        span = _return_span(node)
        if span is not None and (best is None or (depth, span[0]) < best[0]):
            best = ((depth, span[0]), span)
    return best[1] if best else None


def _return_span(node: Any) -> tuple[int, int] | None:
    arg = next((c for c in node.named_children if c.type != "comment"), None)
    return _markup_span(arg)


def _markup_span(node: Any) -> tuple[int, int] | None:
    """Byte span of the markup inside a returned expression, or None if it is not markup."""
    if node is None:
        return None

    if node.type == "parenthesized_expression":
        closer = node.children[-1]
        if closer.type != ")" or closer.is_missing:
            return None
        inner = [c for c in node.children[1:-1] if c.type != "comment"]
        if not inner:
            return None
        first, last = inner[0], inner[-1]
    else:
        first = last = node

    if not first.text.decode("utf-8").lstrip("(").lstrip().startswith("<"):
        return None
    return first.start_byte, last.end_byte
