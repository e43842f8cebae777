"""
Barq Preview: Component Rewriter

Pure function: component source → static HTML fragment.
No IO. Deterministic. Never raises on bad input.

Pipeline:
  extract_markup  (tsx_source)  find the returned markup, or strip boilerplate
  parse_markup    (markup)      tree of elements, text and {...} holes
  _Renderer                     walk the tree applying the static policy below

Expression policy (first match wins):
  {/* comment */}              deleted
  {"text"} {'text'} {`text`}   unwrapped to the bare text
  {value} {obj.prop}           deleted, cannot be resolved statically
  {cond ? a : b}               deleted
  {items.map(...)}             deleted, the preview shows no repeated items
  {cond && <X/>}               guard dropped, right-hand side rendered
  anything else                deleted
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from functools import lru_cache

from engine.preview.markup import (
    STRING_ESCAPES,
    VOID_ELEMENTS,
    Attribute,
    Comment,
    Element,
    ExpressionHole,
    Fragment,
    Node,
    Text,
    mask_nested,
    parse_markup,
    template_text,
)
from engine.preview.tsx_source import extract_markup

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Policy tables
# ---------------------------------------------------------------------------

ATTRIBUTE_NAMES: dict[str, str] = {
    "className": "class",
    "htmlFor": "for",
}

DROPPED_ATTRIBUTES: set[str] = {"ref", "key"}

_EVENT_HANDLER_RE = re.compile(r"^on[A-Z]")
_IDENTIFIER_CHAIN_RE = re.compile(
    r"^!*[A-Za-z_$][\w$]*"
    r"(?:\s*\??\.\s*[A-Za-z_$][\w$]*|\s*(?:\?\.)?\[\s*(?:\d+|'[^']*'|\"[^\"]*\")\s*\])*$"
)
_STRING_LITERAL_RE = re.compile(r"""^(?:"((?:[^"\\\n]|\\.)*)"|'((?:[^'\\\n]|\\.)*)')$""")
_STRING_ESCAPE_RE = re.compile(r"\\(.)")
_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?$", re.IGNORECASE)
_TERNARY_RE = re.compile(r"(?<!\?)\?(?![?.])[^:]*:")
_MAP_CALL_RE = re.compile(r"\.\s*map\s*\(")
_CAMEL_RE = re.compile(r"([A-Z])")
_STYLE_KEY_RE = re.compile(r"[\w-]+")
_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n(?:[ \t]*\n){2,}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def rewrite_component(content: str, components: Mapping[str, str] | None = None) -> str:
    """
    Rewrite one component's source into a static HTML fragment.

    `components` maps child component names to their already rewritten
    fragments. An element whose name is in the map is replaced by the
    fragment, whatever its attributes or children; the fragment itself is
    not scanned again.
    """
    markup = extract_markup(content)
    html = _Renderer(components or {}).nodes(parse_markup(markup))
    return _BLANK_LINES_RE.sub("\n\n", html).strip()


@lru_cache(maxsize=512)
def rewrite_component_cached(content: str) -> str:
    """
    Cached version of rewrite_component without substitutions.
    Keyed by the exact source, so unchanged files are not rewritten again.
    """
    return rewrite_component(content)


def style_to_css(source: str) -> str | None:
    """
    Convert a style object literal to a CSS declaration string.

    `{ backgroundColor: 'red', fontSize: 12 }` → `background-color: red; font-size: 12`.
    Keys are kebab-cased, declaration order is kept. Declarations whose value
    is not a literal are dropped. None if nothing static remains.
    """
    s = source.strip()
    if not (s.startswith("{") and s.endswith("}")):
        return None

    body = s[1:-1]
    masked = mask_nested(body)
    declarations: list[str] = []

    start = 0
    for end in [i for i, c in enumerate(masked) if c == ","] + [len(body)]:
        segment, seg_mask = body[start:end], masked[start:end]
        start = end + 1

        colon = seg_mask.find(":")
        if colon == -1:
            if segment.strip():
                logger.debug("rewriter: dropped style entry %r", segment.strip()[:80])
            continue

        key = _literal_text(segment[:colon].strip())
        if key is None:
            key = segment[:colon].strip()
        if not _STYLE_KEY_RE.fullmatch(key):
            logger.debug("rewriter: dropped style key %r", key[:80])
            continue

        value = _style_value(segment[colon + 1 :].strip())
        if value is None:
            logger.debug("rewriter: dropped style value for %r", key)
            continue

        declarations.append(f"{_kebab(key)}: {value}")

    return "; ".join(declarations) or None


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


def _literal_text(source: str) -> str | None:
    """Text of a single quoted string literal, or None."""
    m = _STRING_LITERAL_RE.match(source)
    if not m:
        return None
    raw = m.group(1) if m.group(1) is not None else m.group(2)
    return _STRING_ESCAPE_RE.sub(lambda esc: STRING_ESCAPES.get(esc.group(1), esc.group(1)), raw)


def _style_value(source: str) -> str | None:
    text = _literal_text(source)
    if text is not None:
        return text
    if _NUMBER_RE.match(source):
        return source
    tmpl = template_text(source)
    if tmpl is not None and not tmpl[1]:
        return tmpl[0]
    return None


def _kebab(key: str) -> str:
    if "-" in key:
        return key.lower()
    return _CAMEL_RE.sub(r"-\1", key).lower()


def _unwrap_parens(source: str, depth: int = 0) -> str:
    """Strip parentheses that wrap the whole expression."""
    s = source.strip()
    while s.startswith("("):
        masked = mask_nested(s, depth)
        if masked.find(")") != len(s) - 1:
            break
        s = s[1:-1].strip()
    return s


def _escape_attribute(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class _Renderer:
    def __init__(self, components: Mapping[str, str]) -> None:
        self.components = components
        # element nesting of the node being rendered, shared with re-parses
        self.depth = 0

    def nodes(self, nodes: list[Node]) -> str:
        return "".join(self.node(n) for n in nodes)

    def node(self, node: Node) -> str:
        if isinstance(node, Text):
            return node.value
        if isinstance(node, Comment):
            return node.value
        if isinstance(node, ExpressionHole):
            return self.expression(node.source)
        if isinstance(node, Fragment):
            return self.children(node.children)
        return self.element(node)

    def children(self, nodes: list[Node]) -> str:
        self.depth += 1
        try:
            return self.nodes(nodes)
        finally:
            self.depth -= 1

    def element(self, el: Element) -> str:
        name = el.name

        # An unclosed `<Header>` reads as `<Header />`: what the scanner put
        # inside it is rendered after it.
        if name in self.components:
            fragment = self.components[name]
            return fragment if el.closed else fragment + self.nodes(el.children)

        if name[:1].isupper() and (el.self_closing or not el.closed):
            logger.debug("rewriter: dropped unresolved component <%s />", name)
            return self.nodes(el.children)

        open_tag = f"<{name}{self.attributes(el.attributes)}"
        if name.lower() in VOID_ELEMENTS:
            return open_tag + (" />" if el.self_closing else ">")
        if el.self_closing:
            return f"{open_tag}></{name}>"
        return f"{open_tag}>{self.children(el.children)}</{name}>"

    def attributes(self, attributes: list[Attribute]) -> str:
        parts: list[str] = []

        for attr in attributes:
            if attr.kind == "spread" or attr.name is None:
                continue
            name = attr.name
            if name in DROPPED_ATTRIBUTES:
                continue
            if attr.kind == "expression" and _EVENT_HANDLER_RE.match(name):
                continue

            html_name = ATTRIBUTE_NAMES.get(name, name)

            if attr.kind == "bare":
                parts.append(html_name)
            elif attr.kind == "string":
                parts.append(f"{html_name}={attr.quote}{attr.value}{attr.quote}")
            elif name == "style":
                css = style_to_css(attr.value or "")
                if css:
                    parts.append(f'style="{_escape_attribute(css)}"')
            else:
                value = self.attribute_value(attr.value or "")
                if value is True:
                    parts.append(html_name)
                elif isinstance(value, str):
                    parts.append(f'{html_name}="{_escape_attribute(value)}"')
                else:
                    logger.debug("rewriter: dropped dynamic attribute %s={%s}", name, (attr.value or "")[:80])

        return "".join(" " + p for p in parts)

    def attribute_value(self, source: str) -> str | bool | None:
        """Static value of an attribute expression: text, True for a bare attribute, None to drop."""
        s = source.strip()
        text = _literal_text(s)
        if text is not None:
            return text
        tmpl = template_text(s)
        if tmpl is not None:
            text, interpolated = tmpl
            return _WHITESPACE_RE.sub(" ", text).strip() if interpolated else text
        if s == "true":
            return True
        return None

    def expression(self, source: str) -> str:
        s = source.strip()
        if not s:
            return ""

        if s.startswith("/*") and not mask_nested(s, self.depth).strip():
            return ""
        if s.startswith("//") and all(
            not line.strip() or line.strip().startswith("//") for line in s.splitlines()
        ):
            return ""

        text = _literal_text(s)
        if text is not None:
            return text
        tmpl = template_text(s)
        if tmpl is not None:
            return tmpl[0]

        if _IDENTIFIER_CHAIN_RE.match(s):
            return self._drop("identifier", s)

        masked = mask_nested(s, self.depth)
        if _TERNARY_RE.search(masked):
            return self._drop("ternary", s)
        if _MAP_CALL_RE.search(masked):
            return self._drop("list", s)

        guard = masked.rfind("&&")
        if guard != -1:
            return self.guarded(s[guard + 2 :])

        return self._drop("expression", s)

    def guarded(self, source: str) -> str:
        """Right-hand side of `cond && ...`, rendered unconditionally."""
        s = _unwrap_parens(source, self.depth)
        if s.startswith("<"):
            return self.nodes(parse_markup(s, self.depth))
        return self.expression(s)

    @staticmethod
    def _drop(kind: str, source: str) -> str:
        logger.debug("rewriter: dropped %s expression {%s}", kind, source[:80])
        return ""
