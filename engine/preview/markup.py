"""
Barq Preview: Markup Parser

Small recursive-descent scanner for the markup a component returns.
Produces a tree of Element / Fragment / Text / Comment / ExpressionHole
nodes. Expression islands ({...}) are kept as raw source; deciding what
they render to is the rewriter's job.

The scanner is total: unbalanced braces, stray close tags and unclosed
elements degrade the tree instead of raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass
class Text:
    value: str


@dataclass
class Comment:
    """An HTML comment or <!...> declaration, kept verbatim."""

    value: str


@dataclass
class ExpressionHole:
    """A {...} island. `source` is the text between the braces."""

    source: str


@dataclass
class Attribute:
    """
    One attribute of an element.

    kind:
      "string"     name="value" (value holds the unquoted text)
      "expression" name={...}   (value holds the source between the braces)
      "bare"       name         (value is None)
      "spread"     {...props}   (name is None)
    """

    name: str | None
    value: str | None
    kind: str
    quote: str = '"'


@dataclass
class Element:
    name: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    self_closing: bool = False
    # False when the input ended, or an ancestor closed, before </name>
    closed: bool = True


@dataclass
class Fragment:
    """<>...</> shorthand."""

    children: list[Node] = field(default_factory=list)


Node = Element | Fragment | Text | Comment | ExpressionHole

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VOID_ELEMENTS: set[str] = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

# Element nesting deeper than this is kept as plain text. The budget is
# shared by every parse and mask of one component's markup.
MAX_DEPTH = 64

_TAG_NAME_RE = re.compile(r"[A-Za-z][\w.:-]*")
_CLOSE_TAG_RE = re.compile(r"</\s*([A-Za-z][\w.:-]*)?\s*>")
_ATTR_NAME_RE = re.compile(r"[^\s=/>{}\"'<]+")
_UNQUOTED_VALUE_RE = re.compile(r"(?:[^\s>/]|/(?!>))+")
_TEXT_RE = re.compile(r"[^<{}]+")
_SPACE_RE = re.compile(r"\s*")

# Backslash escapes with a meaning in string and template literals; any
# other escaped character stands for itself.
STRING_ESCAPES: dict[str, str] = {"n": "\n", "t": "\t"}

# Last significant characters after which "<" opens JSX rather than comparing.
_JSX_LEADS = frozenset("(,?:&|>=[{!")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_markup(source: str, depth: int = 0) -> list[Node]:
    """
    Parse markup text into a list of top-level nodes. Never raises.

    `depth` is the nesting level `source` sits at, for markup found inside
    an expression island of an element already being rendered.
    """
    return _Parser(source, depth).parse()


def template_text(source: str) -> tuple[str, bool] | None:
    """
    Static text of a source that is exactly one template literal.

    Returns (text, interpolated): `${...}` parts are removed from the text and
    `interpolated` says whether there were any. None if `source` is not a
    single template literal.
    """
    if not source.startswith("`"):
        return None
    parser = _Parser(source)
    if parser.template_end(0) != len(source):
        return None

    parts: list[str] = []
    interpolated = False
    i, n = 1, len(source) - 1
    while i < n:
        c = source[i]
        if c == "\\":
            ch = source[i + 1 : i + 2]
            parts.append(STRING_ESCAPES.get(ch, ch))
            i += 2
        elif c == "$" and source.startswith("{", i + 1):
            interpolated = True
            i = parser.braced_end(i + 1) or n
        else:
            parts.append(c)
            i += 1
    return "".join(parts), interpolated


def mask_nested(source: str, depth: int = 0) -> str:
    """
    Return a copy of an expression where only top-level syntax is visible.

    Everything inside brackets, string and template literals, block comments
    and embedded JSX is replaced by spaces. Top-level brackets themselves are
    kept, so `items.map(x => ...)` masks to `items.map(        )`. The result
    has the same length as the input, so indices line up. `depth` is as for
    parse_markup.
    """
    parser = _Parser(source, depth)
    out = list(source)
    n = len(source)
    depth = 0
    prev = "("
    i = 0

    def blank(start: int, end: int) -> None:
        for k in range(start, min(end, n)):
            out[k] = " "

    while i < n:
        ch = source[i]

        end = None
        if ch in "\"'":
            end = _string_end(source, i)
        elif ch == "`":
            end = parser.template_end(i)
        elif source.startswith("/*", i):
            close = source.find("*/", i + 2)
            end = n if close == -1 else close + 2
        elif ch == "<" and prev in _JSX_LEADS and _tag_starts(source, i):
            end = parser.skip_element(i)

        if end is not None:
            blank(i, end)
            i = end
            prev = "a"
            continue

        if ch in "([{":
            if depth > 0:
                out[i] = " "
            depth += 1
        elif ch in ")]}":
            depth = max(depth - 1, 0)
            if depth > 0:
                out[i] = " "
        elif depth > 0:
            out[i] = " "

        if not ch.isspace():
            prev = ch
        i += 1

    return "".join(out)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def _string_end(src: str, i: int) -> int | None:
    """End index (exclusive) of a quoted string starting at i, or None if it runs off the line."""
    quote = src[i]
    j = i + 1
    n = len(src)
    while j < n:
        c = src[j]
        if c == "\\":
            j += 2
            continue
        if c == quote:
            return j + 1
        if c == "\n":
            return None
        j += 1
    return None


def _tag_starts(src: str, i: int) -> bool:
    return i + 1 < len(src) and (src[i + 1].isalpha() or src[i + 1] == ">")


class _Parser:
    def __init__(self, src: str, depth: int = 0) -> None:
        self.src = src
        self.n = len(src)
        self.pos = 0
        self.depth = depth
        # set once MAX_DEPTH was hit; everything after that point is text
        self.truncated = False
        # names of the elements currently open, innermost last ("" for <>)
        self.open_names: list[str] = []

    def parse(self) -> list[Node]:
        return self._children()

    # -- content ----------------------------------------------------------

    def _children(self) -> list[Node]:
        """Parse nodes until end of input or a close tag for an open element."""
        src = self.src
        nodes: list[Node] = []
        buf: list[str] = []

        def flush() -> None:
            if buf:
                nodes.append(Text("".join(buf)))
                buf.clear()

        while self.pos < self.n:
            ch = src[self.pos]

            if ch == "<":
                m = _CLOSE_TAG_RE.match(src, self.pos)
                if m:
                    if (m.group(1) or "") in self.open_names:
                        break
                    # closes nothing that is open
                    self.pos = m.end()
                    continue
                node = self._element()
                if node is None:
                    buf.append(ch)
                    self.pos += 1
                    continue
                flush()
                nodes.append(node)

            elif ch == "{":
                expr = self._expression()
                if expr is None and self.truncated:
                    buf.append(src[self.pos :])
                    self.pos = self.n
                    continue
                if expr is None:
                    # unbalanced: drop the brace and keep scanning
                    self.pos += 1
                    continue
                flush()
                nodes.append(ExpressionHole(expr))

            elif ch == "}":
                self.pos += 1

            else:
                m = _TEXT_RE.match(src, self.pos)
                buf.append(m.group(0))
                self.pos = m.end()

        flush()
        return nodes

    def _consume_close(self, name: str) -> bool:
        m = _CLOSE_TAG_RE.match(self.src, self.pos)
        if m and (m.group(1) or "") == name:
            self.pos = m.end()
            return True
        return False

    def _element(self) -> Node | None:
        """Parse whatever starts with "<" at pos. Returns None if it is not a tag."""
        src, start = self.src, self.pos

        if src.startswith("<!--", start):
            close = src.find("-->", start + 4)
            self.pos = self.n if close == -1 else close + 3
            return Comment(src[start : self.pos])

        if src.startswith("<!", start):
            close = src.find(">", start)
            self.pos = self.n if close == -1 else close + 1
            return Comment(src[start : self.pos])

        if self.depth >= MAX_DEPTH:
            self.truncated = True
            self.pos = self.n
            return Text(src[start:])

        if src.startswith("<>", start):
            self.pos += 2
            self.depth += 1
            try:
                children, _ = self._nested_children("")
            finally:
                self.depth -= 1
            return Fragment(children)

        m = _TAG_NAME_RE.match(src, start + 1)
        if not m:
            return None

        name = m.group(0)
        self.pos = m.end()
        attributes, self_closing = self._attributes()

        if self_closing or name.lower() in VOID_ELEMENTS:
            return Element(name, attributes, [], self_closing)

        self.depth += 1
        try:
            children, closed = self._nested_children(name)
        finally:
            self.depth -= 1
        return Element(name, attributes, children, False, closed)

    def _nested_children(self, name: str) -> tuple[list[Node], bool]:
        # An ancestor's close tag also stops the scan and closes this element implicitly.
        self.open_names.append(name)
        try:
            children = self._children()
        finally:
            self.open_names.pop()
        return children, self._consume_close(name)

    # -- attributes -------------------------------------------------------

    def _skip_space(self) -> None:
        self.pos = _SPACE_RE.match(self.src, self.pos).end()

    def _attributes(self) -> tuple[list[Attribute], bool]:
        src = self.src
        attrs: list[Attribute] = []

        while True:
            self._skip_space()
            if self.pos >= self.n:
                return attrs, False

            ch = src[self.pos]
            if ch == ">":
                self.pos += 1
                return attrs, False
            if src.startswith("/>", self.pos):
                self.pos += 2
                return attrs, True
            if ch == "{":
                expr = self._expression()
                if expr is None and self.truncated:
                    self.pos = self.n
                elif expr is None:
                    self.pos += 1
                else:
                    attrs.append(Attribute(None, expr, "spread"))
                continue

            m = _ATTR_NAME_RE.match(src, self.pos)
            if not m:
                self.pos += 1
                continue

            name = m.group(0)
            self.pos = m.end()
            self._skip_space()
            if self.pos < self.n and src[self.pos] == "=":
                self.pos += 1
                self._skip_space()
                attrs.append(self._attribute_value(name))
            else:
                attrs.append(Attribute(name, None, "bare"))

    def _attribute_value(self, name: str) -> Attribute:
        src = self.src
        ch = src[self.pos] if self.pos < self.n else ""

        if ch in ("'", '"'):
            close = src.find(ch, self.pos + 1)
            if close == -1:
                value = src[self.pos + 1 :]
                self.pos = self.n
            else:
                value = src[self.pos + 1 : close]
                self.pos = close + 1
            return Attribute(name, value, "string", ch)

        if ch == "{":
            expr = self._expression()
            if expr is not None:
                return Attribute(name, expr, "expression")
            if self.truncated:
                self.pos = self.n
                return Attribute(name, "", "string")
            self.pos += 1

        m = _UNQUOTED_VALUE_RE.match(src, self.pos)
        if not m:
            return Attribute(name, "", "string")
        self.pos = m.end()
        return Attribute(name, m.group(0), "string")

    # -- expressions ------------------------------------------------------

    def _expression(self) -> str | None:
        """Consume a {...} island at pos and return its inner source, or None if unbalanced."""
        start = self.pos
        end = self.braced_end(start)
        if end is None:
            return None
        self.pos = end
        return self.src[start + 1 : end - 1]

    def braced_end(self, i: int) -> int | None:
        """Index just past the "}" matching the "{" at i."""
        src, n = self.src, self.n
        depth = 0
        prev = "{"

        while i < n:
            ch = src[i]

            if ch in "\"'":
                end = _string_end(src, i)
                if end is not None:
                    i = end
                    prev = "a"
                    continue
            elif ch == "`":
                end = self.template_end(i)
                if end is not None:
                    i = end
                    prev = "a"
                    continue
                if self.truncated:
                    return None
            elif src.startswith("/*", i):
                close = src.find("*/", i + 2)
                if close == -1:
                    return None
                i = close + 2
                continue
            elif ch == "<" and prev in _JSX_LEADS and _tag_starts(src, i):
                i = self.skip_element(i)
                if self.truncated:
                    return None
                prev = "a"
                continue
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return i + 1

            if not ch.isspace():
                prev = ch
            i += 1

        return None

    def template_end(self, i: int) -> int | None:
        """Index just past the template literal starting at i, or None if it never closes."""
        src, n = self.src, self.n
        j = i + 1
        while j < n:
            c = src[j]
            if c == "\\":
                j += 2
                continue
            if c == "`":
                return j + 1
            if c == "$" and j + 1 < n and src[j + 1] == "{":
                end = self.braced_end(j + 1)
                if end is None:
                    return None
                j = end
                continue
            j += 1
        return None

    def skip_element(self, i: int) -> int:
        """Index just past the JSX element starting at i (at least one character)."""
        saved_pos, saved_open = self.pos, self.open_names
        self.pos = i
        self.open_names = []
        try:
            node = self._element()
            end = self.pos if node is not None and self.pos > i else i + 1
        finally:
            self.pos = saved_pos
            self.open_names = saved_open
        return end
