"""
Barq Preview Assembler -- Document Shell Tests

Every preview is a complete Arabic RTL document: Cairo webfont, Tailwind
CDN runtime configured with the Cairo font family, a reset, and every
stylesheet from the file set in input order.

Also covers determinism: the same files in the same order must always
produce the same string, otherwise memoization and ETags break.

Reference: shell.py (DOCUMENT_TEMPLATE, render_document)
"""

from engine.preview.assembler import build_preview_html
from engine.preview.shell import FONT_STYLESHEET_URL, TAILWIND_CDN_URL, render_document
from engine.preview.types import VirtualFile

# ============================================================================
# Helpers
# ============================================================================


def assert_contains(html, *fragments):
    for fragment in fragments:
        assert fragment in html, f"Expected to find {fragment!r} in document.\nGot (first 2000 chars):\n{html[:2000]}"


def assert_before(html, first, second):
    assert html.index(first) < html.index(second), f"Expected {first!r} before {second!r}"


# ============================================================================
# Shell
# ============================================================================


class TestDocumentShell:
    def test_rtl_arabic_root(self):
        html = render_document("<p>x</p>")

        assert html.startswith("<!DOCTYPE html>")
        assert_contains(html, '<html lang="ar" dir="rtl">', '<meta charset="UTF-8">')

    def test_font_and_tailwind(self, header_file):
        html = build_preview_html([header_file])

        assert_contains(
            html,
            f'<link href="{FONT_STYLESHEET_URL}" rel="stylesheet">',
            f'<script src="{TAILWIND_CDN_URL}"></script>',
            "tailwind.config",
            "fontFamily: { cairo: ['Cairo', 'sans-serif'] }",
        )

    def test_urls_not_escaped(self):
        html = render_document("")

        assert "family=Cairo:wght@300;400;500;600;700;800;900&display=swap" in html
        assert "&amp;" not in html

    def test_reset_styles(self):
        html = render_document("")

        assert_contains(
            html,
            "box-sizing: border-box",
            "font-family: 'Cairo', sans-serif",
            "direction: rtl",
            "overflow-x: hidden",
        )

    def test_body_inserted_verbatim(self):
        html = render_document('<a href="/?a=1&b=2">"q"</a>')
        assert_contains(html, '<body>\n  <a href="/?a=1&b=2">"q"</a>\n</body>')


# ============================================================================
# Stylesheets
# ============================================================================


class TestStylesheets:
    def test_stylesheet_collected(self, header_file, styles_file):
        html = build_preview_html([styles_file, header_file])
        assert_contains(html, ".site-header { color: teal; }")

    def test_stylesheets_in_input_order(self, header_file):
        files = [
            VirtualFile("z.css", ".z { order: 1; }", "css"),
            header_file,
            VirtualFile("a.css", ".a { order: 2; }", "css"),
        ]
        html = build_preview_html(files)

        assert_before(html, ".z { order: 1; }", ".a { order: 2; }")

    def test_stylesheets_inside_style_block(self, header_file, styles_file):
        html = build_preview_html([header_file, styles_file])

        assert_before(html, "<style>", ".site-header { color: teal; }")
        assert_before(html, ".site-header { color: teal; }", "</style>")

    def test_stylesheet_not_parsed_or_escaped(self, header_file):
        css = '.q::before { content: "<&>"; }'
        html = build_preview_html([header_file, VirtualFile("q.css", css, "css")])

        assert_contains(html, css)

    def test_body_after_head(self, header_file, styles_file):
        html = build_preview_html([header_file, styles_file])

        assert_before(html, "</head>", '<header class="site-header">')
        assert_before(html, "<body>", "<h1>Hi</h1>")


# ============================================================================
# Determinism
# ============================================================================


class TestDeterminism:
    def test_same_input_same_output(self, header_file, styles_file):
        files = [
            VirtualFile("App.tsx", "export default function App() {\n  return (<main><Header /></main>);\n}\n"),
            header_file,
            styles_file,
        ]
        outputs = {build_preview_html(files) for _ in range(20)}

        assert len(outputs) == 1

    def test_input_not_mutated(self, header_file, styles_file):
        files = [header_file, styles_file]
        snapshot = list(files)

        build_preview_html(files)

        assert files == snapshot

    def test_order_changes_output_without_root(self):
        a = VirtualFile("About.tsx", "export default function About() { return (<p>a</p>) }")
        b = VirtualFile("Team.tsx", "export default function Team() { return (<p>t</p>) }")

        assert build_preview_html([a, b]) != build_preview_html([b, a])
