"""
Barq Preview: Document Shell

The fixed HTML document every preview body is wrapped in: Arabic RTL root,
Cairo webfont, Tailwind CDN runtime with a font-family theme extension,
and one <style> block holding the reset plus every collected stylesheet.
"""

from __future__ import annotations

from collections.abc import Iterable

import chevron

FONT_FAMILY = "Cairo"
FONT_STYLESHEET_URL = "https://fonts.googleapis.com/css2?family=Cairo:wght@300;400;500;600;700;800;900&display=swap"
TAILWIND_CDN_URL = "https://cdn.tailwindcss.com"

BASE_CSS = """* { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: 'Cairo', sans-serif; direction: rtl; overflow-x: hidden; }
    img { max-width: 100%; height: auto; }"""

# Triple mustaches throughout: values are inserted byte for byte.
DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link href="{{{font_url}}}" rel="stylesheet">
  <script src="{{{tailwind_url}}}"></script>
  <script>
    tailwind.config = {
      theme: { extend: { fontFamily: { cairo: ['{{{font_family}}}', 'sans-serif'] } } }
    }
  </script>
  <style>
    {{{base_css}}}
    {{{stylesheets}}}
  </style>
</head>
<body>
  {{{body}}}
</body>
</html>"""


def render_document(body: str, stylesheets: Iterable[str] = ()) -> str:
    """
    Wrap a body fragment in the preview document.

    Stylesheet contents are joined with newlines in the given order, without
    parsing, deduplication or scoping.
    """
    return chevron.render(
        DOCUMENT_TEMPLATE,
        {
            "font_url": FONT_STYLESHEET_URL,
            "tailwind_url": TAILWIND_CDN_URL,
            "font_family": FONT_FAMILY,
            "base_css": BASE_CSS,
            "stylesheets": "\n".join(stylesheets),
            "body": body,
        },
    )
