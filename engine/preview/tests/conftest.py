"""
Preview engine test configuration.

Everything under engine/preview is pure and synchronous apart from the
worker, so no fixtures beyond a couple of reusable component sources.
"""

import pytest

from engine.preview.rewriter import rewrite_component_cached
from engine.preview.types import VirtualFile


@pytest.fixture(autouse=True)
def clear_rewrite_cache():
    """Rewrites are memoized per source; start every test cold."""
    rewrite_component_cached.cache_clear()
    yield
    rewrite_component_cached.cache_clear()


@pytest.fixture
def header_file():
    return VirtualFile(
        "Header.tsx",
        'export default function Header() {\n  return (\n    <header className="site-header">\n      <h1>Hi</h1>\n    </header>\n  );\n}\n',
    )


@pytest.fixture
def styles_file():
    return VirtualFile("styles.css", ".site-header { color: teal; }", "css")
