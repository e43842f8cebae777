"""
Barq Preview -- File Classifier Tests

Stylesheets and component candidates are picked by language tag or file
extension; the root is the component named App. Input order is kept.

Reference: classifier.py, types.py (component_name)
"""

import logging

from engine.preview.classifier import classify_files, is_component, is_stylesheet
from engine.preview.types import VirtualFile, component_name


class TestComponentName:
    def test_strips_source_extensions(self):
        assert component_name("Header.tsx") == "Header"
        assert component_name("Hero.jsx") == "Hero"
        assert component_name("utils.ts") == "utils"

    def test_uses_basename(self):
        assert component_name("src/components/Footer.tsx") == "Footer"

    def test_html_name_kept(self):
        assert component_name("index.html") == "index.html"


class TestPredicates:
    def test_stylesheet_by_language_or_extension(self):
        assert is_stylesheet(VirtualFile("theme", "", "css"))
        assert is_stylesheet(VirtualFile("styles.css", "", "html"))
        assert not is_stylesheet(VirtualFile("App.tsx", ""))

    def test_component_by_language_or_extension(self):
        assert is_component(VirtualFile("index.html", "", "html"))
        assert is_component(VirtualFile("Card.jsx", "", "js"))
        assert is_component(VirtualFile("Thing", "", "tsx"))
        assert not is_component(VirtualFile("utils.ts", "", "ts"))
        assert not is_component(VirtualFile("data.json", "{}", "json"))


class TestClassifyFiles:
    def test_partitions_in_input_order(self):
        files = [
            VirtualFile("b.css", "b{}", "css"),
            VirtualFile("Hero.tsx", ""),
            VirtualFile("utils.ts", "", "ts"),
            VirtualFile("a.css", "a{}", "css"),
            VirtualFile("Header.tsx", ""),
        ]
        classified = classify_files(files)

        assert [f.name for f in classified.stylesheets] == ["b.css", "a.css"]
        assert [f.name for f in classified.components] == ["Hero.tsx", "Header.tsx"]
        assert classified.root is None

    def test_root_is_app(self):
        files = [VirtualFile("Header.tsx", ""), VirtualFile("App.tsx", ""), VirtualFile("Footer.tsx", "")]
        classified = classify_files(files)

        assert classified.root is files[1]
        assert [f.name for f in classified.children] == ["Header.tsx", "Footer.tsx"]

    def test_app_in_subdirectory_is_root(self):
        classified = classify_files([VirtualFile("src/App.jsx", "", "jsx")])
        assert classified.root is not None

    def test_lowercase_app_is_not_root(self):
        assert classify_files([VirtualFile("app.tsx", "")]).root is None

    def test_duplicate_component_first_wins(self, caplog):
        first = VirtualFile("components/Header.tsx", "first")
        second = VirtualFile("legacy/Header.jsx", "second", "jsx")

        with caplog.at_level(logging.WARNING, logger="engine.preview.classifier"):
            classified = classify_files([first, second])

        assert classified.components == [first]
        assert classified.duplicates == [second]
        assert "duplicate component 'Header'" in caplog.text

    def test_empty(self):
        classified = classify_files([])

        assert classified.components == []
        assert classified.stylesheets == []
        assert classified.root is None
