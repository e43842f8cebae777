"""
Pytest configuration and fixtures for Barq Preview backend tests.
"""

from __future__ import annotations

import os

import httpx
import pytest
import pytest_asyncio

# Set test environment variables before importing config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from backend.main import app  # noqa: E402

APP_TSX = "export default function App() {\n  return (\n    <main><Header /></main>\n  );\n}\n"
HEADER_TSX = 'export default function Header() {\n  return (\n    <header className="top"><h1>Hi</h1></header>\n  );\n}\n'


@pytest_asyncio.fixture
async def client():
    """HTTP client talking to the app in-process."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def site_files():
    """A small generated site: root, one child and a stylesheet."""
    return [
        {"name": "App.tsx", "content": APP_TSX, "language": "tsx"},
        {"name": "Header.tsx", "content": HEADER_TSX, "language": "tsx"},
        {"name": "styles.css", "content": ".top { color: teal; }", "language": "css"},
    ]
