"""
Pytest configuration shared by unit and integration tests.

Provides sample feeds, a minimal record type, and settings isolation.
"""

import asyncio
import os

import pytest

from gradual_rss.config import reset_settings


SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
    <channel>
        <title>Test RSS Feed</title>
        <description>A test RSS feed</description>
        <item>
            <title>First Item</title>
            <description>Description of first item</description>
            <link>https://example.com/1</link>
            <pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate>
        </item>
        <item>
            <title>Second Item</title>
            <description><![CDATA[Description with <b>HTML</b> content]]></description>
            <link>https://example.com/2</link>
            <pubDate>Tue, 02 Jan 2024 00:00:00 GMT</pubDate>
        </item>
    </channel>
</rss>"""

EMPTY_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
    <channel>
        <title>Empty RSS Feed</title>
        <description>An empty RSS feed</description>
    </channel>
</rss>"""


class Headline:
    """
    Minimal record type that does not subclass ItemRecord.

    Keeps the raw text/CDATA split so tests can see what the engine delivered.
    """

    def __init__(self):
        self.title = None
        self.description = None
        self.folded = []

    @classmethod
    def create(cls):
        return cls()

    def fold(self, node):
        self.folded.append(node.tag)
        if node.tag == 'title':
            self.title = node.value
        elif node.tag == 'description':
            self.description = node.value


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test without GRADUAL_RSS_* variables or a stray .env file."""
    for key in list(os.environ):
        if key.upper().startswith('GRADUAL_RSS_'):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_rss() -> bytes:
    return SAMPLE_RSS


@pytest.fixture
def empty_rss() -> bytes:
    return EMPTY_RSS


@pytest.fixture
def headline_type():
    return Headline


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run
