"""Pytest configuration and shared fixtures for stringsource tests."""

import pytest
from stringsource.ast.nodes import (
    Container,
    Emphasis,
    Html,
    Image,
    InlineCode,
    Link,
    Literal,
    Paragraph,
    Text,
)


class TreeBuilder:
    """Builds nodes over one source string, slicing ``raw`` from each range."""

    def __init__(self, source):
        self.source = source

    def _span(self, start, end):
        return {"range": (start, end), "raw": self.source[start:end]}

    def text(self, start, end):
        return Text(value=self.source[start:end], **self._span(start, end))

    def code(self, start, end, value=None):
        # `code` => value without the backticks
        if value is None:
            value = self.source[start + 1:end - 1]
        return InlineCode(value=value, **self._span(start, end))

    def literal(self, kind, start, end, value):
        return Literal(value=value, kind=kind, **self._span(start, end))

    def image(self, start, end, alt=None, title=None, url=""):
        return Image(url=url, alt=alt, title=title, **self._span(start, end))

    def link(self, start, end, *children, url="", title=None):
        return Link(children=children, url=url, title=title, **self._span(start, end))

    def strong(self, start, end, *children):
        return Emphasis(children=children, kind="Strong", **self._span(start, end))

    def emphasis(self, start, end, *children):
        return Emphasis(children=children, kind="Emphasis", **self._span(start, end))

    def html(self, start, end, *children, value=None):
        return Html(children=children, value=value, **self._span(start, end))

    def paragraph(self, start, end, *children):
        return Paragraph(children=children, **self._span(start, end))

    def container(self, kind, start, end, *children):
        return Container(children=children, kind=kind, **self._span(start, end))

    def document(self, *children):
        return Container(children=children, kind="Document", **self._span(0, len(self.source)))


@pytest.fixture
def tree():
    """Return a factory for TreeBuilder instances."""
    return TreeBuilder


@pytest.fixture
def strong_str(tree):
    """Tree for ``**str**``."""
    t = tree("**str**")
    return t.document(t.paragraph(0, 7, t.strong(0, 7, t.text(2, 5))))


@pytest.fixture
def text_and_link(tree):
    """Tree for ``_[link](http://example)``."""
    t = tree("_[link](http://example)")
    return t.document(t.paragraph(
        0, 23,
        t.text(0, 1),
        t.link(1, 23, t.text(2, 6), url="http://example"),
    ))


@pytest.fixture
def image_and_text(tree):
    """Tree for ``![alt](http://example.png) text``."""
    t = tree("![alt](http://example.png) text")
    return t.document(t.paragraph(
        0, 31,
        t.image(0, 26, alt="alt", url="http://example.png"),
        t.text(26, 31),
    ))


@pytest.fixture
def confusing_image(tree):
    """Tree for ``![!](http://example.com)``."""
    t = tree("![!](http://example.com)")
    return t.document(t.paragraph(0, 24, t.image(0, 24, alt="!", url="http://example.com")))


@pytest.fixture
def match_and_text(tree):
    """Tree for ``**match** text``."""
    t = tree("**match** text")
    return t.document(t.paragraph(0, 14, t.strong(0, 9, t.text(2, 7)), t.text(9, 14)))


@pytest.fixture
def empty_document(tree):
    """Tree for an empty source."""
    return tree("").document()
