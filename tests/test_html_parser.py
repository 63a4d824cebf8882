# File: tests/test_html_parser.py
"""Tests for content extraction from raw HTML."""
from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

import site_harvest.parser.html_parser as html_parser
from site_harvest.parser.html_parser import aggregate_text, extract_document, is_binary_content_type

LOREM = (
    "Readable paragraphs are what an indexing pipeline wants to receive from a page, "
    "so every block here is comfortably longer than the minimum length. "
)


@pytest.fixture()
def no_readability(monkeypatch):
    """Force the manual boilerplate-stripping path."""
    monkeypatch.setattr(html_parser, "_readability", lambda markup, url: ("", ""))


def test_article_page_extracts_title_description_content():
    html = f"""
    <html><head>
      <title>  Guide   to
        Widgets </title>
      <meta name="description" content="  All about   widgets. ">
    </head><body>
      <nav><a href="/">Home</a></nav>
      <article>
        <h1>Guide to Widgets</h1>
        <p>{LOREM} First paragraph.</p>
        <p>{LOREM} Second paragraph.</p>
        <p>{LOREM} Third paragraph.</p>
      </article>
    </body></html>
    """
    doc = extract_document(html, "https://x.test/guide")
    assert doc.url == "https://x.test/guide"
    assert doc.title == "Guide to Widgets"
    assert doc.description == "All about widgets."
    assert "Second paragraph." in doc.content
    assert "  " not in doc.content
    assert doc.content == doc.content.strip()


@pytest.mark.parametrize(
    "meta,expected",
    [
        ('<meta property="og:description" content="From OG">', "From OG"),
        ('<meta name="twitter:description" content="From Twitter">', "From Twitter"),
        (
            '<meta name="description" content="  "><meta property="og:description" content="OG wins">',
            "OG wins",
        ),
        (
            '<meta name="twitter:description" content="T"><meta name="description" content="Plain">',
            "Plain",
        ),
        ("", ""),
    ],
)
def test_description_priority(meta, expected):
    html = f"<html><head><title>T</title>{meta}</head><body><p>{LOREM}</p></body></html>"
    assert extract_document(html, "https://x.test/").description == expected


def test_missing_title_is_empty_not_placeholder():
    doc = extract_document(f"<html><body><p>{LOREM}</p></body></html>", "https://x.test/")
    assert doc.title == ""


def test_empty_html_never_fails():
    doc = extract_document("", "https://x.test/empty")
    assert doc.url == "https://x.test/empty"
    assert doc.title == ""
    assert doc.description == ""
    assert doc.content == ""


def test_fallback_strips_boilerplate_and_prefers_main(no_readability):
    html = f"""
    <html><head><title>Docs</title></head><body>
      <header><p>Header text that is long enough to count as a block.</p></header>
      <div role="navigation"><p>Navigation text that is long enough to count too.</p></div>
      <p>Outside main paragraph that is long enough to be a block.</p>
      <main>
        <h2>Installing the widget toolkit on your machine</h2>
        <p>{LOREM} one</p>
        <p aria-hidden="true">Hidden paragraph that is long enough to be a block.</p>
        <ul><li>{LOREM} two</li></ul>
        <blockquote>{LOREM} three</blockquote>
        <p>short</p>
        <script>var tracking = "script content that should never appear";</script>
      </main>
      <footer><p>Footer text that is long enough to count as a block.</p></footer>
    </body></html>
    """
    doc = extract_document(html, "https://x.test/docs")
    assert doc.title == "Docs"
    assert "Installing the widget toolkit" in doc.content
    assert "two" in doc.content and "three" in doc.content
    for unwanted in ("Header text", "Navigation text", "Outside main", "Hidden paragraph", "Footer text", "tracking"):
        assert unwanted not in doc.content
    assert "short" not in doc.content


def test_fallback_takes_first_of_main_or_article(no_readability):
    html = f"""
    <html><body>
      <article><p>ARTICLE-MARKER {LOREM}</p><p>{LOREM} a2</p><p>{LOREM} a3</p></article>
      <main><p>MAIN-MARKER {LOREM}</p></main>
    </body></html>
    """
    content = extract_document(html, "https://x.test/").content
    assert "ARTICLE-MARKER" in content
    assert "MAIN-MARKER" not in content


def test_few_blocks_fall_back_to_whole_body_text():
    body_html = (
        "<body><div>Intro line</div>"
        "<p>This paragraph has exactly forty chars!</p>"
        "<p>Another paragraph with forty chars, ok.</p>"
        "<span>tail</span></body>"
    )
    soup = BeautifulSoup(body_html, "html.parser")
    blocks = aggregate_text(soup.body).split("\n\n")
    assert blocks[:2] == [
        "This paragraph has exactly forty chars!",
        "Another paragraph with forty chars, ok.",
    ]
    assert len(blocks) == 3
    assert blocks[2].startswith("Intro line")
    assert blocks[2].endswith("tail")


def test_few_blocks_fallback_in_full_extraction(no_readability):
    html = (
        "<html><body><div>Intro line</div>"
        "<p>This paragraph has exactly forty chars!</p>"
        "<p>Another paragraph with forty chars, ok.</p></body></html>"
    )
    content = extract_document(html, "https://x.test/").content
    assert "Intro line" in content


def test_near_duplicate_blocks_kept_once():
    repeated = "A" * 130
    html = (
        "<div>"
        f"<p>{repeated} first tail</p>"
        f"<p>{repeated} second tail</p>"
        f"<p>One {LOREM}</p>"
        f"<p>Two {LOREM}</p>"
        "</div>"
    )
    soup = BeautifulSoup(html, "html.parser")
    blocks = aggregate_text(soup.div).split("\n\n")
    assert len(blocks) == 3
    assert blocks[0].endswith("first tail")
    assert blocks[1].startswith("One") and blocks[2].startswith("Two")


def test_aggregate_text_thresholds_are_configurable():
    soup = BeautifulSoup("<div><p>tiny one</p><p>tiny two</p></div>", "html.parser")
    assert aggregate_text(soup.div, min_length=5, min_blocks=1) == "tiny one\n\ntiny two"


def test_aggregate_text_none_root():
    assert aggregate_text(None) == ""


@pytest.mark.parametrize(
    "ctype,expected",
    [
        ("image/png", True),
        ("application/pdf", True),
        ("application/zip", True),
        ("application/x-gzip", True),
        ("application/octet-stream", True),
        ("text/html; charset=utf-8", False),
        ("application/xhtml+xml", False),
        ("", False),
        (None, False),
    ],
)
def test_is_binary_content_type(ctype, expected):
    assert is_binary_content_type(ctype) is expected
