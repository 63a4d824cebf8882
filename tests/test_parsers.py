# File: tests/test_parsers.py
"""Tests for the pure sitemap, robots.txt and link parsers."""
from __future__ import annotations

import pytest
from conftest import sitemap_index, urlset

from site_harvest.crawler.link_extractor import extract_links, is_probably_html_path
from site_harvest.parser.robots_parser import extract_sitemap_directives
from site_harvest.parser.sitemap_parser import SitemapKind, parse_sitemap


def test_parse_urlset():
    doc = parse_sitemap(urlset("https://x.test/a", "https://x.test/b"))
    assert doc.kind is SitemapKind.URLSET
    assert doc.locs == ["https://x.test/a", "https://x.test/b"]


def test_parse_index():
    doc = parse_sitemap(sitemap_index("https://x.test/s1.xml", "https://x.test/s2.xml"))
    assert doc.is_index
    assert doc.locs == ["https://x.test/s1.xml", "https://x.test/s2.xml"]


def test_parse_without_namespace_and_blank_locs():
    xml = "<urlset><url><loc>  https://x.test/a  </loc></url><url><loc>   </loc></url><url><loc/></url></urlset>"
    assert parse_sitemap(xml).locs == ["https://x.test/a"]


def test_parse_bytes_with_encoding_declaration():
    xml = urlset("https://x.test/é").encode("utf-8")
    assert parse_sitemap(xml).locs == ["https://x.test/é"]


@pytest.mark.parametrize("broken", ["", "not xml at all", "<urlset><url><loc>https://x.test/a</loc>"])
def test_parse_error_gives_empty_urlset(broken):
    doc = parse_sitemap(broken)
    assert doc.kind is SitemapKind.URLSET
    assert doc.locs == []


def test_parse_is_idempotent():
    xml = urlset("https://x.test/a", "https://x.test/b", "https://x.test/c")
    assert set(parse_sitemap(xml).locs) == set(parse_sitemap(xml).locs)


def test_robots_sitemap_directives():
    text = (
        "User-agent: *\n"
        "Disallow: /private\n"
        "Sitemap: https://x.test/sitemap-pages.xml\n"
        "  sitemap:https://x.test/sitemap-posts.xml\r\n"
        "SITEMAP: https://x.test/sitemap-pages.xml\n"
        "# Sitemap: https://x.test/commented.xml\n"
    )
    assert extract_sitemap_directives(text) == [
        "https://x.test/sitemap-pages.xml",
        "https://x.test/sitemap-posts.xml",
    ]


def test_robots_without_directives():
    assert extract_sitemap_directives("User-agent: *\nDisallow:") == []


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/docs/intro", True),
        ("/", True),
        ("/index.html", True),
        ("/logo.PNG", False),
        ("/static/app.js", False),
        ("/fonts/a.woff2", False),
        ("/files/report.pdf", False),
        ("/bin/module.wasm", False),
    ],
)
def test_is_probably_html_path(path, expected):
    assert is_probably_html_path(path) is expected


def test_extract_links_filters_and_resolves():
    html = """
    <a href="/about">About</a>
    <a href="team/">Team</a>
    <a href="https://x.test/blog?page=2#top">Blog</a>
    <a href="https://x.test/about#history">About again</a>
    <a href="https://other.test/page">Other</a>
    <a href="https://sub.x.test/page">Sub</a>
    <a href="#section">Anchor</a>
    <a href="mailto:hi@x.test">Mail</a>
    <a href="tel:+100">Call</a>
    <a href="JavaScript:void(0)">JS</a>
    <a href="/img/photo.jpg?size=large">Photo</a>
    <a>No href</a>
    """
    links = extract_links(html, "https://x.test/", "x.test")
    assert links == [
        "https://x.test/about",
        "https://x.test/team/",
        "https://x.test/blog?page=2",
    ]


def test_extract_links_limit():
    html = "".join(f'<a href="/p{i}">p</a>' for i in range(20))
    assert len(extract_links(html, "https://x.test/", "x.test", limit=5)) == 5
