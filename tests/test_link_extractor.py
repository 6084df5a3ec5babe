# File: tests/test_link_extractor.py
from sitemap_service.crawler.link_extractor import extract_links, extract_title


def test_links_in_document_order():
    html = (
        '<a href="/first">1</a>'
        "<p>text</p>"
        "<A class='nav' HREF='/second'>2</A>"
        '<a id="x" href="  /third  " title="t">3</a>'
    )
    assert extract_links(html) == ["/first", "/second", "/third"]


def test_anchor_spanning_lines():
    html = '<a\n  href="/multi"\n>Multi\nline</a>'
    assert extract_links(html) == ["/multi"]


def test_anchor_without_closing_tag_is_not_matched():
    assert extract_links('<a href="/open">no close') == []


def test_malformed_markup_is_matched_textually():
    # The lazy match runs from the first "<a" across the unclosed anchor
    html = '<a name="top"><a href="/inner">x</a>'
    assert extract_links(html) == ["/inner"]


def test_no_anchors():
    assert extract_links("<html><body>nothing</body></html>") == []
    assert extract_links("") == []


def test_title_trimmed():
    assert extract_title("<html><head><title>  Home \n</title></head></html>") == "Home"


def test_title_case_insensitive_and_first_only():
    html = "<TITLE>First</TITLE><title>Second</title>"
    assert extract_title(html) == "First"


def test_title_missing_or_empty():
    assert extract_title("<html><head></head></html>") == ""
    assert extract_title("<title></title>") == ""
