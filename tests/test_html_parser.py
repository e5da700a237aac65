# File: tests/test_html_parser.py
from site_graph.crawler.models import HEADING_LEVELS
from site_graph.parser.html_parser import extract_page_data


def test_extracts_title_description_and_headings(article_html):
    page = extract_page_data(article_html)

    assert page.title == "Example Article"
    assert page.description == "An article about things"
    assert page.headings["h1"] == ["Main heading"]
    assert page.headings["h2"] == ["First", ""]
    assert page.headings["h3"] == ["Deep"]
    assert list(page.headings) == list(HEADING_LEVELS)
    assert page.headings["h6"] == []


def test_links_are_raw_and_complete(article_html):
    page = extract_page_data(article_html)

    assert page.links == [
        "/about",
        "https://external.org/x",
        "javascript:void(0)",
        "mailto:me@example.com",
    ]


def test_open_graph_fallbacks():
    html = """
    <html><head>
      <meta property="og:title" content="OG Title">
      <meta property="og:description" content="OG description">
    </head><body></body></html>
    """
    page = extract_page_data(html)
    assert page.title == "OG Title"
    assert page.description == "OG description"


def test_empty_title_falls_back_to_open_graph():
    html = '<title>  </title><meta property="og:title" content="Fallback">'
    assert extract_page_data(html).title == "Fallback"


def test_headings_follow_document_order():
    html = "<h2>b1</h2><h1>a1</h1><section><h2>b2</h2></section><h2>b3</h2>"
    page = extract_page_data(html)
    assert page.headings["h1"] == ["a1"]
    assert page.headings["h2"] == ["b1", "b2", "b3"]


def test_empty_document():
    page = extract_page_data("")
    assert page.title == ""
    assert page.description == ""
    assert page.links == []
    assert all(texts == [] for texts in page.headings.values())
