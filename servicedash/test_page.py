"""Tests for rewriting anchors inside HTML source."""
from servicedash.config import ServiceDirectory
from servicedash.page import HtmlPage, sync_page

DIRECTORY = ServiceDirectory(host="10.0.0.5")

PAGE = """<!DOCTYPE html>
<html>
<body>
  <!-- <a href="http://commented:9080">ignored</a> -->
  <ul>
    <li><a class='btn' href=http://old:9080 target="_blank">Nginx</a></li>
    <li><a href="http://old:9999">Other</a></li>
    <li><a data-service="redis" title="Cache &amp; queue" href="#">Redis</a></li>
  </ul>
</body>
</html>
"""


def test_untouched_page_renders_identically():
    page = HtmlPage(PAGE)
    assert len(page.anchors()) == 3
    assert page.render() == PAGE


def test_rewrites_only_bound_anchor_tags():
    html, report = sync_page(PAGE, DIRECTORY)

    assert '<a class="btn" href="http://10.0.0.5:9080" target="_blank">Nginx</a>' in html
    assert '<a data-service="redis" title="Cache &amp; queue" href="http://10.0.0.5:9085">Redis</a>' in html
    assert '<a href="http://old:9999">Other</a>' in html
    assert '<!-- <a href="http://commented:9080">ignored</a> -->' in html
    assert report.rewritten == 2


def test_text_outside_rewritten_tags_is_preserved():
    html, _ = sync_page(PAGE, DIRECTORY)
    assert html.startswith("<!DOCTYPE html>\n<html>\n<body>\n")
    assert html.endswith("</ul>\n</body>\n</html>\n")
    assert html.count("\n") == PAGE.count("\n")


def test_sync_is_idempotent():
    once, _ = sync_page(PAGE, DIRECTORY)
    twice, report = sync_page(once, DIRECTORY)
    assert twice == once
    assert [r.new_href for r in report.rewrites] == [r.old_href for r in report.rewrites]


def test_self_closing_anchor_keeps_its_form():
    html, _ = sync_page('<p><a href="http://x:3000"/></p>', DIRECTORY)
    assert html == '<p><a href="http://10.0.0.5:3000"/></p>'


def test_declared_anchor_without_href_gains_one():
    html, _ = sync_page('<a data-service="vault">Vault</a>', DIRECTORY)
    assert html == '<a data-service="vault" href="http://10.0.0.5:8200">Vault</a>'


def test_rewrite_same_value_leaves_tag_untouched():
    source = "<a href='http://10.0.0.5:9080'>Nginx</a>"
    page = HtmlPage(source)
    page.anchors()[0].href = "http://10.0.0.5:9080"
    assert page.render() == source


def test_valueless_data_service_is_declared_but_unresolved():
    source = '<a data-service href="http://old:9080">Nginx</a>'
    html, report = sync_page(source, DIRECTORY)
    assert html == source
    assert report.unresolved == 1
