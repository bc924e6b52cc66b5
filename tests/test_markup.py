"""Tests for aiparser.markup: sanitizing, injection, link and chrome removal."""

from __future__ import annotations

import pytest

from aiparser.markup import (
    anchor,
    collapse_links,
    inject_styles,
    is_full_document,
    remove_elements,
    remove_links,
    sanitize_html,
    wrap_fragment,
)

# ---------------------------------------------------------------------------
# sanitize_html
# ---------------------------------------------------------------------------

class TestSanitize:
    def test_removes_script_and_noscript(self):
        html = '<p>a</p><script src="x.js"></script><noscript>n</noscript><p>b</p>'
        assert sanitize_html(html) == "<p>a</p><p>b</p>"

    def test_case_insensitive_multiline(self):
        html = '<div><SCRIPT type="text/javascript">\nvar x = "<p>";\n</Script ></div>'
        assert sanitize_html(html) == "<div></div>"

    def test_spliced_script_removed(self):
        html = "<scr<script>x</script>ipt>alert(1)</script><p>ok</p>"
        cleaned = sanitize_html(html)
        assert "<script" not in cleaned.lower()
        assert cleaned.endswith("<p>ok</p>")

    def test_unclosed_script_swallows_rest(self):
        assert sanitize_html("<p>a</p><script>evil(") == "<p>a</p>"

    def test_stray_closing_tag_removed(self):
        assert sanitize_html("<p>a</p></script>") == "<p>a</p>"

    def test_empty_input(self):
        assert sanitize_html("") == ""

    def test_other_markup_untouched(self):
        html = '<div class="scripted"><p>descriptive</p></div>'
        assert sanitize_html(html) == html

    def test_custom_elements_named_like_script_kept(self):
        html = "<script-loader>keep</script-loader><noscript-banner>too</noscript-banner><p>tail</p>"
        assert sanitize_html(html) == html


# ---------------------------------------------------------------------------
# inject_styles
# ---------------------------------------------------------------------------

class TestInjectStyles:
    def test_base_goes_into_head(self):
        out = inject_styles("<html><head><title>t</title></head><body></body></html>",
                            base_url="https://x.example")
        assert '<head><base href="https://x.example"><title>' in out

    def test_base_is_idempotent(self):
        html = "<html><head></head><body></body></html>"
        once = inject_styles(html, base_url="https://x.example")
        twice = inject_styles(once, base_url="https://x.example")
        assert twice.lower().count("<base") == 1

    def test_existing_base_kept(self):
        html = '<html><head><base href="https://orig.example"></head></html>'
        out = inject_styles(html, base_url="https://x.example")
        assert "https://x.example" not in out
        assert out.count("<base") == 1

    def test_base_before_style(self):
        out = inject_styles("<html><head></head></html>", base_url="https://x.example",
                            custom_css="body{color:red}")
        assert out.index("<base") < out.index("<style>")
        assert "<style>body{color:red}</style>" in out

    def test_head_created_when_missing(self):
        out = inject_styles('<html lang="en"><body></body></html>', base_url="https://x.example")
        assert out.startswith('<html lang="en"><head><base href="https://x.example"></head><body>')

    def test_fragment_unchanged(self):
        assert inject_styles("<div>f</div>", base_url="https://x.example", custom_css="a{}") == "<div>f</div>"

    def test_base_url_escaped(self):
        out = inject_styles("<html><head></head></html>", base_url='https://x.example/?a="b"')
        assert '&quot;b&quot;' in out


@pytest.mark.parametrize(("html", "expected"), [
    ("<!DOCTYPE html><html></html>", True),
    ("  \n<HTML>", True),
    ("<!doctype html>", True),
    ("<div><html></html></div>", False),
    ("", False),
])
def test_is_full_document(html, expected):
    assert is_full_document(html) is expected


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestLinks:
    def test_anchor_becomes_span(self):
        assert remove_links('<a href="x" class="c">t</a>') == '<span class="c">t</span>'

    def test_navigation_attributes_dropped(self):
        out = remove_links('<a href="x" target="_blank" rel="noopener" alt="a" style="color: red" data-id="7">t</a>')
        assert out == '<span style="color: red" data-id="7">t</span>'

    def test_bare_anchor(self):
        assert remove_links('<p><a href="/x">t</a></p>') == "<p><span>t</span></p>"

    def test_other_a_tags_untouched(self):
        html = "<abbr>x</abbr><article>y</article><aside>z</aside>"
        assert remove_links(html) == html

    def test_collapse_keeps_inner_content(self):
        assert collapse_links('<p><a href="x" class="c"><b>t</b></a>!</p>') == "<p><b>t</b>!</p>"


def test_wrap_fragment_locks_down_document():
    doc = wrap_fragment("<p>hi</p>")
    assert is_full_document(doc)
    assert "script-src 'none'" in doc
    assert "pointer-events: none" in doc
    assert "user-select: none" in doc
    assert "<p>hi</p>" in doc


# ---------------------------------------------------------------------------
# Structural removal
# ---------------------------------------------------------------------------

class TestAnchor:
    def test_selector(self):
        assert anchor("header", id="page-header") == 'header[id="page-header"]'
        assert anchor(class_contains="b c", data_testid="s") == 'div[class*="b c"][data-testid="s"]'

    def test_quotes_escaped(self):
        assert anchor("button", aria_label='say "hi"') == 'button[aria-label="say \\"hi\\""]'

    def test_attribute_order_independent(self):
        selector = anchor("div", class_contains="b c", data_testid="s")
        for html in ('<div data-testid="s" class="a b c d">x</div>', '<div class="a b c d" data-testid="s">x</div>'):
            assert remove_elements(html, selector) == ("", 1)

    def test_exact_attribute_value(self):
        html = '<header id="page-header-2">h</header>'
        assert remove_elements(html, anchor("header", id="page-header")) == (html, 0)

    def test_tag_name_boundary(self):
        html = "<input-container>c</input-container><input type=text>"
        assert remove_elements(html, anchor("input")) == ("<input-container>c</input-container>", 1)

    def test_bracketed_utility_class(self):
        html = '<div class="mt-[var(--composer-container-height)]">s</div><p>k</p>'
        selector = anchor(class_contains="mt-[var(--composer-container-height)]")
        assert remove_elements(html, selector) == ("<p>k</p>", 1)


class TestRemoveElements:
    @pytest.mark.parametrize("inner", [
        "",
        "<div>a</div>",
        "<div><div><div>deep</div></div></div><p>b</p>",
        "<div></div><div><span>x</span></div>",
    ])
    def test_nested_same_tag(self, inner):
        html = f'<div id="x">{inner}</div><p>keep</p>'
        assert remove_elements(html, anchor(id="x")) == ("<p>keep</p>", 1)

    def test_all_matches_removed(self):
        html = '<div class="ad">1</div><p>k</p><div class="ad">2</div>'
        assert remove_elements(html, anchor(class_contains="ad")) == ("<p>k</p>", 2)

    def test_nested_matches_counted_once(self):
        html = '<div class="ad"><div class="ad">inner</div></div><p>k</p>'
        assert remove_elements(html, anchor(class_contains="ad")) == ("<p>k</p>", 1)

    def test_implicitly_closed_descendant(self):
        html = '<aside><div class="sidebar"><div>history</aside><main>answer</main>'
        out, count = remove_elements(html, anchor("div", class_contains="sidebar"))
        assert count == 1
        assert "history" not in out
        assert out == "<aside></aside><main>answer</main>"

    def test_unclosed_runs_to_end(self):
        assert remove_elements('<p>a</p><div id="x"><div>never closed', anchor(id="x")) == ("<p>a</p>", 1)

    def test_no_match_returns_input_unchanged(self):
        html = "<P CLASS='a'>untouched &nbsp; markup<br></P>"
        assert remove_elements(html, anchor(id="x")) == (html, 0)
        assert remove_elements("", anchor(id="x")) == ("", 0)

    def test_void_element(self):
        html = '<p>a</p><hr class="e9c7U"><p>b</p>'
        assert remove_elements(html, anchor("hr", class_contains="e9c7U")) == ("<p>a</p><p>b</p>", 1)

    def test_self_closing(self):
        assert remove_elements('<div id="x"/><p>k</p>', anchor(id="x")) == ("<p>k</p>", 1)

    def test_commented_close_tag(self):
        html = '<div id="x"><!-- </div> --><span>in</span></div>after'
        assert remove_elements(html, anchor(id="x")) == ("after", 1)

    def test_quoted_angle_bracket_in_attribute(self):
        html = '<div id="x" data-x="a>b"><div title="<div>"></div></div>z'
        assert remove_elements(html, anchor(id="x")) == ("z", 1)

    def test_containing_guard(self):
        html = (
            '<div class="row"><span data-testid="date-divider">Today</span></div>'
            '<div class="row"><p>answer</p></div>'
        )
        out, count = remove_elements(html, anchor(class_contains="row"), containing='[data-testid="date-divider"]')
        assert count == 1
        assert out == '<div class="row"><p>answer</p></div>'

    def test_plain_selector(self):
        assert remove_elements("<nav>n</nav><p>k</p>", "nav") == ("<p>k</p>", 1)

    def test_custom_element(self):
        html = "<bard-sidenav><div>r</div></bard-sidenav><main>m</main>"
        assert remove_elements(html, anchor("bard-sidenav")) == ("<main>m</main>", 1)

    def test_full_document_keeps_doctype(self):
        html = '<!DOCTYPE html><html><head><title>t</title></head><body><nav>n</nav><p>k</p></body></html>'
        out, count = remove_elements(html, "nav")
        assert count == 1
        assert out == "<!DOCTYPE html><html><head><title>t</title></head><body><p>k</p></body></html>"
