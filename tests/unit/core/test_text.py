"""Unit tests for core/utils/text.py"""

from sitepub.core.utils.text import reading_time, strip_tags, truncate, word_count


def test_strip_tags_removes_markup_and_collapses_whitespace():
    assert strip_tags("<p>Hi\n  <em>there</em></p>\n<!-- more -->\n<p>again</p>") == "Hi there again"


def test_strip_tags_unescapes_entities():
    assert strip_tags("<p>Fish &amp; chips</p>") == "Fish & chips"


def test_strip_tags_none_is_empty():
    assert strip_tags(None) == ""
    assert strip_tags("") == ""


def test_truncate_short_text_untouched():
    assert truncate("short", 200) == "short"


def test_truncate_cuts_and_drops_trailing_space():
    """The cut never exceeds the limit and never ends on whitespace."""
    assert truncate("abcd efgh", 5) == "abcd"
    assert len(truncate("x" * 500, 200)) == 200


def test_reading_time_rounds_up():
    assert reading_time(0) == 0
    assert reading_time(1) == 1
    assert reading_time(201) == 2
    assert word_count("one two  three\nfour") == 4


def test_strip_tags_drops_script_and_style_bodies():
    html = '<style>p { color: red; }</style><p>Visible</p><SCRIPT type="module">alert(1)</SCRIPT> text'
    assert strip_tags(html) == "Visible text"
