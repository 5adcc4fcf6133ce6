import pytest

from omnisearch.libs.text import escape_xml, reescape_xml, unescape_xml

SAMPLES = [
    "",
    "Naruto",
    "Tom & Jerry",
    "<b>bold</b>",
    "\"quoted\" and 'single'",
    "&lt; already escaped",
    "&amp;lt;",
    "&amp;quot;",
    "fish & chips & <more>",
]


def test_escape_all_specials():
    assert escape_xml("a<b>&\"'") == "a&lt;b&gt;&amp;&quot;&apos;"


@pytest.mark.parametrize("value", [None, ""])
def test_empty_values(value):
    assert escape_xml(value) == ""
    assert unescape_xml(value) == ""
    assert reescape_xml(value) == ""


def test_plain_text_unchanged():
    assert escape_xml("Cowboy Bebop") == "Cowboy Bebop"
    assert unescape_xml("Cowboy Bebop") == "Cowboy Bebop"


def test_unescape_decodes_amp_last():
    assert unescape_xml("&amp;lt;") == "&lt;"
    assert unescape_xml("&lt;b&gt;") == "<b>"


def test_escape_is_not_idempotent_but_reescape_is():
    once = escape_xml("<")
    assert escape_xml(once) == "&amp;lt;"
    assert reescape_xml(once) == once
    assert reescape_xml(reescape_xml("a & b")) == "a &amp; b"


@pytest.mark.parametrize("s", SAMPLES)
def test_unescape_reverses_escape(s):
    assert unescape_xml(escape_xml(s)) == s
    assert escape_xml(unescape_xml(escape_xml(s))) == escape_xml(s)


@pytest.mark.parametrize("s", SAMPLES)
def test_reescape_of_escaped_text_is_stable(s):
    assert reescape_xml(escape_xml(s)) == escape_xml(s)


def test_reescape_mixed_input_escapes_each_char_once():
    assert reescape_xml("Q&amp;A <live> & more") == "Q&amp;A &lt;live&gt; &amp; more"
