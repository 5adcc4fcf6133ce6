import pytest

from omnisearch.libs.text import sanitize_input


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("naruto", "naruto"),
        ("  naruto  ", "naruto"),
        ("...naruto!!", "naruto"),
        ("#[naruto]", "naruto"),
        ("one  piece", "one piece"),
        ("one \t\n piece", "one piece"),
        ("fate/zero", "fate/zero"),
        ("re:zero", "re:zero"),
        ("k-on!", "k-on"),
        ("@home", "@home"),
        ("", ""),
        ("!!!", ""),
        ("  ?  ", ""),
    ],
)
def test_sanitize_input(raw, expected):
    assert sanitize_input(raw) == expected


def test_sanitize_keeps_non_ascii_punctuation():
    assert sanitize_input("「進撃の巨人」") == "「進撃の巨人」"
    assert sanitize_input("«Ōkami»") == "«Ōkami»"
