"""
Tests for source decoding and URL date detection.
"""

import io
from datetime import datetime, timezone

import pytest

from boilerpipe.exceptions import DocumentReadError
from boilerpipe.preprocessor import Preprocessor, read_source
from boilerpipe.urls import date_from_url


def test_detect_meta_charset_with_whatwg_mapping():
    raw = b'<html><head><meta charset="ISO-8859-1"></head></html>'

    assert Preprocessor.detect_charset_from_bytes(raw) == "windows-1252"


def test_detect_http_equiv_charset():
    raw = (b'<meta http-equiv="Content-Type" content="text/html; charset=Shift_JIS">'
           b'<p>x</p>')

    assert Preprocessor.detect_charset_from_bytes(raw) == "shift_jis"


def test_no_declared_charset():
    assert Preprocessor.detect_charset_from_bytes(b"<p>plain</p>") is None


def test_undeclared_bytes_are_guessed():
    raw = "<p>naïve café</p>".encode("utf-8")

    assert Preprocessor().decode(raw) == "<p>naïve café</p>"


def test_explicit_encoding_wins():
    raw = '<meta charset="utf-8"><p>caf\xe9</p>'.encode("latin-1")

    assert "café" in Preprocessor().decode(raw, encoding="latin-1")


def test_read_source_variants():
    assert read_source("<p>x</p>") == "<p>x</p>"
    assert read_source(b"<p>x</p>") == "<p>x</p>"
    assert read_source(io.StringIO("<p>y</p>")) == "<p>y</p>"
    assert read_source(io.BytesIO(b"<p>z</p>")) == "<p>z</p>"


def test_read_source_rejects_unknown_types():
    with pytest.raises(TypeError):
        read_source(42)


class FailingReader:
    def read(self):
        raise TimeoutError("read timed out")


def test_read_failure_is_wrapped():
    with pytest.raises(DocumentReadError) as excinfo:
        read_source(FailingReader())

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert excinfo.value.details == {"error": "read timed out"}


@pytest.mark.parametrize("url, expected", [
    ("https://example.com/2016/05/12/story.html", datetime(2016, 5, 12, tzinfo=timezone.utc)),
    ("https://example.com/news/2019/3/7/title", datetime(2019, 3, 7, tzinfo=timezone.utc)),
    ("https://example.com/blog/2019-03-07-title.html", datetime(2019, 3, 7, tzinfo=timezone.utc)),
    ("https://example.com/archive/20200131/post", datetime(2020, 1, 31, tzinfo=timezone.utc)),
    ("https://example.com/about", None),
    ("https://example.com/2016/13/45/bad-date", None),
    ("https://example.com/?date=2016-05-12", None),
    ("", None),
])
def test_date_from_url(url, expected):
    assert date_from_url(url) == expected
