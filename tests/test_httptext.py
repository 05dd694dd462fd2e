from urllib.parse import unquote

import pytest

from tinydesk.httptext import (
    HttpContentType,
    HttpMethod,
    HttpStatus,
    compare_string,
    compare_string_case,
    content_type_from_path,
    content_type_name,
    decode_percent,
    decode_percent_url,
    find_char,
    method_from_name,
    method_name,
    reason_from_status,
    size_to_text,
    text_to_size,
)


def test_compare_string_ignores_case_and_spaces():
    assert compare_string("content-length", "Content-Length")
    assert compare_string(" Cookie ", "Cookie")
    assert not compare_string("Cookie", "Cookies")
    assert not compare_string("Cookie", "Cookix")


def test_compare_string_case_is_case_sensitive():
    assert compare_string_case("Cookie", " Coo kie")
    assert not compare_string_case("cookie", "Cookie")
    assert not compare_string_case("Cookie", "Cook")


def test_find_char():
    assert find_char("name=value", "=") == 4
    assert find_char("novalue", "=") == len("novalue")


@pytest.mark.parametrize("size", [0, 7, 123, 4294967296])
def test_size_text_round_trip(size):
    assert text_to_size(size_to_text(size)) == size


def test_size_to_text_rejects_negative():
    with pytest.raises(ValueError):
        size_to_text(-1)


def test_text_to_size_skips_spaces_and_stops_at_non_digit():
    assert text_to_size("  42") == 42
    assert text_to_size("17abc") == 17
    assert text_to_size("abc") == 0
    assert text_to_size(b" 9") == 9


@pytest.mark.parametrize("a,b", [("2", "0"), ("f", "F"), ("A", "b"), ("7", "e")])
def test_decode_percent_agrees_with_unquote(a, b):
    assert bytes([decode_percent(a, b)]) == unquote(f"%{a}{b}", encoding="latin-1").encode("latin-1")


def test_decode_percent_bad_digit_counts_as_zero():
    assert decode_percent("z", "z") == 0
    assert decode_percent("0", "z") == decode_percent("0", "0")


@pytest.mark.parametrize("url", ["/a%20b", "/plain/path", "/%E4%BD%A0%E5%A5%BD", "/x%2Fy%3F"])
def test_decode_percent_url_matches_unquote(url):
    assert decode_percent_url(url) == unquote(url)


def test_decode_percent_url_bytes():
    assert decode_percent_url(b"/a%20b") == b"/a b"


def test_reason_from_status():
    assert reason_from_status(HttpStatus.OK) == "OK"
    assert reason_from_status(HttpStatus.NOT_FOUND) == "Not Found"
    assert reason_from_status(500) == "Internal Server Error"
    assert reason_from_status(HttpStatus.NULL) == ""
    assert reason_from_status(999) == ""


def test_method_name_round_trip():
    for method in (HttpMethod.GET, HttpMethod.POST, HttpMethod.PUT, HttpMethod.DELETE):
        assert method_from_name(method_name(method)) is method


def test_method_name_defaults_to_get():
    assert method_name(HttpMethod.NULL) == "GET"


def test_method_from_name_lower_case_and_unknown():
    assert method_from_name("put") is HttpMethod.PUT
    assert method_from_name("delete") is HttpMethod.DELETE
    assert method_from_name("PATCH") is HttpMethod.POST
    assert method_from_name("") is HttpMethod.POST


@pytest.mark.parametrize(
    "path,kind",
    [
        ("/index.html", HttpContentType.HTML),
        ("/index.htm", HttpContentType.HTML),
        ("/style.css", HttpContentType.CSS),
        ("/app.js", HttpContentType.JAVASCRIPT),
        ("/image.png", HttpContentType.OTHER),
        (".htm", HttpContentType.OTHER),
        (".js", HttpContentType.OTHER),
    ],
)
def test_content_type_from_path(path, kind):
    assert content_type_from_path(path) is kind


def test_content_type_name():
    assert content_type_name(HttpContentType.HTML) == "text/html; charset=utf-8"
    assert content_type_name(HttpContentType.CSS) == "text/css; charset=utf-8"
    assert content_type_name(HttpContentType.OTHER) == "application/octet-stream; charset=utf-8"