"""HTTP vocabulary and the small text helpers used to read and write messages."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Union

HTTP_VERSION = "HTTP/1.1"
URL_BUFFER_LENGTH = 256
REASON_BUFFER_LENGTH = 64
HEADS_BUFFER_LENGTH = 512
BODY_SENDING_BUFFER_LENGTH = 1024

CONTENT_LENGTH = "Content-Length"
CONTENT_TYPE = "Content-Type"
COOKIE = "Cookie"
SET_COOKIE = "Set-Cookie"
MAX_AGE = "Max-Age"
PATH = "Path"

Text = Union[str, bytes, bytearray]


class HttpMethod(Enum):
    NULL = 0
    GET = 1
    POST = 2
    PUT = 3
    DELETE = 4


class HttpStatus(IntEnum):
    NULL = 0
    OK = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


class HttpContentType(Enum):
    HTML = "html"
    JAVASCRIPT = "javascript"
    CSS = "css"
    OTHER = "other"


_REASONS = {
    HttpStatus.OK: "OK",
    HttpStatus.BAD_REQUEST: "Bad Request",
    HttpStatus.UNAUTHORIZED: "Unauthorized",
    HttpStatus.FORBIDDEN: "Forbidden",
    HttpStatus.NOT_FOUND: "Not Found",
    HttpStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}

_METHOD_NAMES = {
    HttpMethod.GET: "GET",
    HttpMethod.POST: "POST",
    HttpMethod.PUT: "PUT",
    HttpMethod.DELETE: "DELETE",
}

_CONTENT_TYPE_NAMES = {
    HttpContentType.HTML: "text/html; charset=utf-8",
    HttpContentType.JAVASCRIPT: "application/x-javascript; charset=utf-8",
    HttpContentType.CSS: "text/css; charset=utf-8",
    HttpContentType.OTHER: "application/octet-stream; charset=utf-8",
}

_HEX_DIGITS = "0123456789abcdef"


def _as_str(text: Text) -> str:
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("latin-1")
    return text


def compare_string_case(a: Text, b: Text) -> bool:
    """Case-sensitive equality that ignores spaces."""
    return _as_str(a).replace(" ", "") == _as_str(b).replace(" ", "")


def compare_string(a: Text, b: Text) -> bool:
    """Equality that ignores spaces and letter case.

    Two characters match when equal or when their codes differ by exactly
    the distance between an upper and a lower case letter.
    """
    left = _as_str(a).replace(" ", "")
    right = _as_str(b).replace(" ", "")
    if len(left) != len(right):
        return False
    case_gap = ord("a") - ord("A")
    return all(abs(ord(x) - ord(y)) in (0, case_gap) for x, y in zip(left, right))


def find_char(text: Text, ch: Text) -> int:
    """Index of the first ``ch`` in ``text``, or ``len(text)`` when absent."""
    found = text.find(ch)
    return len(text) if found < 0 else found


def size_to_text(size: int) -> str:
    """Decimal text of a non-negative size."""
    if size < 0:
        raise ValueError(f"size must not be negative: {size}")
    return str(size)


def text_to_size(text: Text) -> int:
    """Read a leading decimal number after any spaces; 0 if there is none."""
    digits = _as_str(text).lstrip(" ")
    value = 0
    for ch in digits:
        if not "0" <= ch <= "9":
            break
        value = value * 10 + (ord(ch) - ord("0"))
    return value


def _nibble(ch: Text) -> int:
    ch = _as_str(ch)
    if len(ch) != 1:
        return 0
    index = _HEX_DIGITS.find(ch.lower())
    return 0 if index < 0 else index


def decode_percent(a: Text, b: Text) -> int:
    """Byte value of the two hex digits of a percent escape; bad digits count as 0."""
    return (_nibble(a) << 4) | _nibble(b)


def decode_percent_url(url: Text) -> Text:
    """Replace every ``%XY`` escape with the byte it names.

    Bytes in give bytes out; text in gives text out (decoded as UTF-8).
    """
    as_text = isinstance(url, str)
    raw = url.encode("utf-8") if as_text else bytes(url)
    out = bytearray()
    index = 0
    while index < len(raw):
        if raw[index] == ord("%"):
            high = raw[index + 1 : index + 2] or b"0"
            low = raw[index + 2 : index + 3] or b"0"
            out.append(decode_percent(high, low))
            index += 3
        else:
            out.append(raw[index])
            index += 1
    if as_text:
        return out.decode("utf-8", errors="replace")
    return bytes(out)


def reason_from_status(status: HttpStatus | int) -> str:
    """Standard reason phrase of a status, or an empty string."""
    try:
        return _REASONS.get(HttpStatus(status), "")
    except ValueError:
        return ""


def method_name(method: HttpMethod) -> str:
    """Request-line name of a method; anything unknown is sent as GET."""
    return _METHOD_NAMES.get(method, "GET")


def method_from_name(name: Text) -> HttpMethod:
    """Guess a method from its first letters; unknown names count as POST."""
    name = _as_str(name)
    first = name[:1].lower()
    if first == "g":
        return HttpMethod.GET
    if first == "d":
        return HttpMethod.DELETE
    if name[1:2].lower() == "u":
        return HttpMethod.PUT
    return HttpMethod.POST


def content_type_from_path(path: Text) -> HttpContentType:
    """Content type chosen by the extension of ``path``."""
    path = _as_str(path)
    length = len(path)
    if (length > 4 and path.endswith(".htm")) or (length > 5 and path.endswith(".html")):
        return HttpContentType.HTML
    if length > 4 and path.endswith(".css"):
        return HttpContentType.CSS
    if length > 3 and path.endswith(".js"):
        return HttpContentType.JAVASCRIPT
    return HttpContentType.OTHER


def content_type_name(kind: HttpContentType) -> str:
    """Header value of a content type."""
    return _CONTENT_TYPE_NAMES.get(kind, _CONTENT_TYPE_NAMES[HttpContentType.OTHER])