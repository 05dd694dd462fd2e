"""HTTP requests and responses read from and written to socket streams."""

from __future__ import annotations

from typing import Optional, Union

from tinydesk.headers import HttpCookies, HttpHeads
from tinydesk.httptext import (
    BODY_SENDING_BUFFER_LENGTH,
    HTTP_VERSION,
    REASON_BUFFER_LENGTH,
    URL_BUFFER_LENGTH,
    HttpMethod,
    HttpStatus,
    decode_percent_url,
    method_from_name,
    method_name,
    reason_from_status,
    size_to_text,
    text_to_size,
)

_METHOD_BUFFER_LENGTH = 10
_VERSION_BUFFER_LENGTH = 20
_STATUS_BUFFER_LENGTH = 4


def _skip_version(stream, end: bytes) -> None:
    """Drop the protocol version token, however long it is."""
    stream.ignore_void()
    while len(stream.getline(_VERSION_BUFFER_LENGTH, end)) == _VERSION_BUFFER_LENGTH - 1:
        pass


class HttpBase:
    """What requests and responses share: headers, cookies and a body."""

    def __init__(self) -> None:
        self.heads = HttpHeads()
        self.body_is_file = False
        self.body_is_received = False
        self.body = None

    @property
    def cookies(self) -> HttpCookies:
        return self.heads.cookies

    @property
    def body_length(self) -> int:
        """The body length, sent as the Content-Length header."""
        return self.heads.content_length

    @body_length.setter
    def body_length(self, length: int) -> None:
        self.heads.content_length = length

    def set_body(self, body: Union[bytes, bytearray, str, None]) -> None:
        """Use bytes held in memory as the body."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.body_is_file = False
        self.body = body

    def set_file_body(self, file) -> None:
        """Use a readable binary file as the body."""
        self.body_is_file = True
        self.body = file

    def _reset_body(self) -> None:
        self.body_is_file = False
        self.body_is_received = False
        self.body = None

    def _send_body(self, stream) -> None:
        if not self.body_is_file:
            if self.body:
                stream.write(bytes(self.body[: self.body_length]))
            return
        remaining = self.body_length
        while remaining > 0:
            chunk = self.body.read(min(BODY_SENDING_BUFFER_LENGTH, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            stream.write(chunk)


class HttpRequest(HttpBase):
    """An HTTP request: method, path, headers and body."""

    def __init__(self, method: HttpMethod = HttpMethod.GET, path: str = "/") -> None:
        super().__init__()
        self.method = method
        self.path = path

    def receive(self, stream) -> None:
        """Read the request line and headers; the body is left unread."""
        stream.ignore_void()
        self.method = method_from_name(stream.getline(_METHOD_BUFFER_LENGTH, b" "))

        stream.ignore_void()
        url = stream.getline(URL_BUFFER_LENGTH, b" ")
        self.path = decode_percent_url(url).decode("utf-8", errors="replace")

        _skip_version(stream, b"\n")
        self.heads.receive(stream)
        self._reset_body()

    def send(self, stream) -> None:
        """Write the request line, headers and body."""
        stream.write(method_name(self.method))
        stream.put(" ")
        stream.write(self.path)
        stream.put(" ")
        stream.write(HTTP_VERSION)
        stream.put("\n")
        self.heads.send(stream, False)
        stream.put("\n")
        self._send_body(stream)


class HttpResponse(HttpBase):
    """An HTTP response: status, reason phrase, headers and body."""

    def __init__(self, status: Union[HttpStatus, int] = HttpStatus.OK, reason: Optional[str] = None) -> None:
        super().__init__()
        self.status = status
        self.reason = reason

    def receive(self, stream) -> None:
        """Read the status line and headers; the body is left unread."""
        _skip_version(stream, b" ")

        stream.ignore_void()
        code = text_to_size(stream.getline(_STATUS_BUFFER_LENGTH, b" "))
        try:
            self.status = HttpStatus(code)
        except ValueError:
            self.status = code

        stream.ignore_void()
        line = stream.getline(REASON_BUFFER_LENGTH, b"\n")
        self.reason = line.decode("utf-8", errors="replace").rstrip("\r")

        self.heads.receive(stream)
        self._reset_body()

    def send(self, stream) -> None:
        """Write the status line, headers (cookies as Set-Cookie) and body."""
        stream.write(HTTP_VERSION)
        stream.put(" ")
        stream.write(size_to_text(int(self.status)))
        stream.put(" ")
        reason = self.reason if self.reason is not None else reason_from_status(self.status)
        stream.write(reason)
        stream.put("\n")
        self.heads.send(stream, True)
        stream.put("\n")
        self._send_body(stream)