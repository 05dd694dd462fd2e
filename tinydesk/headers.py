"""Header lines and cookies of HTTP messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, TypeVar

from tinydesk.httptext import (
    CONTENT_LENGTH,
    COOKIE,
    HEADS_BUFFER_LENGTH,
    MAX_AGE,
    PATH,
    SET_COOKIE,
    compare_string,
    size_to_text,
    text_to_size,
)


@dataclass
class HttpStringPair:
    """A name with its value."""

    name: str
    value: str


@dataclass
class HttpCookie(HttpStringPair):
    """A cookie; a zero ``max_age`` and a ``None`` path are left out when sent."""

    max_age: int = 0
    path: Optional[str] = None


T = TypeVar("T", bound=HttpStringPair)


class HttpPairs(Generic[T]):
    """An ordered collection of name/value pairs."""

    def __init__(self) -> None:
        self._pairs: List[T] = []

    def __len__(self) -> int:
        return len(self._pairs)

    def __getitem__(self, index: int) -> T:
        return self._pairs[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._pairs)

    def add(self, pair: T) -> None:
        self._pairs.append(pair)

    def set(self, index: int, pair: T) -> bool:
        """Replace the pair at ``index``; False when there is no such pair."""
        if not 0 <= index < len(self._pairs):
            return False
        self._pairs[index] = pair
        return True

    def clear(self) -> None:
        self._pairs.clear()


class HttpCookies(HttpPairs[HttpCookie]):
    """The cookies of a message."""

    def receive(self, text: str) -> int:
        """Replace the cookies with those of a ``Cookie`` header value."""
        self.clear()
        position = 0
        while position < len(text):
            while text[position : position + 1] == " ":
                position += 1
            equals = text.find("=", position)
            if equals < 0:
                break
            name = text[position:equals]
            start = equals + 1
            while text[start : start + 1] == " ":
                start += 1
            end = text.find(";", start)
            if end < 0:
                end = len(text)
            self.add(HttpCookie(name, text[start:end]))
            position = end + 1
        return len(self)

    def send(self, stream, cookie_set: bool) -> None:
        """Write the cookies as ``Set-Cookie`` lines, or as one ``Cookie`` line."""
        if cookie_set:
            for cookie in self:
                stream.write(f"{SET_COOKIE}:{cookie.name}={cookie.value}")
                if cookie.max_age != 0:
                    stream.write(f";{MAX_AGE}={size_to_text(cookie.max_age)}")
                if cookie.path is not None:
                    stream.write(f";{PATH}={cookie.path}")
                stream.put("\n")
        elif len(self):
            stream.write(f"{COOKIE}:")
            for cookie in self:
                stream.write(f"{cookie.name}={cookie.value};")
            stream.put("\n")


class HttpHeads(HttpPairs[HttpStringPair]):
    """The header block of a message, with its cookies and content length."""

    def __init__(self) -> None:
        super().__init__()
        self.cookies = HttpCookies()
        self.content_length = 0

    def receive(self, stream) -> int:
        """Read header lines up to the blank line; return how many plain pairs were added."""
        self.clear()
        stream.ignore_void()
        count = 0
        while True:
            line = stream.getline(HEADS_BUFFER_LENGTH, b"\n").decode("utf-8", errors="replace")
            if len(line) <= 1:
                break
            divide = line.find(":")
            if divide < 0:
                break
            name = line[:divide]
            value = line[divide + 1 :].lstrip(" ").rstrip(" \r")
            if compare_string(name, COOKIE):
                self.cookies.receive(value)
            elif compare_string(name, CONTENT_LENGTH):
                self.content_length = text_to_size(value)
            else:
                self.add(HttpStringPair(name, value))
                count += 1
        return count

    def send(self, stream, cookie_set: bool) -> None:
        """Write every pair, the cookies and the content length."""
        for pair in self:
            stream.write(f"{pair.name}:{pair.value}")
            stream.put("\n")
        self.cookies.send(stream, cookie_set)
        stream.write(f"{CONTENT_LENGTH}:{size_to_text(self.content_length)}")
        stream.put("\n")