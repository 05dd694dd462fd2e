"""Small buffered, non-blocking byte streams over a connected socket."""

from __future__ import annotations

import logging
import select
import socket
from typing import Optional, Union

logger = logging.getLogger(__name__)

BUFFER_SIZE = 64
_VOID = b" \r\n"

ByteLike = Union[bytes, bytearray, str, int]


def _byte(ch: ByteLike) -> int:
    """Return the single byte value held by ``ch``."""
    if isinstance(ch, int):
        return ch
    if isinstance(ch, str):
        ch = ch.encode("latin-1")
    if len(ch) != 1:
        raise ValueError(f"expected a single byte, got {ch!r}")
    return ch[0]


class SocketStreamBase:
    """Holds the socket and whether it is still usable."""

    def __init__(self, sock: Optional[socket.socket] = None):
        self.sock = sock
        self._good = sock is not None

    def fileno(self) -> int:
        return -1 if self.sock is None else self.sock.fileno()

    def is_good(self) -> bool:
        return self._good

    def close(self) -> None:
        """Shut down reading, close the socket and mark the stream unusable."""
        if self.sock is not None:
            try:
                self.sock.shutdown(socket.SHUT_RD)
            except OSError:
                pass
            self.sock.close()
        self._good = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class InputSocketStream(SocketStreamBase):
    """Reads from a socket through a small buffer without ever blocking."""

    def __init__(self, sock: Optional[socket.socket] = None):
        super().__init__(sock)
        self._ibuf = b""
        self._ipos = 0

    def set_socket(self, sock: socket.socket) -> None:
        self.sock = sock
        self._ibuf = b""
        self._ipos = 0
        self._good = True

    def _fill(self) -> bool:
        """Make sure unread bytes are buffered; False when none are available."""
        if not self._good:
            return False
        if self._ipos < len(self._ibuf):
            return True
        try:
            readable, _, _ = select.select([self.sock], [], [], 0)
            if not readable:
                return False
            data = self.sock.recv(BUFFER_SIZE)
        except BlockingIOError:
            return False
        except (OSError, ValueError) as exc:
            logger.error("input socket error: %s", exc)
            self._drop_input()
            return False
        if not data:
            self._drop_input()
            return False
        self._ibuf = data
        self._ipos = 0
        return True

    def _drop_input(self) -> None:
        self._good = False
        self._ibuf = b""
        self._ipos = 0

    def check(self) -> bool:
        """Return True if at least one byte can be read now."""
        return self._fill()

    def get(self) -> bytes:
        """Take one byte, or return b"" when nothing is available."""
        if not self._fill():
            return b""
        ch = self._ibuf[self._ipos : self._ipos + 1]
        self._ipos += 1
        return ch

    def peek(self) -> bytes:
        """Look at the next byte without taking it; b"" when none."""
        if not self._fill():
            return b""
        return self._ibuf[self._ipos : self._ipos + 1]

    def read_bytes(self, size: int) -> bytes:
        """Take up to ``size`` bytes of what is available now."""
        if size <= 0 or not self._fill():
            return b""
        chunks = []
        leave = size
        while True:
            count = min(len(self._ibuf) - self._ipos, leave)
            if count == 0:
                break
            chunks.append(self._ibuf[self._ipos : self._ipos + count])
            self._ipos += count
            leave -= count
            if not self._fill():
                break
        return b"".join(chunks)

    def read(self, size: int) -> bytes:
        """Take up to ``size - 1`` bytes; ``size`` is a capacity with a terminator slot."""
        return self.read_bytes(max(size - 1, 0))

    def getline(self, size: int, end: ByteLike = b"\n") -> bytes:
        """Take bytes up to ``end`` (consumed, not returned), at most ``size - 1`` of them."""
        if not self._fill():
            return b""
        end_byte = _byte(end)
        marker = bytes([end_byte])
        chunks = []
        leave = size - 1
        while True:
            found = self._ibuf.find(marker, self._ipos)
            if found < 0:
                found = len(self._ibuf)
            count = min(found - self._ipos, leave)
            if count <= 0:
                break
            chunks.append(self._ibuf[self._ipos : self._ipos + count])
            self._ipos += count
            leave -= count
            if not self._fill():
                break
        if self._ipos < len(self._ibuf) and self._ibuf[self._ipos] == end_byte:
            self._ipos += 1
        return b"".join(chunks)

    def ignore(self, ch: ByteLike, max_number: int = 1) -> int:
        """Skip up to ``max_number`` leading copies of ``ch``; return how many."""
        target = _byte(ch)
        ignored = 0
        while ignored < max_number and self._fill() and self._ibuf[self._ipos] == target:
            self._ipos += 1
            ignored += 1
        return ignored

    def ignore_void(self, max_number: Optional[int] = None) -> int:
        """Skip leading spaces, carriage returns and newlines; return how many."""
        ignored = 0
        while (
            (max_number is None or ignored < max_number)
            and self._fill()
            and self._ibuf[self._ipos] in _VOID
        ):
            self._ipos += 1
            ignored += 1
        return ignored


class OutputSocketStream(SocketStreamBase):
    """Writes to a socket through a small buffer flushed by ``send_now``."""

    def __init__(self, sock: Optional[socket.socket] = None):
        super().__init__(sock)
        self._obuf = bytearray()

    def set_socket(self, sock: socket.socket) -> None:
        self.sock = sock
        self._obuf = bytearray()
        self._good = True

    def send_now(self) -> bool:
        """Send buffered bytes; True only when the buffer is left empty."""
        if not self._good:
            return False
        if not self._obuf:
            return True
        try:
            sent = self.sock.send(self._obuf)
        except BlockingIOError:
            return False
        except OSError as exc:
            logger.error("output socket error: %s", exc)
            self._good = False
            return False
        if sent == 0:
            return False
        del self._obuf[:sent]
        return not self._obuf

    def _has_room(self) -> bool:
        if not self._good:
            return False
        if len(self._obuf) >= BUFFER_SIZE:
            self.send_now()
        if not self._good:
            return False
        return len(self._obuf) < BUFFER_SIZE

    def put(self, ch: ByteLike) -> bool:
        """Buffer one byte; False if there is no room or the socket failed."""
        value = _byte(ch)
        if not self._has_room():
            return False
        self._obuf.append(value)
        return True

    def write(self, data: Union[bytes, bytearray, str]) -> int:
        """Buffer ``data`` if it fits, else flush and send it directly.

        Returns the number of bytes accepted.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        data = bytes(data)
        if len(data) < BUFFER_SIZE - len(self._obuf):
            self._obuf.extend(data)
            return len(data)
        if not self.send_now():
            return 0
        try:
            return self.sock.send(data)
        except OSError as exc:
            logger.error("output socket error: %s", exc)
            self._good = False
            return 0


class SocketStream(InputSocketStream, OutputSocketStream):
    """A stream that both reads and writes the same socket."""

    def set_socket(self, sock: socket.socket) -> None:
        self.sock = sock
        self._ibuf = b""
        self._ipos = 0
        self._obuf = bytearray()
        self._good = True