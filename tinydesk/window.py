"""A reusable slot holding one client connection of a server."""

from __future__ import annotations

import socket
import threading

from tinydesk.sockstream import SocketStream

_shared_lock = threading.Lock()
_enabled_count = 0


def _adjust_count(delta: int) -> None:
    global _enabled_count
    with _shared_lock:
        _enabled_count += delta


def enabled_count() -> int:
    """Number of windows currently holding a connection."""
    return _enabled_count


class SocketStreamWindow:
    """A connection slot that is either free or holds a socket stream."""

    def __init__(self, index: int = 0):
        self.index = index
        self.stream = SocketStream()
        self._available = True
        self._lock = threading.Lock()

    def is_available(self) -> bool:
        return self._available

    def check(self) -> bool:
        """Return True if the held connection has data to read.

        A connection found broken is closed and the window freed.
        """
        if self._available:
            return False
        if not self.stream.is_good():
            self._close_self()
        return self.stream.check()

    def enable(self) -> bool:
        """Try to take the window for work; False if free or already taken."""
        if self._available:
            return False
        return self._lock.acquire(blocking=False)

    def disable(self) -> None:
        """Release a window taken with ``enable``."""
        self._lock.release()

    def set_socket(self, sock: socket.socket) -> bool:
        """Place a connection in a free window; False if it cannot be placed."""
        if not self._available:
            return False
        if not self._lock.acquire(blocking=False):
            return False
        try:
            self.stream.set_socket(sock)
            self._available = False
            _adjust_count(1)
        finally:
            self._lock.release()
        return True

    def close_socket(self, blocked: bool = True) -> bool:
        """Close the held connection; when not ``blocked``, give up if busy."""
        if not self._lock.acquire(blocking=blocked):
            return False
        try:
            self._close_self()
        finally:
            self._lock.release()
        return True

    def _close_self(self) -> None:
        self.stream.close()
        self._available = True
        _adjust_count(-1)