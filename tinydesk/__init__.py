"""HTTP/1.1 messages over buffered sockets, connection slots, an in-memory file tree and disk file helpers."""

__version__ = "0.1.0"