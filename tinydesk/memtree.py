"""The in-memory tree of floors (directories) and files behind the memory file system."""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple

from tinydesk.strings import string_compare

MAX_FILE_DESCRIPTION_COUNT = 16
FILE_BLOCK_TOTAL_SIZE = 512
FILE_MAX_SIZE = 6 * 1024 * 1024

DT_DIR = 4
DT_REG = 8


class MemFileSystemError(IntEnum):
    """Error codes reported by the memory file system."""

    ERROR = -1
    NO_AVAILABLE_DESCRIPTION = -2
    UNREACHABLE_PATH = -3
    NOT_EXIST_FILE = -4
    NOT_OPENED_FILE_DESCRIPTION = -5
    UNSUPPORTED_OPERATION = -7
    TOO_LONG_THE_FILE = -8


class MemError(OSError):
    """A failure of the memory file system, carrying its error code."""

    def __init__(self, code: MemFileSystemError, message: str = ""):
        super().__init__(message or code.name.lower().replace("_", " "))
        self.code = code


def _split_path(path: str) -> Optional[Tuple[Optional[str], str]]:
    """Split ``path`` into its parent part (None when there is none) and last name.

    Returns None when nothing but slashes is left.
    """
    if path.endswith("/"):
        path = path[:-1]
        if not path:
            return None
    if path.startswith("/"):
        path = path[1:]
        if not path:
            return None
    head, sep, tail = path.rpartition("/")
    return (head if sep else None), tail


class MemFileHead:
    """A file: its name, its bytes and the position of the next read or write."""

    d_type = DT_REG

    def __init__(self, name: str = "", parent: Optional[MemFloorHead] = None):
        self.name = name
        self.parent = parent
        self.data = bytearray()
        self.pointer = 0

    @property
    def size(self) -> int:
        return len(self.data)

    def write(self, data: bytes) -> int:
        """Write ``data`` at the current position and move past it.

        Raises MemError when the file would grow beyond the largest size allowed.
        """
        data = bytes(data)
        if self.pointer + len(data) > FILE_MAX_SIZE:
            raise MemError(MemFileSystemError.TOO_LONG_THE_FILE)
        self.data[self.pointer : self.pointer + len(data)] = data
        self.pointer += len(data)
        return len(data)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes from the current position and move past them."""
        if size <= 0:
            return b""
        chunk = bytes(self.data[self.pointer : self.pointer + size])
        self.pointer += len(chunk)
        return chunk

    def __repr__(self) -> str:
        return f"MemFileHead(name={self.name!r}, size={self.size})"


class MemFloorHead:
    """A floor (directory) holding child floors and files in creation order."""

    d_type = DT_DIR

    def __init__(self, name: str = "", parent: Optional[MemFloorHead] = None):
        self.name = name
        self.parent = parent
        self.floors: List[MemFloorHead] = []
        self.files: List[MemFileHead] = []

    def __repr__(self) -> str:
        return (
            f"MemFloorHead(name={self.name!r}, floors={len(self.floors)}, "
            f"files={len(self.files)})"
        )

    def find_child_floor(self, name: str) -> Optional[MemFloorHead]:
        return next((f for f in self.floors if string_compare(f.name, name)), None)

    def find_floor(self, path: str) -> Optional[MemFloorHead]:
        """The floor at ``path`` below this one; "/" and "" name this floor itself."""
        if path.endswith("/"):
            path = path[:-1]
            if not path:
                return self
        if path.startswith("/"):
            path = path[1:]
            if not path:
                return None
        if not path:
            return self
        floor: Optional[MemFloorHead] = self
        for part in path.split("/"):
            floor = floor.find_child_floor(part)
            if floor is None:
                return None
        return floor

    def find_child_file(self, name: str) -> Optional[MemFileHead]:
        return next((f for f in self.files if string_compare(f.name, name)), None)

    def _locate(self, path: str) -> Optional[Tuple[MemFloorHead, str]]:
        parts = _split_path(path)
        if parts is None:
            return None
        head, tail = parts
        floor = self if head is None else self.find_floor(head)
        if floor is None:
            return None
        return floor, tail

    def find_file(self, path: str) -> Optional[MemFileHead]:
        """The file at ``path`` below this floor, or None."""
        located = self._locate(path)
        if located is None:
            return None
        floor, name = located
        return floor.find_child_file(name)

    def remove_child_floor(self, name: str) -> bool:
        """Remove an empty child floor; False if missing or not empty."""
        floor = self.find_child_floor(name)
        if floor is None or floor.floors or floor.files:
            return False
        self.floors.remove(floor)
        floor.parent = None
        return True

    def remove_floor(self, path: str) -> bool:
        located = self._locate(path)
        if located is None:
            return False
        floor, name = located
        return floor.remove_child_floor(name)

    def remove_child_file(self, name: str) -> bool:
        file = self.find_child_file(name)
        if file is None:
            return False
        self.files.remove(file)
        file.parent = None
        return True

    def remove_file(self, path: str) -> bool:
        located = self._locate(path)
        if located is None:
            return False
        floor, name = located
        return floor.remove_child_file(name)

    def make_child_floor(self, name: str) -> bool:
        """Add a child floor; False if a floor of that name exists."""
        if self.find_child_floor(name) is not None:
            return False
        self.floors.append(MemFloorHead(name, self))
        return True

    def make_floor(self, path: str) -> bool:
        located = self._locate(path)
        if located is None:
            return False
        floor, name = located
        return floor.make_child_floor(name)

    def make_child_file(self, name: str) -> bool:
        """Add an empty child file; False if a file of that name exists."""
        if self.find_child_file(name) is not None:
            return False
        self.files.append(MemFileHead(name, self))
        return True

    def make_file(self, path: str) -> bool:
        located = self._locate(path)
        if located is None:
            return False
        floor, name = located
        return floor.make_child_file(name)