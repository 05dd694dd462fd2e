# tinydesk

A small toolkit that needs nothing outside the standard library, built around
plain TCP sockets:

- **Buffered socket streams** (`tinydesk.sockstream`): `InputSocketStream`,
  `OutputSocketStream` and the combined `SocketStream` read and write through
  a 64-byte buffer without blocking, with `get`, `peek`, `read`,
  `read_bytes`, `getline`, `ignore`, `ignore_void`, `put`, `write` and
  `send_now`. A socket error marks the stream as no longer good
  (`is_good()`).
- **Connection slots** (`tinydesk.window`): `SocketStreamWindow` holds one
  `SocketStream` per slot, guards it with a lock and keeps a shared count of
  busy slots, available through `enabled_count()`.
- **HTTP/1.1 messages** (`tinydesk.httptext`, `tinydesk.headers`,
  `tinydesk.message`): read and write request lines, status lines, headers,
  `Cookie` / `Set-Cookie` values and bodies with `HttpRequest`,
  `HttpResponse`, `HttpHeads` and `HttpCookies`. Bodies may be bytes in
  memory (`set_body`) or a readable binary file (`set_file_body`). Helpers
  cover percent decoding, method names, reason phrases and content types
  picked from a file extension.
- **In-memory file tree** (`tinydesk.memtree`, `tinydesk.memfs`): floors
  (folders) and files kept in memory, with a file-descriptor interface
  (`MemFileSystem.open`, `read`, `write`, `seek`, `fstat`, `close`,
  `opendir`, `makedir`, `removedir`, `unlink`). Files are capped at 6 MiB,
  at most 16 descriptors may be open at once, and failures raise `MemError`
  carrying a `MemFileSystemError` code.
- **Disk helpers** (`tinydesk.fat`): `IFile`, `OFile`, `IOFile` and `Floor`
  (a directory listing read entry by entry), small functions such as
  `new_file`, `move_file`, `new_floor`, `remove_floor` and `get_space`, and
  `tree()` to print a directory tree.

## Installing

```
pip install .
```

The package needs Python 3.10 or later.

## Examples

Percent-decoding a request path and picking its content type:

```python
from tinydesk.httptext import decode_percent_url, content_type_from_path, content_type_name

path = decode_percent_url("/docs/read%20me.html")
print(path)                                             # /docs/read me.html
print(content_type_name(content_type_from_path(path)))  # text/html; charset=utf-8
```

Keeping files in memory:

```python
import os
from tinydesk.memfs import MemFileSystem

fs = MemFileSystem()
fs.makedir("/notes")
fd = fs.open("/notes/today.txt", os.O_RDWR, 0)
fs.write(fd, b"hello")
fs.seek(fd, 0, os.SEEK_SET)
print(fs.read(fd, 5))                                   # b'hello'
fs.close(fd)
```

Printing a directory tree:

```python
from tinydesk.fat import tree

tree(".")
```

## What it does not do

- There is no command-line program; everything is used as a library.
- There is no server: the HTTP classes read and write single messages on a
  stream you have already connected, but nothing here listens for
  connections, dispatches requests or serves files.
- The in-memory file system is reached only through `MemFileSystem`; it is
  not mounted where ordinary `open()` calls can see it.

## Running the tests

```
pip install .[test]
pytest
```