import io

import pytest

from tinydesk import fat


@pytest.fixture
def sample(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "x").write_bytes(b"xx")
    (tmp_path / "f").write_bytes(b"ab\ncd")
    return tmp_path


def test_new_file_creates_once(tmp_path):
    path = str(tmp_path / "n")
    assert fat.new_file(path) is True
    assert fat.test_file(path) is True
    assert fat.new_file(path) is False


def test_test_file_missing_and_directory(tmp_path):
    assert fat.test_file(str(tmp_path / "missing")) is False
    assert fat.test_file(str(tmp_path)) is False


def test_move_file(sample):
    old = str(sample / "f")
    new = str(sample / "g")
    assert fat.move_file(old, new) is True
    assert fat.test_file(old) is False
    assert fat.test_file(new) is True
    assert fat.move_file(old, new) is False


def test_remove_file(sample):
    path = str(sample / "f")
    assert fat.remove_file(path) is True
    assert fat.test_file(path) is False
    assert fat.remove_file(path) is False


def test_floor_functions(tmp_path):
    path = str(tmp_path / "d")
    assert fat.test_floor(path) is False
    assert fat.new_floor(path) is True
    assert fat.test_floor(path) is True
    assert fat.new_floor(path) is False
    assert fat.remove_floor(path) is True
    assert fat.test_floor(path) is False


def test_remove_floor_not_empty(sample):
    assert fat.remove_floor(str(sample / "a")) is False
    assert fat.test_floor(str(sample / "a")) is True


def test_space(tmp_path):
    free, total = fat.get_space(str(tmp_path))
    assert 0 <= free <= total
    assert total > 0
    assert fat.get_total_space(str(tmp_path)) == total
    assert fat.get_free_space(str(tmp_path)) <= total


def test_combined_file_type_reads_both_kinds(sample):
    floor = fat.Floor()
    assert floor.open(str(sample)) is True
    kind = fat.FileType.FILE | fat.FileType.FLOOR
    assert [floor.read(kind), floor.read(kind), floor.read(kind)] == ["a", "f", None]
    floor.close()


def test_ifile_getline_and_eof(sample):
    with fat.IFile() as file:
        assert file.open(str(sample / "f")) is True
        assert file.getline(10) == b"ab"
        assert file.eof() is False
        assert file.getline(10) == b"cd"
        assert file.eof() is True


def test_ifile_getline_limit_and_end(sample):
    file = fat.IFile()
    assert file.open(str(sample / "f"))
    assert file.getline(1) == b"a"
    assert file.getline(10, "c") == b"b\n"
    assert file.get() == b"d"
    assert file.get() == b""
    assert file.eof() is True
    file.close()
    assert file.is_open() is False


def test_ifile_read_and_seek(sample):
    file = fat.IFile()
    file.open(str(sample / "f"))
    assert file.read(2) == b"ab"
    assert file.tell() == 2
    file.seek(-2, fat.OffsetMode.END)
    assert file.read(10) == b"cd"
    assert file.eof() is True
    file.seek(1)
    assert file.eof() is False
    file.seek(1, fat.OffsetMode.CURRENT)
    assert file.get() == b"\n"
    file.close()


def test_re_get_size_keeps_position(sample):
    file = fat.IFile()
    file.open(str(sample / "f"))
    file.read(3)
    assert file.re_get_size() == len(b"ab\ncd")
    assert file.size == len(b"ab\ncd")
    assert file.tell() == 3
    file.close()


def test_ifile_open_missing(tmp_path):
    file = fat.IFile()
    assert file.open(str(tmp_path / "missing")) is False
    assert file.is_open() is False
    with pytest.raises(ValueError):
        file.tell()


def test_ofile_needs_existing_file(tmp_path):
    file = fat.OFile()
    assert file.open(str(tmp_path / "missing")) is False


def test_ofile_write_round_trip(tmp_path):
    path = tmp_path / "w"
    fat.new_file(str(path))
    out = fat.OFile()
    assert out.open(str(path)) is True
    assert out.write(b"hello") == 5
    assert out.put("!") is True
    out.close()
    assert path.read_bytes() == b"hello!"


def test_iofile_write_then_read(tmp_path):
    path = tmp_path / "io"
    path.write_bytes(b"0123")
    with fat.IOFile() as file:
        assert file.open(str(path)) is True
        file.seek(1)
        file.write("ab")
        file.seek(0)
        assert file.read(4) == b"0ab3"


def test_floor_read_by_kind(sample):
    floor = fat.Floor()
    assert floor.open(str(sample)) is True
    assert floor.read(fat.FileType.FLOOR) == "a"
    assert floor.read(fat.FileType.FLOOR) is None
    floor.back_to_begin()
    assert floor.read(fat.FileType.FILE) == "f"
    assert floor.read(fat.FileType.FILE) is None
    floor.back_to_begin()
    assert [floor.read(fat.FileType.BOTH), floor.read(fat.FileType.BOTH)] == ["a", "f"]
    floor.close()
    assert floor.read(fat.FileType.BOTH) is None


def test_floor_open_missing(tmp_path):
    floor = fat.Floor()
    assert floor.open(str(tmp_path / "missing")) is False
    assert floor.read(fat.FileType.BOTH) is None


def test_floor_recount(sample):
    floor = fat.Floor()
    floor.open(str(sample))
    assert floor.count(fat.FileType.BOTH) == 0
    floor.recount()
    assert floor.count(fat.FileType.FILE) == 1
    assert floor.count(fat.FileType.FLOOR) == 1
    assert floor.count(fat.FileType.BOTH) == 2
    assert floor.read(fat.FileType.BOTH) == "a"


def test_floor_open_floor_and_file(sample):
    floor = fat.Floor()
    floor.open(str(sample))
    assert floor.open_floor("missing") is False
    assert floor.open_floor("a") is True
    assert floor.path == f"{sample}/a"
    assert floor.read(fat.FileType.FILE) == "x"
    file = fat.IFile()
    assert floor.open_file("x", file) is True
    assert file.read(10) == b"xx"
    file.close()


def test_tree_output(sample):
    out = io.StringIO()
    assert fat.tree(str(sample), out=out) is True
    assert out.getvalue() == (
        f"tree at {sample}:\n"
        "|-dir: a\n"
        "||-file:x\n"
        "|-file:f\n"
    )


def test_tree_too_deep(sample):
    out = io.StringIO()
    assert fat.tree(str(sample), 1, 0, out) is False
    assert f"tree offset 1, which is touched the max, in {sample}/a\n" in out.getvalue()


def test_tree_max_offset_zero(sample):
    out = io.StringIO()
    assert fat.tree(str(sample), 0, 0, out) is False
    assert out.getvalue() == f"tree offset 0, which is touched the max, in {sample}\n"


def test_tree_missing_path(tmp_path):
    out = io.StringIO()
    path = str(tmp_path / "missing")
    assert fat.tree(path, out=out) is False
    assert out.getvalue() == f"tree at {path}:\n|-tree: fail in open {path}\n"