import pytest

from report_replay.errors import BufferOverflowError
from report_replay.lines import iter_lines, list_metric_files, read_all_lines, read_lines

def write(tmp_path, name, text):
    p = tmp_path / name
    p.write_bytes(text.encode("utf-8"))
    return p

def test_read_all_lines_skips_empty(tmp_path):
    p = write(tmp_path, "a.txt.log", "one\n\ntwo\r\n\nthree")
    assert read_all_lines(p) == ["one", "two", "three"]

def test_read_lines_caps_non_empty(tmp_path):
    p = write(tmp_path, "a.txt.log", "\n1\n\n2\n3\n4\n")
    assert read_lines(p, 2) == ["1", "2"]
    assert read_lines(p, 10) == ["1", "2", "3", "4"]
    assert read_lines(p, 0) == []

def test_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        read_all_lines(tmp_path / "nope.txt.log")

def test_line_at_limit_is_fine(tmp_path):
    p = write(tmp_path, "a.txt.log", "x" * 16 + "\n" + "y" * 16)
    assert read_all_lines(p, max_line_bytes=16) == ["x" * 16, "y" * 16]

def test_overflow_keeps_earlier_lines(tmp_path):
    p = write(tmp_path, "a.txt.log", "first\nsecond\n" + "z" * 17 + "\nafter\n")
    got = []
    with pytest.raises(BufferOverflowError) as exc:
        for line in iter_lines(p, max_line_bytes=16):
            got.append(line)
    assert got == ["first", "second"]
    assert exc.value.line_number == 3
    assert exc.value.limit == 16

def test_default_limit_allows_long_lines(tmp_path):
    long_line = '"m" 1 1 source="h" "t"="' + "v" * 200_000 + '"'
    p = write(tmp_path, "a.txt.log", long_line + "\n")
    assert read_all_lines(p) == [long_line]

def test_list_metric_files_filters_suffix(tmp_path):
    write(tmp_path, "b.txt.log", "x")
    write(tmp_path, "a.txt.log", "x")
    write(tmp_path, "notes.txt", "x")
    (tmp_path / "sub.txt.log").mkdir()
    assert [p.name for p in list_metric_files(tmp_path)] == ["a.txt.log", "b.txt.log"]

def test_missing_file_raises_even_with_zero_cap(tmp_path):
    with pytest.raises(OSError):
        read_lines(tmp_path / "nope.txt.log", 0)

def test_crlf_line_at_limit_is_fine(tmp_path):
    p = tmp_path / "a.txt.log"
    p.write_bytes(b"x" * 16 + b"\r\n" + b"y" * 16 + b"\r\n")
    assert read_all_lines(p, max_line_bytes=16) == ["x" * 16, "y" * 16]

def test_crlf_line_over_limit_overflows(tmp_path):
    p = tmp_path / "a.txt.log"
    p.write_bytes(b"ok\r\n" + b"x" * 17 + b"\r\n")
    with pytest.raises(BufferOverflowError) as exc:
        read_all_lines(p, max_line_bytes=16)
    assert exc.value.line_number == 2
