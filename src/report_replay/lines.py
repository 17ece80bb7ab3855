from pathlib import Path
from typing import Iterator, List, Optional, Union

from .errors import BufferOverflowError

DEFAULT_MAX_LINE_BYTES = 1024 * 1024

def iter_lines(path: Union[str, Path], max_lines: Optional[int] = None,
               max_line_bytes: int = DEFAULT_MAX_LINE_BYTES) -> Iterator[str]:
    """Yield the non-empty lines of ``path`` in file order.

    Stops at EOF or once ``max_lines`` lines were yielded. A line longer than
    ``max_line_bytes`` raises BufferOverflowError; lines yielded before it
    are left as they were.
    """
    count = 0
    with Path(path).open("rb") as f:
        if max_lines is not None and max_lines <= 0:
            return
        ln = 0
        while True:
            # room for a trailing \r\n on a line of exactly max_line_bytes
            raw = f.readline(max_line_bytes + 2)
            if not raw:
                break
            ln += 1
            if raw.endswith(b"\n"):
                raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            if len(raw) > max_line_bytes:
                raise BufferOverflowError(ln, max_line_bytes)
            if not raw:
                continue
            yield raw.decode("utf-8", errors="replace")
            count += 1
            if max_lines is not None and count >= max_lines:
                break

def read_lines(path: Union[str, Path], max_lines: Optional[int] = None,
               max_line_bytes: int = DEFAULT_MAX_LINE_BYTES) -> List[str]:
    return list(iter_lines(path, max_lines=max_lines, max_line_bytes=max_line_bytes))

def read_all_lines(path: Union[str, Path],
                   max_line_bytes: int = DEFAULT_MAX_LINE_BYTES) -> List[str]:
    return read_lines(path, max_line_bytes=max_line_bytes)

def list_metric_files(directory: Union[str, Path], suffix: str = ".txt.log") -> List[Path]:
    # iterdir raises OSError when the directory is missing
    entries = sorted(Path(directory).iterdir(), key=lambda p: p.name)
    return [p for p in entries if p.is_file() and p.name.endswith(suffix)]
