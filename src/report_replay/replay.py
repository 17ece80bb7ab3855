"""Batched replay of metric lines against the collector."""
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Union
import logging
import time

from .config import settings
from .errors import BufferOverflowError, TransportError, UnexpectedStatusError
from .lines import list_metric_files, read_all_lines, read_lines
from .models import BatchOutcome, DirectoryResult, FileResult, ReplayConfig, ReplayResult
from .sender import CollectorClient

_logger = logging.getLogger("report_replay.replay")

def partition(lines: Sequence[str], batch_size: int) -> Iterator[Sequence[str]]:
    """Batch k covers lines[k*batch_size:(k+1)*batch_size]; the last may be short."""
    if batch_size <= 0:
        raise ValueError("batch_size must be > 0")
    for i in range(0, len(lines), batch_size):
        yield lines[i:i + batch_size]

def replay_lines(lines: Sequence[str], config: ReplayConfig, client: CollectorClient,
                 sleep: Callable[[float], None] = time.sleep,
                 label: str = "lines") -> ReplayResult:
    result = ReplayResult()
    if not lines:
        _logger.info("%s: nothing to send", label)
        return result

    for replay in range(1, config.replay_count + 1):
        if config.replay_count > 1:
            _logger.info("Replay %d/%d for %s", replay, config.replay_count, label)
        replay_start = time.perf_counter()

        for n, batch in enumerate(partition(lines, config.batch_size), start=1):
            payload = "\n".join(batch)
            start = time.perf_counter()
            status, error = None, None
            try:
                status = client.send(payload, config.content_type)
            except UnexpectedStatusError as e:
                status, error = e.status_code, str(e)
            except TransportError as e:
                error = str(e)
            outcome = BatchOutcome(replay=replay, batch=n, lines=len(batch),
                                   status_code=status, error=error,
                                   duration=time.perf_counter() - start)
            result.outcomes.append(outcome)

            if outcome.ok:
                _logger.info("Replay %d, batch %d: sent %d lines in %.3fs",
                             replay, n, outcome.lines, outcome.duration)
            else:
                _logger.warning("Failed to send batch %d from %s (replay %d): %s",
                                n, label, replay, outcome.error)

        result.replays_completed = replay
        _logger.info("Completed replay %d/%d in %.3fs", replay, config.replay_count,
                     time.perf_counter() - replay_start)

        # no pause after the final replay
        if replay < config.replay_count:
            _logger.info("Sleeping for %ss before next replay...", config.sleep_between)
            sleep(config.sleep_between)

    return result

def replay_file(path: Union[str, Path], config: ReplayConfig, client: CollectorClient,
                sleep: Callable[[float], None] = time.sleep,
                max_lines: Optional[int] = None,
                max_line_bytes: Optional[int] = None) -> FileResult:
    path = Path(path)
    limit = max_line_bytes or settings.max_line_bytes
    try:
        if max_lines is None:
            lines = read_all_lines(path, max_line_bytes=limit)
        else:
            lines = read_lines(path, max_lines=max_lines, max_line_bytes=limit)
    except (OSError, BufferOverflowError) as e:
        _logger.error("Failed to read file %s: %s", path.name, e)
        return FileResult(path=str(path), error=str(e))

    _logger.info("Read %d lines from %s", len(lines), path)
    result = replay_lines(lines, config, client, sleep=sleep, label=path.name)
    _logger.info("Sent %d lines from %s in %d batches (%d replays, %d failed batches)",
                 result.lines_sent, path.name, result.batches_attempted,
                 result.replays_completed, result.batches_failed)
    return FileResult(path=str(path), result=result)

def replay_directory(directory: Union[str, Path], config: ReplayConfig, client: CollectorClient,
                     sleep: Callable[[float], None] = time.sleep,
                     suffix: Optional[str] = None,
                     max_lines: Optional[int] = None,
                     max_line_bytes: Optional[int] = None) -> DirectoryResult:
    files: List[Path] = list_metric_files(directory, suffix or settings.file_suffix)
    out = DirectoryResult()
    for path in files:
        out.files.append(replay_file(path, config, client, sleep=sleep, max_lines=max_lines,
                                     max_line_bytes=max_line_bytes))
    _logger.info("Total: sent %d lines from %d files in %d batches (%d total replays)",
                 out.total_lines, out.total_files, out.total_batches, out.total_replays)
    return out
