import argparse, logging, sys, time
from pathlib import Path
from typing import List, Optional

from ..config import settings
from ..models import CONTENT_TYPES, ReplayConfig
from ..replay import replay_directory, replay_file
from ..sender import CollectorClient

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Replay line-protocol metric dumps against the collector /report endpoint")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--file", help="Dump file (one metric per line)")
    src.add_argument("--dir", help=f"Directory of *{settings.file_suffix} dumps")
    p.add_argument("--url", default=settings.collector_url, help="Collector /report URL")
    p.add_argument("--tenant-id", default=settings.tenant_id, help=f"{settings.tenant_header} header value")
    p.add_argument("--content-type", default=settings.content_type, choices=CONTENT_TYPES)
    p.add_argument("--batch-size", type=int, default=settings.batch_size, help="Lines per request")
    p.add_argument("--replay-count", type=int, default=settings.replay_count, help="Passes over each file")
    p.add_argument("--sleep", type=float, default=settings.sleep_between, help="Pause between replays (s)")
    p.add_argument("--max-lines", type=int, default=None, help="Only read the first N lines of each file")
    p.add_argument("--timeout", type=float, default=settings.request_timeout, help="HTTP timeout (s)")
    return p

def main(argv: Optional[List[str]] = None, session=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    try:
        config = ReplayConfig(replay_count=args.replay_count, sleep_between=args.sleep,
                              batch_size=args.batch_size, content_type=args.content_type)
    except ValueError as e:
        sys.stderr.write(f"invalid replay config: {e}\n")
        return 2

    path = Path(args.file or args.dir)
    if args.file and not path.is_file():
        sys.stderr.write(f"File not found: {path}\n")
        return 2
    if args.dir and not path.is_dir():
        sys.stderr.write(f"Directory not found: {path}\n")
        return 2

    client = CollectorClient(url=args.url, tenant_id=args.tenant_id, timeout=args.timeout,
                             session=session)
    t0 = time.time()
    try:
        if args.file:
            fr = replay_file(path, config, client, max_lines=args.max_lines)
            ok = fr.ok
            if fr.result:
                lines, batches = fr.result.lines_sent, fr.result.batches_attempted
                failed = fr.result.batches_failed
            else:
                lines, batches, failed = 0, 0, 0
            files = 1 if fr.result else 0
        else:
            dr = replay_directory(path, config, client, max_lines=args.max_lines)
            ok = dr.ok
            lines, batches, files = dr.total_lines, dr.total_batches, dr.total_files
            failed = sum(f.result.batches_failed for f in dr.files if f.result)
    finally:
        client.close()

    dt = time.time() - t0
    rate = lines / dt if dt > 0 else 0.0
    print(f"Done. lines={lines} files={files} batches={batches} failed={failed} "
          f"time={dt:.2f}s rate={rate:.1f} lines/s")
    return 0 if ok else 1

if __name__ == "__main__":
    sys.exit(main())
