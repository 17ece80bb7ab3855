from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
import re

from .config import Settings, settings as default_settings

CONTENT_TYPES = (
    "text/plain",
    "application/octet-stream",
    # the collector wants raw line protocol even with this one
    "application/x-www-form-urlencoded",
)

class ReplayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    replay_count: int = Field(1, ge=1)
    sleep_between: float = Field(1.0, ge=0)
    batch_size: int = Field(5000, gt=0)
    content_type: str = "application/octet-stream"

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None) -> "ReplayConfig":
        s = s or default_settings
        return cls(
            replay_count=s.replay_count,
            sleep_between=s.sleep_between,
            batch_size=s.batch_size,
            content_type=s.content_type,
        )

class BatchOutcome(BaseModel):
    replay: int
    batch: int
    lines: int
    status_code: Optional[int] = None
    error: Optional[str] = None
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

class ReplayResult(BaseModel):
    outcomes: List[BatchOutcome] = Field(default_factory=list)
    replays_completed: int = 0

    @property
    def lines_sent(self) -> int:
        return sum(o.lines for o in self.outcomes if o.ok)

    @property
    def batches_attempted(self) -> int:
        return len(self.outcomes)

    @property
    def batches_failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def ok(self) -> bool:
        return self.batches_failed == 0

class FileResult(BaseModel):
    path: str
    result: Optional[ReplayResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None and self.result.ok

class DirectoryResult(BaseModel):
    files: List[FileResult] = Field(default_factory=list)

    @property
    def total_lines(self) -> int:
        return sum(f.result.lines_sent for f in self.files if f.result)

    @property
    def total_files(self) -> int:
        return sum(1 for f in self.files if f.result)

    @property
    def total_batches(self) -> int:
        return sum(f.result.batches_attempted for f in self.files if f.result)

    @property
    def total_replays(self) -> int:
        return sum(f.result.replays_completed for f in self.files if f.result)

    @property
    def ok(self) -> bool:
        return all(f.ok for f in self.files)


_LINE_RE = re.compile(
    r'^"(?P<name>[^"]+)"\s+(?P<value>\S+)\s+(?P<timestamp>\d+)\s+'
    r'source="(?P<source>[^"]*)"(?P<tags>(?:\s+"[^"]+"="[^"]*")*)\s*$'
)
_TAG_RE = re.compile(r'"([^"]+)"="([^"]*)"')

class MetricSample(BaseModel):
    name: str
    value: float
    timestamp: int
    source: str
    tags: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_line(cls, line: str) -> "MetricSample":
        m = _LINE_RE.match(line.strip())
        if not m:
            raise ValueError("not a line protocol record")
        return cls(
            name=m.group("name"),
            value=m.group("value"),
            timestamp=m.group("timestamp"),
            source=m.group("source"),
            tags=dict(_TAG_RE.findall(m.group("tags"))),
        )
