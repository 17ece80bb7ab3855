from typing import Optional


class ReplayError(Exception):
    """Base class for replay failures."""


class BufferOverflowError(ReplayError):
    def __init__(self, line_number: int, limit: int):
        self.line_number = line_number
        self.limit = limit
        super().__init__(f"line {line_number} exceeds {limit} bytes")


class TransportError(ReplayError):
    """Connection refused, DNS failure, timeout and friends."""


class UnexpectedStatusError(ReplayError):
    def __init__(self, status_code: int, body: Optional[str] = ""):
        self.status_code = status_code
        self.body = body or ""
        super().__init__(f"unexpected status code: {status_code}, body: {self.body}")
