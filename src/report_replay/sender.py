from typing import Optional
import logging

import requests

from .config import settings
from .errors import TransportError, UnexpectedStatusError

OK_CODES = {200, 202}

_logger = logging.getLogger("report_replay.sender")

class CollectorClient:
    """Posts one payload per call to the collector's /report endpoint.

    ``session`` can be any object with a ``requests.Session``-style
    ``post(url, data=..., headers=..., timeout=...)``; tests plug fakes in here.
    """

    def __init__(self, url: Optional[str] = None, tenant_id: Optional[str] = None,
                 tenant_header: Optional[str] = None, timeout: Optional[float] = None,
                 session=None):
        self.url = url or settings.collector_url
        self.tenant_id = tenant_id if tenant_id is not None else settings.tenant_id
        self.tenant_header = tenant_header or settings.tenant_header
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session if session is not None else requests.Session()

    def headers(self, content_type: str) -> dict:
        return {"Content-Type": content_type, self.tenant_header: self.tenant_id}

    def send(self, payload: str, content_type: str) -> int:
        data = payload.encode("utf-8")
        try:
            resp = self.session.post(self.url, data=data, headers=self.headers(content_type),
                                     timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"failed to send request: {e}") from e
        if resp.status_code not in OK_CODES:
            raise UnexpectedStatusError(resp.status_code, resp.text)
        _logger.debug("POST %s -> %d (%d bytes)", self.url, resp.status_code, len(data))
        return resp.status_code

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if close:
            close()
