# utils/http.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from utils.sessions import SessionFactory

log = logging.getLogger(__name__)

# ===== Tunables (overridden by script.request_timeout) =====
TIMEOUT = 15.0  # per request timeout


class HttpClient:
    """
    Thin, blocking HTTP helper shared by the fetcher and the dispatcher.

    Every method reduces "not available" conditions to None instead of raising:
      - get_json():            status >= 400, connection errors, timeouts, invalid JSON
      - head_content_length(): probe failures, missing/unparseable content-length
      - get_bytes():           status >= 400, connection errors, timeouts

    Nothing is retried. Callers run these methods via asyncio.to_thread.
    """

    def __init__(self, sessions: SessionFactory | None = None, timeout: float = TIMEOUT):
        self.sessions = sessions or SessionFactory()
        self.timeout = timeout

    def get_json(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        session = self.sessions.get()
        try:
            resp = session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            log.warning("GET %s failed (%s): %s", url, type(e).__name__, e)
            return None

        if resp.status_code >= 400:
            log.info("GET %s returned HTTP %d; treating as unavailable.", url, resp.status_code)
            return None

        try:
            return resp.json()
        except ValueError as e:
            log.warning("Invalid JSON from %s: %s", url, e)
            return None

    def head_content_length(self, url: str) -> Optional[int]:
        """Issue a HEAD request and return the advertised content-length in bytes."""
        session = self.sessions.get()
        try:
            resp = session.head(url, allow_redirects=True, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            log.warning("HEAD %s failed (%s): %s", url, type(e).__name__, e)
            return None

        if resp.status_code >= 400:
            log.info("HEAD %s returned HTTP %d.", url, resp.status_code)
            return None

        raw = resp.headers.get("content-length")
        if raw is None:
            log.info("HEAD %s carried no content-length header.", url)
            return None
        try:
            return int(raw)
        except ValueError:
            log.warning("Unparseable content-length %r for %s", raw, url)
            return None

    def get_bytes(self, url: str) -> Optional[bytes]:
        session = self.sessions.get()
        try:
            resp = session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            log.warning("Download of %s failed (%s): %s", url, type(e).__name__, e)
            return None

        if resp.status_code >= 400:
            log.info("Download of %s returned HTTP %d.", url, resp.status_code)
            return None
        return resp.content
