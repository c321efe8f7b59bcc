"""
fetcher.py

Responsibility: Download small text documents (.gitignore, LICENSE) over HTTP.

Any non-2xx status or connection-level failure is raised; there is no retry.
"""

from __future__ import annotations

import logging

import requests

from pycargo import __version__
from pycargo.errors import HttpFetchError, TransportFetchError

logger = logging.getLogger(__name__)


class ContentFetcher:
    def __init__(self, session: requests.Session | None = None, timeout: float | None = 30) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            r = self._session.get(url, headers={"User-Agent": f"pycargo/{__version__}"}, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportFetchError(url, str(e)) from e

        if not 200 <= r.status_code < 300:
            raise HttpFetchError(url, r.status_code)
        return r.content
