"""Best-effort reachability probes for plain web links."""

from typing import Optional

import requests

import config
from utils.logger import get_logger
from utils.retry import retry_on_exception
from api_clients import build_http_session

logger = get_logger()

RETRYABLE_HTTP_ERRORS = (requests.ConnectionError, requests.Timeout)
# Servers that refuse HEAD get a GET instead
HEAD_UNSUPPORTED_STATUS_CODES = (405, 501)

class LinkProber:
    """Checks whether a URL answers without an error status."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or build_http_session()

    @retry_on_exception(exceptions=RETRYABLE_HTTP_ERRORS)
    def _request(self, method: str, url: str) -> requests.Response:
        return self.session.request(method, url, timeout=config.HTTP_TIMEOUT, allow_redirects=True)

    def is_reachable(self, url: str) -> bool:
        """Returns True when the URL answers with a status below 400.

        Network failures and error statuses both count as unreachable.
        """
        try:
            response = self._request("HEAD", url)
            if response.status_code in HEAD_UNSUPPORTED_STATUS_CODES:
                logger.debug(f"HEAD not supported by {url} ({response.status_code}); retrying with GET")
                response = self._request("GET", url)
        except requests.RequestException as e:
            logger.info(f"Probe of {url} failed: {type(e).__name__}: {e}")
            return False

        reachable = response.status_code < 400
        logger.debug(f"Probe of {url} -> {response.status_code} ({'reachable' if reachable else 'unreachable'})")
        return reachable
