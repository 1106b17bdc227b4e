"""Wrapper for the public GitHub REST API."""

from typing import Any, List, Optional

import requests

import config
from utils.logger import get_logger
from utils.error_handler import APIError
from utils.retry import retry_on_exception
from api_clients import build_http_session

logger = get_logger()

RETRYABLE_HTTP_ERRORS = (requests.ConnectionError, requests.Timeout)

class GitHubService:
    """Reads repository visibility and file listings without authentication."""

    SERVICE_NAME = 'github'

    def __init__(self, session: Optional[requests.Session] = None, api_url: str = config.GITHUB_API_URL):
        self.session = session or build_http_session()
        self.api_url = api_url.rstrip('/')
        logger.debug(f"GitHubService initialized against {self.api_url}")

    @retry_on_exception(exceptions=RETRYABLE_HTTP_ERRORS)
    def _get(self, url: str) -> requests.Response:
        return self.session.get(url, timeout=config.HTTP_TIMEOUT)

    def get_repo_status(self, owner: str, repo: str) -> int:
        """Returns the HTTP status of the repository endpoint.

        200 means public, 404 means missing or private and 403 usually
        means the anonymous rate limit is exhausted.

        Raises:
            APIError: If the request fails at the network level.
        """
        url = f"{self.api_url}/repos/{owner}/{repo}"
        logger.debug(f"Checking repository {owner}/{repo} at {url}")
        try:
            response = self._get(url)
        except requests.RequestException as e:
            logger.error(f"Network error checking repository {owner}/{repo}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Network error checking repository {owner}/{repo}: {e}", service=self.SERVICE_NAME) from e
        logger.info(f"Repository {owner}/{repo} answered with status {response.status_code}")
        return response.status_code

    def list_repo_files(self, owner: str, repo: str) -> List[str]:
        """Lists every file path in the default branch, walking directories.

        A listing that does not answer 200 contributes nothing; the paths
        collected so far are still returned.

        Raises:
            APIError: If a request fails at the network level or returns
                something other than a JSON listing.
        """
        files: List[str] = []
        self._collect_files(f"{self.api_url}/repos/{owner}/{repo}/contents/", files)
        logger.info(f"Found {len(files)} files in {owner}/{repo}")
        return files

    def _collect_files(self, url: str, files: List[str]) -> None:
        try:
            response = self._get(url)
        except requests.RequestException as e:
            logger.error(f"Network error listing {url}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Network error listing repository contents: {e}", service=self.SERVICE_NAME) from e

        if response.status_code != 200:
            logger.warning(f"Listing {url} returned status {response.status_code}; skipping.")
            return

        try:
            items: Any = response.json()
        except ValueError as e:
            raise APIError("Repository listing was not valid JSON.", status_code=response.status_code,
                           service=self.SERVICE_NAME) from e
        # The contents endpoint returns a single object when the path is a file
        if isinstance(items, dict):
            items = [items]

        for item in items:
            if item.get("type") == "file":
                files.append(item.get("path") or item.get("name"))
            elif item.get("type") == "dir" and item.get("url"):
                logger.debug(f"Descending into directory {item.get('path')}")
                self._collect_files(item["url"], files)
