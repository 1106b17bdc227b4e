"""Factory functions for the HTTP session and the Google Drive client."""

from typing import Optional

import requests
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

import config
from utils.logger import get_logger
from utils.error_handler import APIError, ConfigError

logger = get_logger()

# Cache for built Drive clients, keyed by API key
_service_cache: dict[str, Resource] = {}

def build_http_session(user_agent: str = config.USER_AGENT) -> requests.Session:
    """Builds a requests session used for every unauthenticated probe.

    Args:
        user_agent: User-Agent header to send. GitHub rejects requests without one.

    Returns:
        requests.Session: A session with default headers set.
    """
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "application/vnd.github+json, */*;q=0.8",
    })
    logger.debug(f"Built HTTP session with User-Agent '{user_agent}'.")
    return session

def build_drive_service(api_key: Optional[str]) -> Resource:
    """Builds and returns a Drive v3 client authenticated only by an API key.

    An API key gives read access to public files, which is all the
    checker needs; no OAuth flow is involved.

    Args:
        api_key: A Google Cloud API key with the Drive API enabled.

    Returns:
        Resource: The Drive API client resource object.

    Raises:
        ConfigError: If no API key is given.
        APIError: If the client cannot be built.
    """
    if not api_key:
        raise ConfigError("A Google API key is required to build the Drive client.")

    if api_key in _service_cache:
        logger.debug("Using cached Drive client.")
        return _service_cache[api_key]

    logger.debug("Building new Drive v3 client...")
    try:
        service = build("drive", "v3", developerKey=api_key, cache_discovery=False)
        logger.info("Successfully built Drive v3 client.")
        _service_cache[api_key] = service
        return service
    except HttpError as e:
        logger.error(f"Failed to build Drive client due to HTTP error: {e.resp.status}", exc_info=config.DEBUG)
        raise APIError(
            f"Failed to build Drive client due to HTTP error {e.resp.status}.",
            status_code=e.resp.status,
            service="drive"
        ) from e
    except Exception as e:
        logger.error(f"An unexpected error occurred while building the Drive client: {e}", exc_info=config.DEBUG)
        raise APIError(f"Unexpected error building Drive client: {e}", service="drive") from e
