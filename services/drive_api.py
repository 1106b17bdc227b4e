"""Wrapper for Google Drive API interactions on public files."""

from typing import Any, Dict, Optional

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

import config
from utils.logger import get_logger
from utils.error_handler import APIError
from utils.retry import retry_on_exception
from api_clients import build_drive_service

logger = get_logger()

RETRYABLE_DRIVE_ERRORS = (TimeoutError, ConnectionError)

class DriveService:
    """Looks up metadata of publicly shared Drive files with an API key."""

    SERVICE_NAME = 'drive'

    def __init__(self, api_key: Optional[str] = config.GOOGLE_API_KEY, service: Optional[Resource] = None):
        """Initializes the DriveService.

        Args:
            api_key: Google API key. Defaults to the value from config.
            service: A pre-built Drive client; skips building one.

        Raises:
            ConfigError: If neither an API key nor a client is provided.
            APIError: If the Drive client cannot be built.
        """
        logger.debug("Initializing DriveService...")
        self.service: Resource = service if service is not None else build_drive_service(api_key)
        logger.debug("DriveService initialized successfully.")

    @retry_on_exception(exceptions=RETRYABLE_DRIVE_ERRORS)
    def get_file_metadata(self, file_id: str, fields: str = "id, name, mimeType") -> Dict[str, Any]:
        """Gets metadata for a specific file.

        Args:
            file_id: The ID of the file.
            fields: Comma-separated string of fields to retrieve.

        Returns:
            A dictionary containing the requested file metadata.

        Raises:
            APIError: If the file is missing, not shared publicly, or the call fails.
        """
        logger.debug(f"Getting metadata for file ID: {file_id} with fields: {fields}")
        try:
            file_metadata = self.service.files().get(
                fileId=file_id,
                fields=fields,
                supportsAllDrives=True
            ).execute()
            logger.debug(f"Successfully retrieved metadata for file: {file_metadata.get('name')}")
            return file_metadata
        except HttpError as e:
            logger.warning(f"Failed to get metadata for file {file_id}: {e.resp.status}", exc_info=config.DEBUG)
            if e.resp.status == 404:
                raise APIError(
                    f"File not found (404) with ID: {file_id}",
                    status_code=404,
                    service=self.SERVICE_NAME
                ) from e
            raise APIError(
                f"Failed to get metadata for file {file_id}: {e.resp.status}",
                status_code=e.resp.status,
                service=self.SERVICE_NAME
            ) from e
        except (TimeoutError, ConnectionError):
            raise  # Left to the retry decorator
        except Exception as e:
            logger.warning(f"Unexpected error getting metadata for file {file_id}: {e}", exc_info=config.DEBUG)
            raise APIError(f"Unexpected error getting file metadata: {e}", service=self.SERVICE_NAME) from e
