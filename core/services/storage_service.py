# =============================================================================
# core/services/storage_service.py - Profile Image Storage
# =============================================================================
# Stores profile pictures in a Supabase Storage bucket.
# Files are renamed to a random hex name keeping the original extension;
# only that filename is recorded on the user.
# =============================================================================

import logging
import secrets
from pathlib import PurePosixPath

from supabase import Client

from app.exceptions import FileTooLargeError, InvalidFileTypeError, StoreFailureError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# Number of random bytes in a stored filename
FILENAME_TOKEN_BYTES = 12


class StorageService:
    """
    Service for profile image uploads.

    Validates type and size before anything touches storage.
    """

    def __init__(
        self,
        bucket: str,
        allowed_extensions: list[str],
        max_size_bytes: int,
        client: Client | None = None,
    ):
        self.bucket = bucket
        self.allowed_extensions = allowed_extensions
        self.max_size_bytes = max_size_bytes
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = SupabaseClient.get_client()
        return self._client

    def validate_image(self, filename: str, size: int) -> str:
        """
        Check an upload against the extension whitelist and size limit.

        Returns:
            The lower-cased extension, e.g. ".png"

        Raises:
            InvalidFileTypeError: If the extension isn't allowed
            FileTooLargeError: If the file is over the limit
        """
        extension = PurePosixPath(filename).suffix.lower()
        if extension not in self.allowed_extensions:
            raise InvalidFileTypeError(filename, self.allowed_extensions)

        if size > self.max_size_bytes:
            raise FileTooLargeError(size / (1024 * 1024), self.max_size_bytes // (1024 * 1024))

        return extension

    def save_profile_image(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Validate and upload a profile picture.

        Returns:
            The generated filename the image is stored under

        Raises:
            InvalidFileTypeError / FileTooLargeError: If validation fails
            StoreFailureError: If the upload fails
        """
        extension = self.validate_image(filename, len(content))
        stored_name = f"{secrets.token_hex(FILENAME_TOKEN_BYTES)}{extension}"

        try:
            self.client.storage.from_(self.bucket).upload(
                path=stored_name,
                file=content,
                file_options={"content-type": content_type or "application/octet-stream"},
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StoreFailureError("upload profile image", str(e))

        logger.info(f"Uploaded profile image: {stored_name}")
        return stored_name

    def public_url(self, stored_name: str | None) -> str | None:
        """Public URL of a stored picture, or None when the user has none."""
        if not stored_name:
            return None
        return self.client.storage.from_(self.bucket).get_public_url(stored_name)
