"""
Filesystem storage for uploaded images.

Clients send images as base64 data URIs (``data:image/png;base64,...``).
The ``ImageStore`` decodes them, enforces the configured size limit and
writes the bytes to the upload directory under a caller-chosen name.
Stored images are served by the application under
``settings.image_url_prefix``, so ``url_for`` gives the public path
that entity rows keep in sync with the file.

Deleting is idempotent: removing an image that does not exist counts
as success.
"""

import base64
import binascii
import logging
from pathlib import Path, PurePosixPath
from typing import Optional

from ..core.config import settings
from ..core.errors import ImageUploadError
from ..schemas.common import ImageUploadResult

logger = logging.getLogger(__name__)

VALID_IMAGE_PREFIXES = (
    "data:image/jpeg;base64,",
    "data:image/png;base64,",
    "data:image/gif;base64,",
    "data:image/webp;base64,",
)


def is_valid_image_data(image_data: str) -> bool:
    """Return ``True`` if the string is a data URI of an accepted format."""
    return image_data.startswith(VALID_IMAGE_PREFIXES)


class ImageStore:
    """Stores image files under a single directory."""

    def __init__(
        self,
        upload_dir: str,
        max_size: int = 10 * 1024 * 1024,
        url_prefix: str = "/images",
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size
        self.url_prefix = url_prefix.rstrip("/")

    def _ensure_upload_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def get_path(self, image_name: str) -> Path:
        # Only the final component is used so names cannot escape the directory
        return self.upload_dir / PurePosixPath(image_name).name

    def url_for(self, image_name: str) -> str:
        return f"{self.url_prefix}/{image_name}"

    def exists(self, image_name: str) -> bool:
        return self.get_path(image_name).is_file()

    def validate_format(self, image_data: str) -> bool:
        return is_valid_image_data(image_data)

    def upload(self, image_data: str, image_name: str) -> ImageUploadResult:
        """Decode ``image_data`` and write it as ``image_name``.

        An existing file with the same name is overwritten.  Failures
        are reported in the result rather than raised.
        """
        if "," not in image_data:
            return ImageUploadResult(success=False, error="Invalid image data format")

        base64_data = image_data.split(",", 1)[1]
        if not base64_data:
            return ImageUploadResult(success=False, error="No image data found")

        try:
            content = base64.b64decode(base64_data, validate=True)
        except binascii.Error:
            return ImageUploadResult(success=False, error="Invalid base64 image data")
        if not content:
            return ImageUploadResult(success=False, error="Invalid base64 image data")

        if len(content) > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            return ImageUploadResult(
                success=False,
                error=f"Image size exceeds maximum allowed size of {max_mb:g}MB",
            )

        image_path = self.get_path(image_name)
        try:
            self._ensure_upload_dir()
            image_path.write_bytes(content)
        except OSError as exc:
            logger.exception("Failed to write image %s", image_path)
            return ImageUploadResult(success=False, error=f"Failed to upload image: {exc.strerror or exc}")

        logger.info("Stored image %s (%d bytes)", image_name, len(content))
        return ImageUploadResult(success=True, filename=image_name, path=str(image_path))

    def delete(self, image_url: Optional[str]) -> ImageUploadResult:
        """Delete the image referenced by a public URL or a bare file name."""
        filename = PurePosixPath(image_url or "").name
        if not filename:
            return ImageUploadResult(success=True)

        image_path = self.get_path(filename)
        try:
            image_path.unlink(missing_ok=True)
        except OSError as exc:
            return ImageUploadResult(success=False, filename=filename, error=str(exc))
        return ImageUploadResult(success=True, filename=filename, path=str(image_path))


def get_image_store() -> ImageStore:
    """FastAPI dependency returning the store configured by ``settings``."""
    return ImageStore(
        settings.upload_dir,
        max_size=settings.upload_max_size,
        url_prefix=settings.image_url_prefix,
    )


def store_image(image_store: ImageStore, image_data: Optional[str], image_name: str) -> str:
    """Upload an image and return its public URL.

    Raises ``ImageUploadError`` so that the surrounding transaction is
    rolled back.
    """
    result = image_store.upload(image_data or "", image_name)
    if not result.success:
        raise ImageUploadError(result.error or "Failed to upload image")
    return image_store.url_for(image_name)


def discard_image(image_store: ImageStore, image_url: Optional[str]) -> None:
    """Best-effort removal of an image whose row is already gone.

    Failures are logged and swallowed: the database change has been
    committed and must not be reported as failed.
    """
    if not image_url or image_url == settings.image_placeholder:
        return
    result = image_store.delete(image_url)
    if not result.success:
        logger.warning("Failed to delete image file %s: %s", image_url, result.error)
