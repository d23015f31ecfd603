"""
Bloggy Backend — Upload Storage Service
=========================================

What:  Validates, stores, and removes images uploaded with blog posts.
How:   Checks extension, size, and the MIME type python-magic detects
       from the bytes; stores in date-organized directories under UUID
       filenames.
Who:   Called by PostService while creating a post.
When:  Before the post fields are validated. If anything fails afterwards,
       PostService calls cleanup_file() so no orphaned image stays on disk.

Accepted uploads:
    PNG and JPEG only, matching on both the filename extension and the
    file signature libmagic reads from the content.

Directory Structure:
    public/images/
    └── 2024/
        └── 01/
            └── 15/
                ├── a1b2c3d4-5678.jpg
                └── e5f6g7h8-9012.png
"""

import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles
import magic

from app.config import settings
from app.exceptions import ValidationError, FileStorageError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
}

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg"}


class FileService:
    """
    Manages the lifecycle of an uploaded post image.

        1. validate_extension(): fast rejection on filename
        2. validate_size(): bounded by settings.max_file_size
        3. validate_mime_type(): content must be PNG or JPEG
        4. store_file(): written to YYYY/MM/DD/<uuid><ext>
        5. cleanup_file(): removes the file on a failed request
    """

    def __init__(self, storage_root: Optional[str] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
                          If None, uses settings.storage_root.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()

    def validate_extension(self, filename: str) -> str:
        """
        Returns: Normalized extension (lowercase with dot).
        Raises:  ValidationError if extension is not allowed.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_mime_type(self, content: bytes, filename: str) -> str:
        """
        Detect the MIME type from the file's leading bytes.

        The type the client declared for the part is ignored: a text file
        renamed to photo.png is still text.

        Returns: Detected MIME type (image/png or image/jpeg).
        Raises:
            ValidationError: detected type is not PNG or JPEG
            FileStorageError: libmagic could not inspect the content
        """
        try:
            mime_type = magic.from_buffer(content, mime=True)
        except magic.MagicException as e:
            logger.error("MIME type detection failed for %s: %s", filename, str(e))
            raise FileStorageError(
                message="Could not verify file type. Please try again.",
                context={"error": str(e)},
            )

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message=(
                    f"File content type '{mime_type}' is not supported. "
                    "The file must be a PNG or JPEG image."
                ),
                field="image",
                context={"detected_mime": mime_type, "allowed": list(ALLOWED_MIME_TYPES)},
            )
        return mime_type

    def validate_size(self, actual_size: int) -> None:
        max_mb = settings.max_file_size / (1024 * 1024)

        if actual_size == 0:
            raise ValidationError(
                message="Uploaded image is empty.",
                field="image",
                context={"actual_size": actual_size},
            )

        if actual_size > settings.max_file_size:
            raise ValidationError(
                message=f"File size ({actual_size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="image",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        """
        Generate a unique, date-organized file path for storage.

        Returns: Tuple of (absolute_path, relative_path_from_storage_root).
        """
        now = datetime.now(timezone.utc)
        date_dir = now.strftime("%Y/%m/%d")
        unique_name = f"{uuid.uuid4()}{extension}"

        relative_path = f"{date_dir}/{unique_name}"
        absolute_path = self.storage_root / relative_path

        return absolute_path, relative_path

    async def store_file(self, content: bytes, extension: str) -> Tuple[str, str]:
        """
        Write validated file content to disk.

        Returns: Tuple of (absolute_path, relative_path).
        Raises:  FileStorageError if directory creation or file write fails.
        """
        absolute_path, relative_path = self._generate_storage_path(extension)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)

            logger.info("File stored: %s (%d bytes)", relative_path, len(content))
            return str(absolute_path), relative_path

        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove a stored file after a failed request.

        Missing files are ignored; other failures are logged, not raised,
        so the original error still reaches the client.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
            else:
                logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))

    def resolve_stored_path(self, relative_path: str) -> Path:
        """
        Map a relative path back into the storage root.

        Raises:
            ValidationError: the path escapes the storage root
        """
        full_path = (self.storage_root / relative_path).resolve()
        if not full_path.is_relative_to(self.storage_root):
            raise ValidationError(message="Invalid file path", field="file_path")
        return full_path

    async def validate_and_store(
        self,
        filename: str,
        content: bytes,
    ) -> Tuple[str, str]:
        """
        Complete file validation and storage pipeline.

        Returns: Tuple of (absolute_path, relative_path_for_db).
        """
        ext = self.validate_extension(filename)
        self.validate_size(len(content))
        self.validate_mime_type(content, filename)

        return await self.store_file(content, ext)


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = FileService()
