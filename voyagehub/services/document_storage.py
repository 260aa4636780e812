"""
Document Storage
Keeps uploaded travel documents on local disk under ``<UPLOAD_DIR>/documents``.
"""
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from voyagehub.exceptions import BadRequestError
from voyagehub.logging_config import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024
URL_PREFIX = "/uploads/documents"


@dataclass(frozen=True)
class StoredFile:
    original_name: str
    stored_name: str
    file_url: str
    size: int
    mime_type: str


class DocumentStorage:
    def __init__(self, upload_dir: str, max_size_bytes: int, allowed_mime_types: List[str]):
        self.root = Path(upload_dir).resolve() / "documents"
        self.max_size_bytes = max_size_bytes
        self.allowed_mime_types = set(allowed_mime_types)

    def ensure_directory(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _new_name(self, original_name: str, field_name: str = "file") -> str:
        suffix = Path(original_name or "").suffix.lower()
        stamp = int(time.time() * 1000)
        return f"{field_name}-{stamp}-{secrets.randbelow(10**9)}{suffix}"

    async def save(self, upload: UploadFile) -> StoredFile:
        """
        Validate and persist an uploaded file.

        Raises:
            BadRequestError: unsupported type, empty file, or over the size limit
        """
        mime_type = upload.content_type or "application/octet-stream"
        if mime_type not in self.allowed_mime_types:
            raise BadRequestError("Invalid file type. Only PDF and images are allowed.")

        self.ensure_directory()
        stored_name = self._new_name(upload.filename or "")
        target = self.root / stored_name

        size = 0
        try:
            with target.open("wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_size_bytes:
                        raise BadRequestError(
                            f"File too large. Maximum size is {self.max_size_bytes // (1024 * 1024)}MB."
                        )
                    out.write(chunk)
        except BadRequestError:
            target.unlink(missing_ok=True)
            raise

        if size == 0:
            target.unlink(missing_ok=True)
            raise BadRequestError("Uploaded file is empty")

        logger.info(f"Stored document file {stored_name} ({size} bytes)")
        return StoredFile(
            original_name=upload.filename or stored_name,
            stored_name=stored_name,
            file_url=f"{URL_PREFIX}/{stored_name}",
            size=size,
            mime_type=mime_type,
        )

    def resolve(self, filename: str) -> Optional[Path]:
        """
        Path of a stored file, or None when the name is unsafe or missing.
        """
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            return None
        path = self.root / filename
        if not path.is_file():
            return None
        return path

    def remove(self, stored_name: str) -> bool:
        """
        Delete a stored file. Best effort: failures are logged, never raised.
        """
        if not stored_name or Path(stored_name).name != stored_name:
            logger.warning(f"Refusing to remove suspicious file name {stored_name!r}")
            return False
        try:
            (self.root / stored_name).unlink()
            logger.info(f"Removed document file {stored_name}")
            return True
        except FileNotFoundError:
            logger.warning(f"Document file already missing: {stored_name}")
            return False
        except OSError as e:
            logger.error(f"Failed to delete file {stored_name}: {e}")
            return False
