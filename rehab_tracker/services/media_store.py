"""Local media store for exercise demonstration videos.

Saves the upload and hands back a URL string; nothing downstream looks at
the file content.
"""

import logging
import random
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from rehab_tracker.config import get_settings
from rehab_tracker.errors import StorageError, ValidationFailed

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads/videos"
CHUNK_SIZE = 1024 * 1024


class MediaStore:
    """Writes uploaded videos under ``upload_dir`` and returns their public URL."""

    def __init__(self, upload_dir: Optional[str] = None, max_bytes: Optional[int] = None):
        settings = get_settings()
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.max_bytes = max_bytes or settings.max_upload_bytes

    @staticmethod
    def _unique_name(original_name: str) -> str:
        suffix = Path(original_name or "").suffix.lower()
        stamp = int(time.time() * 1000)
        return f"exercise-{stamp}-{random.randint(0, 10**9)}{suffix}"

    def save_video(self, upload: UploadFile) -> str:
        if not (upload.content_type or "").startswith("video/"):
            raise ValidationFailed("Only video files are allowed")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        filename = self._unique_name(upload.filename)
        target = self.upload_dir / filename

        written = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise ValidationFailed("Video exceeds the maximum upload size")
                    out.write(chunk)
        except ValidationFailed:
            target.unlink(missing_ok=True)
            raise
        except OSError as exc:
            target.unlink(missing_ok=True)
            logger.exception("Failed to store upload %s", upload.filename)
            raise StorageError("Failed to store video") from exc

        logger.info("Stored video %s (%s bytes)", filename, written)
        return f"{URL_PREFIX}/{filename}"
