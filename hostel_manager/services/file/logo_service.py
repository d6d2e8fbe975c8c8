"""
Logo storage.

One public namespace holding a single object, ``logo.png``. Uploading
replaces it. Only PNG and JPEG up to ``LOGO_MAX_BYTES`` are accepted; the
bytes must decode with Pillow and the decoded format must match the
declared content type.
"""

import hashlib
import io
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from PIL import Image

from hostel_manager.config.settings import settings
from hostel_manager.core.exceptions import ErrorCode
from hostel_manager.core.logging import get_logger
from hostel_manager.services.base import ServiceError, ServiceResult

logger = get_logger(__name__)

PUBLIC_ASSETS_DIR = "public_assets"
LOGO_OBJECT_NAME = "logo.png"

MIME_BY_FORMAT = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
}


def detect_image_type(data: bytes) -> Optional[str]:
    """
    MIME type of a PNG or JPEG that Pillow can fully decode, else None.

    Truncated or corrupt files fail here rather than later when the logo is
    drawn into a PDF letterhead.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
        # verify() leaves the image unusable, so decode from a fresh handle
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            image_format = image.format
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        logger.debug(f"Image decode failed: {e}")
        return None
    return MIME_BY_FORMAT.get(image_format)


class LogoService:
    """Stores and serves the hostel logo from the upload directory."""

    def __init__(self, upload_dir: Optional[str] = None, max_bytes: Optional[int] = None):
        self.root = Path(upload_dir or settings.UPLOAD_DIR) / PUBLIC_ASSETS_DIR
        self.max_bytes = max_bytes or settings.LOGO_MAX_BYTES

    @property
    def path(self) -> Path:
        return self.root / LOGO_OBJECT_NAME

    def upload(self, data: bytes, content_type: Optional[str]) -> ServiceResult[Dict[str, str]]:
        """Validate and store the logo, replacing any previous one."""
        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type == "image/jpg":
            content_type = "image/jpeg"

        if not data:
            return ServiceResult.validation_failure("Logo file is empty", field="file")
        if len(data) > self.max_bytes:
            return ServiceResult.validation_failure(
                f"Logo must be at most {self.max_bytes // (1024 * 1024)} MB",
                field="file",
                details={"size": len(data), "max_bytes": self.max_bytes},
            )
        if content_type not in MIME_BY_FORMAT.values():
            return ServiceResult.validation_failure(
                "Logo must be a PNG or JPEG image",
                field="file",
                code=ErrorCode.INVALID_FORMAT,
                details={"content_type": content_type or None},
            )
        detected = detect_image_type(data)
        if detected is None:
            return ServiceResult.validation_failure(
                "Logo file is not a readable image",
                field="file",
                code=ErrorCode.INVALID_FORMAT,
                details={"content_type": content_type},
            )
        if detected != content_type:
            return ServiceResult.validation_failure(
                "File contents do not match the declared image type",
                field="file",
                code=ErrorCode.INVALID_FORMAT,
                details={"content_type": content_type, "detected": detected},
            )

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".logo-", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, self.path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to store logo: {e}", exc_info=True)
            return self._storage_failure("store logo", e)

        digest = hashlib.sha256(data).hexdigest()
        logger.info(f"Logo stored ({len(data)} bytes, sha256 {digest[:8]})")
        return ServiceResult.success(
            {"name": LOGO_OBJECT_NAME, "content_type": content_type, "size": str(len(data)), "sha256": digest},
            message="Logo updated",
        )

    def read(self) -> ServiceResult[bytes]:
        try:
            return ServiceResult.success(self.path.read_bytes())
        except FileNotFoundError:
            return ServiceResult.not_found("Logo", LOGO_OBJECT_NAME)
        except OSError as e:
            logger.error(f"Failed to read logo: {e}", exc_info=True)
            return self._storage_failure("read logo", e)

    def read_optional(self) -> Optional[bytes]:
        """Logo bytes for embedding in documents, or None when none is stored."""
        return self.read().unwrap_or(None)

    @staticmethod
    def _storage_failure(operation: str, error: OSError) -> ServiceResult:
        return ServiceResult.failure(
            ServiceError(
                code=ErrorCode.GATEWAY_ERROR,
                message=f"Failed to {operation}",
                details={"error": str(error)},
            )
        )
