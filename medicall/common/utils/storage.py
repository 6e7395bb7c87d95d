# medicall/common/utils/storage.py
"""Local disk storage for uploaded files, served back under UPLOAD_URL_PREFIX."""

import logging
import re
import time
from pathlib import Path
from typing import Tuple

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from medicall.common.config import settings
from medicall.common.utils.exceptions import ValidationError
from medicall.common.utils.global_messages import GlobalMessages

logger = logging.getLogger(__name__)

FILE_TYPE_PATTERN = re.compile(r"^[a-z0-9-]+$")


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _extension(filename: str) -> str:
    suffix = Path(filename or "").suffix.lstrip(".").lower()
    suffix = re.sub(r"[^a-z0-9]", "", suffix)
    return suffix or "bin"


async def save_upload(file: UploadFile, file_type: str = "file") -> Tuple[str, str]:
    """
    Write an uploaded file to the upload directory.

    The stored name is ``<type>_<epoch-ms>.<ext>``; the original name is
    only used for its extension.

    Returns:
        (public URL, stored filename)
    """
    if not FILE_TYPE_PATTERN.match(file_type):
        raise ValidationError(details=[{
            "field": "type",
            "message": "Type may only contain lowercase letters, digits and hyphens",
        }])

    content = await file.read()
    if not content:
        raise ValidationError(GlobalMessages.NO_FILE)

    filename = f"{file_type}_{int(time.time() * 1000)}.{_extension(file.filename)}"
    target = upload_dir() / filename
    await run_in_threadpool(target.write_bytes, content)

    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{filename}", filename
