# medicall/modules/uploads/uploads_controller.py

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from medicall.auth.dependencies import get_current_user
from medicall.common.utils.exceptions import ValidationError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.common.utils.storage import save_upload
from medicall.models.models import User
from medicall.modules.uploads.schemas import UploadResponse

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    type: str = Form("file", description="Tag used as the filename prefix, e.g. prescription or profile"),
    current_user: User = Depends(get_current_user),
):
    """Store a prescription image, avatar or other attachment and return its public URL."""
    if file is None:
        raise ValidationError(GlobalMessages.NO_FILE)

    url, filename = await save_upload(file, type.strip().lower() or "file")
    return UploadResponse(message=GlobalMessages.FILE_UPLOADED, url=url, filename=filename)
