# medicall/modules/uploads/schemas.py

from pydantic import BaseModel


class UploadResponse(BaseModel):
    message: str
    url: str
    filename: str
