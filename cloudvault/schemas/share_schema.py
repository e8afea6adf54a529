from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cloudvault.schemas.file_schema import FileOut


class ShareLinkOut(BaseModel):
    id: int
    file_id: int
    token: str
    permission: str
    owner_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ShareCreated(BaseModel):
    message: str
    share: ShareLinkOut
    shareUrl: str


class SharedFile(BaseModel):
    message: str
    file: FileOut
    permission: str
