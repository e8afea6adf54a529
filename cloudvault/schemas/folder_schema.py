from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FolderCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Reports"], description="Folder name")
    parent_id: Optional[int] = Field(None, examples=[1], description="Parent folder, omitted for a root folder")


class FolderOut(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    owner_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FolderCreated(BaseModel):
    message: str
    folder: FolderOut
