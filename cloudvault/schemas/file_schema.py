from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FileOut(BaseModel):
    id: int = Field(..., examples=[42], description="File identification number")
    owner_id: int
    file_name: str = Field(..., examples=["report.pdf"], description="File name shown to the user")
    file_path: str = Field(..., description="Object-store key")
    public_url: Optional[str] = None
    file_type: Optional[str] = Field(None, examples=["application/pdf"])
    file_size: Optional[int] = Field(None, examples=[4005], description="File size in bytes")
    folder_id: Optional[int] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UploadResponse(BaseModel):
    message: str
    filePath: str
    publicUrl: Optional[str]
    savedFile: FileOut


class FilePage(BaseModel):
    page: int
    limit: int
    total: int
    files: list[FileOut]


class FileActionResponse(BaseModel):
    message: str
    file: FileOut


class RenameRequest(BaseModel):
    new_name: str = Field(..., min_length=1, examples=["summary.pdf"], description="New file name")


class SignedUrlResponse(BaseModel):
    message: str
    signedUrl: str
    expiresIn: int = Field(..., examples=[600], description="Seconds until the URL stops working")
