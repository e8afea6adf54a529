from pydantic import BaseModel

from cloudvault.schemas.file_schema import FileOut
from cloudvault.schemas.folder_schema import FolderOut


class FileSearchResponse(BaseModel):
    query: str
    results: list[FileOut]


class FullTextSearchResponse(FileSearchResponse):
    message: str


class FolderSearchResponse(BaseModel):
    query: str
    results: list[FolderOut]
