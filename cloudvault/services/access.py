"""
Ownership guard for every owner-scoped operation.

A resource that does not exist and a resource owned by somebody else are
reported the same way, as ``NotFoundError``, so callers cannot probe for
other users' ids. The check is a fresh query each time it is called.
"""
from sqlalchemy.orm import Session

from cloudvault.errors import NotFoundError
from cloudvault.models.file_model import UserFile
from cloudvault.models.folder_model import Folder

# Primary keys are 32-bit INTEGER columns on PostgreSQL.
MAX_ID = 2**31 - 1


def is_valid_id(value: int) -> bool:
    """Ids outside the column range cannot name a stored row."""
    return 1 <= value <= MAX_ID


def authorize_file(db: Session, user_id: int, file_id: int, include_deleted: bool = True) -> UserFile:
    if not is_valid_id(file_id):
        raise NotFoundError("File not found")

    query = db.query(UserFile).filter(UserFile.id == file_id, UserFile.owner_id == user_id)
    if not include_deleted:
        query = query.filter(UserFile.is_deleted.is_(False))

    file = query.first()
    if file is None:
        raise NotFoundError("File not found")
    return file


def authorize_folder(db: Session, user_id: int, folder_id: int) -> Folder:
    if not is_valid_id(folder_id):
        raise NotFoundError("Folder not found")

    folder = db.query(Folder).filter(Folder.id == folder_id, Folder.owner_id == user_id).first()
    if folder is None:
        raise NotFoundError("Folder not found")
    return folder
