"""
File lifecycle: upload, listing, rename, trash, restore and permanent delete.

Blob and record writes are two separate steps against two stores. Upload
writes the blob first and removes it again if the record cannot be saved;
permanent delete removes the blob first and then the record.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cloudvault.config import MAX_UPLOAD_SIZE
from cloudvault.errors import PayloadTooLargeError, UpstreamError, ValidationError
from cloudvault.models.file_model import UserFile
from cloudvault.services.access import authorize_file, authorize_folder
from cloudvault.services.storage import ObjectStore

logger = logging.getLogger(__name__)


def build_object_key(owner_id: int, filename: str) -> str:
    return f"{owner_id}/{uuid.uuid4().hex}_{filename}"


def _discard_blob(storage: ObjectStore, key: str):
    try:
        storage.remove(key)
    except UpstreamError as e:
        logger.error("Orphaned blob %s left in storage: %s", key, e.message)


def check_upload_size(size: int):
    if size > MAX_UPLOAD_SIZE:
        raise PayloadTooLargeError("File too large")


def upload_file(db: Session, storage: ObjectStore, owner_id: int, filename: str, data: bytes,
                content_type: Optional[str] = None, folder_id: Optional[int] = None) -> UserFile:
    if not filename:
        raise ValidationError("No file uploaded")
    check_upload_size(len(data))
    if folder_id is not None:
        authorize_folder(db, owner_id, folder_id)

    content_type = content_type or "application/octet-stream"
    key = storage.upload(build_object_key(owner_id, filename), data, content_type)

    saved_file = UserFile(
        owner_id=owner_id,
        file_name=filename,
        file_path=key,
        public_url=storage.public_url(key),
        file_type=content_type,
        file_size=len(data),
        folder_id=folder_id,
        is_deleted=False,
        deleted_at=None,
    )
    try:
        db.add(saved_file)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        _discard_blob(storage, key)
        raise

    db.refresh(saved_file)
    logger.info("File %s uploaded by user %s (%d bytes)", saved_file.id, owner_id, len(data))
    return saved_file


def list_files(db: Session, owner_id: int, page: int = 1, limit: int = 10,
               folder_id: Optional[int] = None) -> tuple[int, list[UserFile]]:
    query = db.query(UserFile).filter(UserFile.owner_id == owner_id, UserFile.is_deleted.is_(False))
    if folder_id is not None:
        query = query.filter(UserFile.folder_id == folder_id)

    total = query.count()
    files = (query.order_by(UserFile.created_at.desc(), UserFile.id.desc())
             .offset((page - 1) * limit)
             .limit(limit)
             .all())
    return total, files


def rename_file(db: Session, owner_id: int, file_id: int, new_name: str) -> UserFile:
    new_name = (new_name or "").strip()
    if not new_name:
        raise ValidationError("new_name required")

    file = authorize_file(db, owner_id, file_id)
    file.file_name = new_name
    db.commit()
    db.refresh(file)
    return file


def trash_file(db: Session, owner_id: int, file_id: int) -> UserFile:
    file = authorize_file(db, owner_id, file_id)
    if not file.is_deleted:
        file.is_deleted = True
        file.deleted_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(file)
    return file


def list_trash(db: Session, owner_id: int) -> list[UserFile]:
    return (db.query(UserFile)
            .filter(UserFile.owner_id == owner_id, UserFile.is_deleted.is_(True))
            .order_by(UserFile.deleted_at.desc(), UserFile.id.desc())
            .all())


def restore_file(db: Session, owner_id: int, file_id: int) -> UserFile:
    file = authorize_file(db, owner_id, file_id)
    file.is_deleted = False
    file.deleted_at = None
    db.commit()
    db.refresh(file)
    return file


def delete_file_permanently(db: Session, storage: ObjectStore, owner_id: int, file_id: int):
    file = authorize_file(db, owner_id, file_id)
    file_path = file.file_path

    storage.remove(file_path)
    try:
        db.delete(file)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error("File %s still references removed blob %s", file_id, file_path)
        raise

    logger.info("File %s permanently deleted by user %s", file_id, owner_id)
