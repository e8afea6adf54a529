import logging
from typing import Optional

from sqlalchemy.orm import Session

from cloudvault.errors import ValidationError
from cloudvault.models.folder_model import Folder
from cloudvault.services.access import authorize_folder

logger = logging.getLogger(__name__)


def create_folder(db: Session, owner_id: int, name: str, parent_id: Optional[int] = None) -> Folder:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Folder name required")

    if parent_id is not None:
        authorize_folder(db, owner_id, parent_id)

    folder = Folder(name=name, parent_id=parent_id, owner_id=owner_id)
    db.add(folder)
    db.commit()
    db.refresh(folder)
    logger.info("Folder %s created by user %s", folder.id, owner_id)
    return folder


def list_folders(db: Session, owner_id: int) -> list[Folder]:
    return (db.query(Folder)
            .filter(Folder.owner_id == owner_id)
            .order_by(Folder.created_at.desc(), Folder.id.desc())
            .all())
