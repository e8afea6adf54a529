import logging

from sqlalchemy.orm import Session

from cloudvault.config import SIGNED_URL_EXPIRES
from cloudvault.services.access import authorize_file
from cloudvault.services.storage import ObjectStore

logger = logging.getLogger(__name__)


def issue_signed_url(db: Session, storage: ObjectStore, owner_id: int, file_id: int) -> str:
    """Mint a time-limited direct download URL for an owned file.

    The object store enforces the expiry. Nothing is recorded here, so an
    issued URL keeps working for its whole window even if the file is
    deleted afterwards.
    """
    file = authorize_file(db, owner_id, file_id)
    url = storage.signed_url(file.file_path, SIGNED_URL_EXPIRES)
    logger.info("Signed URL issued for file %s to user %s", file.id, owner_id)
    return url
