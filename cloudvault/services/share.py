"""
Public share links.

A share token is the whole credential: whoever presents it gets the stored
permission on the referenced file, without signing in. Tokens carry 160
bits of randomness and the unique index on ``share_links.token`` stays the
final word on uniqueness.
"""
import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cloudvault.config import SHARE_BASE_URL
from cloudvault.errors import NotFoundError, UpstreamError
from cloudvault.models.file_model import UserFile
from cloudvault.models.share_link_model import ShareLink
from cloudvault.services.access import authorize_file

logger = logging.getLogger(__name__)

TOKEN_BYTES = 20
MAX_TOKEN_ATTEMPTS = 3
VIEW = "view"


def generate_share_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def build_share_url(token: str) -> str:
    return f"{SHARE_BASE_URL}{token}"


def create_share_link(db: Session, owner_id: int, file_id: int) -> ShareLink:
    file_id = authorize_file(db, owner_id, file_id).id

    for attempt in range(1, MAX_TOKEN_ATTEMPTS + 1):
        link = ShareLink(file_id=file_id, token=generate_share_token(), permission=VIEW, owner_id=owner_id)
        db.add(link)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("Share token collision for file %s (attempt %d)", file_id, attempt)
            continue

        db.refresh(link)
        logger.info("Share link %s issued for file %s by user %s", link.id, file_id, owner_id)
        return link

    raise UpstreamError("Could not allocate a unique share token")


def resolve_share_link(db: Session, token: str) -> ShareLink:
    link = (db.query(ShareLink)
            .join(UserFile, ShareLink.file_id == UserFile.id)
            .filter(ShareLink.token == token, UserFile.is_deleted.is_(False))
            .first())
    if link is None:
        raise NotFoundError("Invalid share link")
    return link


def list_share_links(db: Session, owner_id: int, file_id: int) -> list[ShareLink]:
    file = authorize_file(db, owner_id, file_id)
    return (db.query(ShareLink)
            .filter(ShareLink.file_id == file.id)
            .order_by(ShareLink.created_at.desc(), ShareLink.id.desc())
            .all())


def revoke_share_link(db: Session, owner_id: int, token: str):
    link = db.query(ShareLink).filter(ShareLink.token == token, ShareLink.owner_id == owner_id).first()
    if link is None:
        raise NotFoundError("Invalid share link")

    link_id, file_id = link.id, link.file_id
    db.delete(link)
    db.commit()
    logger.info("Share link %s for file %s revoked by user %s", link_id, file_id, owner_id)
