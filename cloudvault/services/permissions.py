"""
Per-user collaborator grants on a file, managed by the file's owner.

One row per (file, grantee). Roles are recorded and listed but no file
operation consults them; only the owner can act on a file.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cloudvault.errors import NotFoundError, ValidationError
from cloudvault.models.permission_model import Permission, Role
from cloudvault.models.user_model import User
from cloudvault.services.access import authorize_file, is_valid_id

logger = logging.getLogger(__name__)


def _find_grant(db: Session, file_id: int, grantee_id: int) -> Optional[Permission]:
    if not is_valid_id(grantee_id):
        return None
    return db.query(Permission).filter(Permission.file_id == file_id, Permission.user_id == grantee_id).first()


def _check_grantee(db: Session, owner_id: int, grantee_id: int):
    if grantee_id == owner_id:
        raise ValidationError("The owner already has full access")
    if not is_valid_id(grantee_id) or db.get(User, grantee_id) is None:
        raise NotFoundError("User not found")


def add_permission(db: Session, owner_id: int, file_id: int, grantee_id: int, role: Role) -> Permission:
    authorize_file(db, owner_id, file_id)
    _check_grantee(db, owner_id, grantee_id)

    if _find_grant(db, file_id, grantee_id) is not None:
        raise ValidationError("Permission already exists for this user")

    grant = Permission(owner_id=owner_id, user_id=grantee_id, file_id=file_id, role=Role(role).value)
    db.add(grant)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Permission already exists for this user")

    db.refresh(grant)
    logger.info("User %s granted %s on file %s to user %s", owner_id, grant.role, file_id, grantee_id)
    return grant


def update_permission(db: Session, owner_id: int, file_id: int, grantee_id: int, role: Role) -> Permission:
    authorize_file(db, owner_id, file_id)

    grant = _find_grant(db, file_id, grantee_id)
    if grant is None:
        raise NotFoundError("Permission not found")

    grant.role = Role(role).value
    db.commit()
    db.refresh(grant)
    logger.info("User %s changed role on file %s for user %s to %s", owner_id, file_id, grantee_id, grant.role)
    return grant


def remove_permission(db: Session, owner_id: int, file_id: int, grantee_id: int):
    authorize_file(db, owner_id, file_id)

    grant = _find_grant(db, file_id, grantee_id)
    if grant is None:
        raise NotFoundError("Permission not found")

    db.delete(grant)
    db.commit()
    logger.info("User %s revoked access to file %s for user %s", owner_id, file_id, grantee_id)


def list_permissions(db: Session, owner_id: int, file_id: int) -> list[Permission]:
    authorize_file(db, owner_id, file_id)
    return db.query(Permission).filter(Permission.file_id == file_id).order_by(Permission.id).all()
