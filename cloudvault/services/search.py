"""
Name search over the caller's own files and folders.

Substring search is a case-insensitive ``LIKE``; full-text search uses
PostgreSQL's ``websearch_to_tsquery`` and falls back to a plain term match
on other databases.
"""
from typing import Optional

from sqlalchemy import func, not_
from sqlalchemy.orm import Session

from cloudvault.errors import ValidationError
from cloudvault.models.file_model import UserFile
from cloudvault.models.folder_model import Folder

TEXT_SEARCH_CONFIG = "simple"


def clean_query(q: Optional[str]) -> str:
    q = (q or "").strip()
    if not q:
        raise ValidationError("q required")
    return q


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, term: str):
    return column.ilike(f"%{escape_like(term)}%", escape="\\")


def _active_files(db: Session, owner_id: int):
    return db.query(UserFile).filter(UserFile.owner_id == owner_id, UserFile.is_deleted.is_(False))


def search_files(db: Session, owner_id: int, q: str, limit: int = 20, offset: int = 0) -> list[UserFile]:
    return (_active_files(db, owner_id)
            .filter(_contains(UserFile.file_name, q))
            .order_by(UserFile.created_at.desc(), UserFile.id.desc())
            .offset(offset)
            .limit(limit)
            .all())


def search_folders(db: Session, owner_id: int, q: str) -> list[Folder]:
    return (db.query(Folder)
            .filter(Folder.owner_id == owner_id, _contains(Folder.name, q))
            .order_by(Folder.created_at.desc(), Folder.id.desc())
            .all())


def websearch_terms(q: str) -> tuple[list[str], list[str]]:
    """Split a web-search style query into required and excluded terms."""
    required, excluded = [], []
    for word in q.replace('"', " ").split():
        if word.lower() == "or":
            continue
        if word.startswith("-"):
            if word.strip("-"):
                excluded.append(word.strip("-"))
        else:
            required.append(word)
    return required, excluded


def fulltext_query(db: Session, owner_id: int, q: str, dialect_name: str):
    """Build the full text query for the given SQL dialect, or None when nothing can match."""
    query = _active_files(db, owner_id)

    if dialect_name == "postgresql":
        document = func.to_tsvector(TEXT_SEARCH_CONFIG, UserFile.file_name)
        query = query.filter(document.op("@@")(func.websearch_to_tsquery(TEXT_SEARCH_CONFIG, q)))
    else:
        required, excluded = websearch_terms(q)
        if not required:
            return None
        for term in required:
            query = query.filter(_contains(UserFile.file_name, term))
        for term in excluded:
            query = query.filter(not_(_contains(UserFile.file_name, term)))

    return query.order_by(UserFile.created_at.desc(), UserFile.id.desc())


def fulltext_search(db: Session, owner_id: int, q: str) -> list[UserFile]:
    query = fulltext_query(db, owner_id, q, db.get_bind().dialect.name)
    if query is None:
        return []
    return query.all()
