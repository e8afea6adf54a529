from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cloudvault.database import get_db
from cloudvault.dependencies import get_current_user
from cloudvault.models.user_model import User
from cloudvault.schemas.search_schema import FileSearchResponse, FolderSearchResponse, FullTextSearchResponse
from cloudvault.services import search as search_service
from cloudvault.services.access import MAX_ID

router = APIRouter()

@router.get("/files", response_model=FileSearchResponse, summary="Search file names",
            responses={400: {"description": "q required"}})
def search_files(q: Optional[str] = None,
                 limit: int = Query(20, ge=1, le=100),
                 offset: int = Query(0, ge=0, le=MAX_ID),
                 user: User = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    q = search_service.clean_query(q)
    return {"query": q, "results": search_service.search_files(db, user.id, q, limit, offset)}


@router.get("/folders", response_model=FolderSearchResponse, summary="Search folder names",
            responses={400: {"description": "q required"}})
def search_folders(q: Optional[str] = None, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    q = search_service.clean_query(q)
    return {"query": q, "results": search_service.search_folders(db, user.id, q)}


@router.get("/fulltext", response_model=FullTextSearchResponse, summary="Full text search over file names",
            description="""
                            Accepts web-search syntax: quoted phrases, "or", and -term to exclude.
                        """,
            responses={400: {"description": "q required"}})
def search_fulltext(q: Optional[str] = None, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    q = search_service.clean_query(q)
    return {
        "message": "Full text search results",
        "query": q,
        "results": search_service.fulltext_search(db, user.id, q),
    }
