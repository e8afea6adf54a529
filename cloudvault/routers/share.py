from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cloudvault.database import get_db
from cloudvault.dependencies import get_current_user
from cloudvault.models.user_model import User
from cloudvault.schemas.share_schema import ShareCreated, ShareLinkOut, SharedFile
from cloudvault.schemas.user_schema import MessageResponse
from cloudvault.services.share import (
    build_share_url, create_share_link, list_share_links, resolve_share_link, revoke_share_link,
)

router = APIRouter()

@router.post("/{file_id}", response_model=ShareCreated, summary="Create a public share link",
             responses={404: {"description": "File not found"}})
def create_link(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    link = create_share_link(db, user.id, file_id)
    return {"message": "Share link created", "share": link, "shareUrl": build_share_url(link.token)}


@router.get("/access/{token}", response_model=SharedFile, summary="Open a share link",
            description="""
                            No sign-in needed: holding the token is the credential.
                        """,
            responses={404: {"description": "Invalid share link"}})
def access_link(token: str, db: Session = Depends(get_db)):
    link = resolve_share_link(db, token)
    return {"message": "Shared file accessed", "file": link.file, "permission": link.permission}


@router.get("/file/{file_id}", response_model=list[ShareLinkOut], summary="List share links of a file",
            responses={404: {"description": "File not found"}})
def get_links(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return list_share_links(db, user.id, file_id)


@router.delete("/{token}", response_model=MessageResponse, summary="Revoke a share link",
               responses={404: {"description": "Invalid share link"}})
def revoke_link(token: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    revoke_share_link(db, user.id, token)
    return {"message": "Share link revoked"}
