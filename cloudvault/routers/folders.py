from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cloudvault.database import get_db
from cloudvault.dependencies import get_current_user
from cloudvault.models.user_model import User
from cloudvault.schemas.folder_schema import FolderCreate, FolderCreated, FolderOut
from cloudvault.services.folders import create_folder, list_folders

router = APIRouter()

@router.post("/folders", response_model=FolderCreated, summary="Create folder",
             responses={
                 400: {"description": "Folder name required"},
                 404: {"description": "Parent folder not found"},
             })
def add_folder(request: FolderCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    folder = create_folder(db, user.id, request.name, request.parent_id)
    return {"message": "Folder created", "folder": folder}


@router.get("/folders", response_model=list[FolderOut], summary="List the caller's folders, newest first")
def get_folders(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return list_folders(db, user.id)
