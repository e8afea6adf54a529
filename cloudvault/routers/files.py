from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from cloudvault.config import SIGNED_URL_EXPIRES
from cloudvault.database import get_db
from cloudvault.dependencies import get_current_user, get_storage
from cloudvault.models.user_model import User
from cloudvault.schemas.file_schema import (
    FileActionResponse, FileOut, FilePage, RenameRequest, SignedUrlResponse, UploadResponse,
)
from cloudvault.schemas.user_schema import MessageResponse
from cloudvault.services import files as file_service
from cloudvault.services.access import MAX_ID
from cloudvault.services.downloads import issue_signed_url
from cloudvault.services.storage import ObjectStore

router = APIRouter()

@router.post("/upload", response_model=UploadResponse, summary="Upload a file and record it",
             description="""
                            Multipart upload, field "file". The blob is written to object storage
                            first and the file record is saved afterwards.
                          """,
             responses={
                 400: {"description": "No file uploaded"},
                 404: {"description": "Folder not found"},
                 413: {"description": "Upload file is too large"},
                 500: {"description": "Storage or database failure"},
             })
def upload(file: UploadFile = File(...),
           folder_id: Optional[int] = Form(None),
           user: User = Depends(get_current_user),
           db: Session = Depends(get_db),
           storage: ObjectStore = Depends(get_storage)):
    if file.size is not None:
        file_service.check_upload_size(file.size)
    data = file.file.read()
    saved_file = file_service.upload_file(db, storage, user.id, file.filename, data, file.content_type, folder_id)
    return {
        "message": "File uploaded & saved in DB successfully",
        "filePath": saved_file.file_path,
        "publicUrl": saved_file.public_url,
        "savedFile": saved_file,
    }


@router.get("/files", response_model=FilePage, summary="Paginated list of the caller's files")
def get_files(page: int = Query(1, ge=1, le=MAX_ID),
              limit: int = Query(10, ge=1, le=100),
              folder_id: Optional[int] = Query(None, ge=1, le=MAX_ID),
              user: User = Depends(get_current_user),
              db: Session = Depends(get_db)):
    total, files = file_service.list_files(db, user.id, page, limit, folder_id)
    return {"page": page, "limit": limit, "total": total, "files": files}


@router.put("/files/{file_id}/rename", response_model=FileActionResponse, summary="Rename a file",
            responses={
                400: {"description": "new_name required"},
                404: {"description": "File not found"},
            })
def rename(file_id: int, request: RenameRequest, user: User = Depends(get_current_user),
           db: Session = Depends(get_db)):
    file = file_service.rename_file(db, user.id, file_id, request.new_name)
    return {"message": "File renamed", "file": file}


@router.delete("/files/{file_id}/trash", response_model=FileActionResponse, summary="Move a file to the trash",
               responses={404: {"description": "File not found"}})
def trash(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    file = file_service.trash_file(db, user.id, file_id)
    return {"message": "File moved to Trash", "file": file}


@router.get("/trash", response_model=list[FileOut], summary="List trashed files, most recently deleted first")
def get_trash(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return file_service.list_trash(db, user.id)


@router.put("/files/{file_id}/restore", response_model=FileActionResponse, summary="Restore a trashed file",
            responses={404: {"description": "File not found"}})
def restore(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    file = file_service.restore_file(db, user.id, file_id)
    return {"message": "File restored", "file": file}


@router.delete("/files/{file_id}/permanent", response_model=MessageResponse,
               summary="Delete the stored object and the file record",
               description="""
                           Removes the blob from object storage and then the record, together with
                           its share links and permissions. This step is irreversible.
                         """,
               responses={
                   404: {"description": "File not found"},
                   500: {"description": "Storage or database failure"},
               })
def delete_permanently(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db),
                       storage: ObjectStore = Depends(get_storage)):
    file_service.delete_file_permanently(db, storage, user.id, file_id)
    return {"message": "File permanently deleted"}


@router.get("/files/{file_id}/signed-url", response_model=SignedUrlResponse,
            summary="Time-limited direct download URL",
            responses={
                404: {"description": "File not found"},
                500: {"description": "Signed URL generation failed"},
            })
def signed_url(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db),
               storage: ObjectStore = Depends(get_storage)):
    url = issue_signed_url(db, storage, user.id, file_id)
    return {"message": "Signed URL generated", "signedUrl": url, "expiresIn": SIGNED_URL_EXPIRES}


@router.get("/files/{file_id}/download", summary="Redirect to a freshly signed download URL",
            status_code=status.HTTP_302_FOUND,
            responses={
                302: {"description": "Redirect to the object store"},
                404: {"description": "File not found"},
            })
def download(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db),
             storage: ObjectStore = Depends(get_storage)):
    url = issue_signed_url(db, storage, user.id, file_id)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)
