from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cloudvault.database import get_db
from cloudvault.dependencies import get_current_user
from cloudvault.models.user_model import User
from cloudvault.schemas.permission_schema import PermissionOut, PermissionRemove, PermissionRequest, PermissionResponse
from cloudvault.schemas.user_schema import MessageResponse
from cloudvault.services import permissions as permission_service

router = APIRouter()

OWNER_ONLY = {404: {"description": "File not found (absent or not owned by the caller)"}}

@router.post("/add", response_model=PermissionResponse, summary="Grant a role on a file",
             responses={
                 400: {"description": "Missing field, invalid role or permission already exists"},
                 **OWNER_ONLY,
             })
def add(request: PermissionRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    grant = permission_service.add_permission(db, user.id, request.file_id, request.user_id, request.role)
    return {"message": "Permission added", "permission": grant}


@router.put("/update", response_model=PermissionResponse, summary="Change a collaborator's role",
            responses={
                400: {"description": "Missing field or invalid role"},
                **OWNER_ONLY,
            })
def update(request: PermissionRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    grant = permission_service.update_permission(db, user.id, request.file_id, request.user_id, request.role)
    return {"message": "Permission updated", "permission": grant}


@router.delete("/remove", response_model=MessageResponse, summary="Revoke a collaborator's access",
               responses={
                   400: {"description": "file_id and user_id required"},
                   **OWNER_ONLY,
               })
def remove(request: PermissionRemove, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    permission_service.remove_permission(db, user.id, request.file_id, request.user_id)
    return {"message": "Permission removed"}


@router.get("/{file_id}", response_model=list[PermissionOut], summary="List grants on a file",
            responses=OWNER_ONLY)
def get_permissions(file_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return permission_service.list_permissions(db, user.id, file_id)
