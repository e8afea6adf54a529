from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from cloudvault.models.permission_model import Role


class PermissionRequest(BaseModel):
    file_id: int = Field(..., examples=[42], description="File the grant applies to")
    user_id: int = Field(..., examples=[2], description="Grantee user identification number")
    role: Role = Field(..., examples=["viewer"], description="Collaborator role")


class PermissionRemove(BaseModel):
    file_id: int = Field(..., examples=[42])
    user_id: int = Field(..., examples=[2])


class PermissionOut(BaseModel):
    id: int
    owner_id: int
    user_id: int
    file_id: int
    role: Role
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PermissionResponse(BaseModel):
    message: str
    permission: PermissionOut
