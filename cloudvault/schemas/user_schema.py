from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional


def password_validator(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters long")
    return value


class UserCreate(BaseModel):
    email: EmailStr = Field(..., examples=["user@example.com"], description="Unique email of the user")
    password: str = Field(..., examples=["Password1!"], description="Password for the user account")

    _validate_password = field_validator("password")(password_validator)

class UserLogin(BaseModel):
    email: EmailStr = Field(..., examples=["user@example.com"], description="Unique email of the user")
    password: str = Field(..., min_length=1, examples=["Password1!"], description="Password for the user account")

class UserOut(BaseModel):
    id: int = Field(..., examples=[1], description="User identification number")
    email: EmailStr = Field(..., examples=["user@example.com"], description="User's email address")

    class Config:
        from_attributes = True

class UserResponse(UserOut):
    is_active: bool = Field(..., examples=[True], description="Whether the account may sign in")
    created_at: Optional[datetime] = Field(None, description="Date of creation of the user account")
    last_login: Optional[datetime] = Field(None, description="Date of the user's last login")

class LoginResponse(BaseModel):
    message: str = Field("Login successful", description="Human readable status")
    token: str = Field(..., examples=["eyJhbGciOiJIUzI1NiIsInR"], description="JWT access token")
    user: UserOut

class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Operation completed successfully"],
                         description="Message displayed after the command has been successfully executed")
