from datetime import datetime, timezone
from uuid import uuid4

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from cloudvault.database import get_db
from cloudvault.dependencies import get_bearer_token, get_current_user
from cloudvault.errors import AuthError, ForbiddenError, ValidationError
from cloudvault.models.blacklisted_token_model import BlacklistedToken
from cloudvault.models.user_model import User
from cloudvault.schemas.user_schema import UserCreate, UserLogin, UserOut, UserResponse, LoginResponse, MessageResponse
from cloudvault.utils.auth import hash_password, verify_password, create_access_token, decode_access_token

router = APIRouter()

@router.post("/register", summary="New user registration", response_model=UserOut,
             description="""
                Creates a new user based on the data provided. The email address must be unique,
                and the password is stored in hashed form.
             """,
             responses={
                 400: {"description": "Email already registered or invalid input"},
                 201: {"description": "User created"},
             },
             status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    existing_user = db.query(User).filter(func.lower(User.email) == func.lower(user.email)).first()
    if existing_user:
        raise ValidationError("Email already registered")

    new_user = User(
        email=user.email,
        password_hash=hash_password(user.password)
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    return new_user


@router.post("/login", response_model=LoginResponse, summary="Exchange email and password for a token",
             description="""
                Returns a bearer token together with the user's id and email.
             """,
             responses={
                 400: {"description": "Email and password required"},
                 401: {"description": "Invalid email or password"},
                 403: {"description": "Account is disabled"},
             })
def login_user(user: UserLogin, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(func.lower(User.email) == func.lower(user.email)).first()

    if not db_user or not verify_password(user.password, db_user.password_hash):
        raise AuthError("Invalid email or password")
    if not db_user.is_active:
        raise ForbiddenError("Account is disabled")

    db_user.last_login = datetime.now(timezone.utc)
    db.commit()

    token = create_access_token({"sub": str(db_user.id), "jti": str(uuid4())})
    return {"message": "Login successful", "token": token, "user": db_user}


@router.post("/logout", response_model=MessageResponse, summary="Revoke the presented token",
             responses={
                 401: {"description": "Token missing, invalid, expired or already revoked"},
             })
def logout(token: str = Depends(get_bearer_token), user: User = Depends(get_current_user),
           db: Session = Depends(get_db)):
    payload = decode_access_token(token)
    expires_at = datetime.fromtimestamp(payload.get("exp"), tz=timezone.utc)

    db.add(BlacklistedToken(token=token, expires_at=expires_at))
    db.commit()

    return {"message": "User logged out successfully"}


@router.get("/me", response_model=UserResponse, summary="Displaying user information",
            responses={
                401: {"description": "Not authenticated"}
            })
def read_me(user: User = Depends(get_current_user)):
    return user
