from typing import Optional

from fastapi import Depends
from jose import JWTError
from sqlalchemy.orm import Session
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from cloudvault.database import get_db
from cloudvault.errors import AuthError
from cloudvault.models.blacklisted_token_model import BlacklistedToken
from cloudvault.models.user_model import User
from cloudvault.services.access import is_valid_id
from cloudvault.services.storage import ObjectStore, get_object_store
from cloudvault.utils.auth import decode_access_token

oauth2_scheme = HTTPBearer(auto_error=False)

def get_bearer_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme)) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthError("No token provided")
    return credentials.credentials

def get_current_user(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> User:
    revoked = db.query(BlacklistedToken).filter(BlacklistedToken.token == token).first()
    if revoked:
        raise AuthError("Token has been revoked, please login again")

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise AuthError("Invalid or expired token")

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit() or not is_valid_id(int(user_id)):
        raise AuthError("Invalid or expired token")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None or not user.is_active:
        raise AuthError("Invalid or expired token")
    return user

def get_storage() -> ObjectStore:
    return get_object_store()
