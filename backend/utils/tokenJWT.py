# utils/tokenJWT.py
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User, UserRole
from utils.exceptions import Forbidden, InvalidToken, MissingToken

# Missing headers are reported by get_current_user, not by the scheme
bearer_scheme = HTTPBearer(auto_error=False)

# Generate a new JWT access token bound to a user id
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def create_user_token(user: User) -> str:
    return create_access_token(data={"sub": str(user.id), "role": user.role.value})

# Resolve a raw token to the user it was issued for
def authenticate(db: Session, token: Optional[str]) -> User:
    if not token:
        raise MissingToken()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise InvalidToken()

    user = db.get(User, user_id)
    if user is None:
        raise InvalidToken()
    return user

# Retrieve the currently authenticated user from the Authorization header
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    return authenticate(db, credentials.credentials if credentials else None)

# Role gate shared by the services and the route dependencies
def require_role(user: User, role: UserRole, message: str = "Forbidden") -> User:
    if user.role != role:
        raise Forbidden(message)
    return user

# Dependency factory for Role-Based Access Control
def role_required(role: UserRole, message: str = "Forbidden"):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        return require_role(current_user, role, message)
    return _checker
