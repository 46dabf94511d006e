import logging
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.errors import Forbidden, Unauthorized
from app.core.security import decode_token
from app.models.user import User

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)
TOKEN_COOKIE = "token"

def _extract_token(request: Request, creds: HTTPAuthorizationCredentials | None) -> str | None:
    if creds and creds.credentials:
        return creds.credentials
    return request.cookies.get(TOKEN_COOKIE) or None

def _resolve_user(db: Session, token: str) -> User | None:
    payload = decode_token(token)
    return db.get(User, payload["sub"])

def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    token = _extract_token(request, creds)
    if not token:
        raise Unauthorized("Access denied. No token provided.")
    try:
        user = _resolve_user(db, token)
    except JWTError:
        raise Unauthorized("Invalid token.")
    if not user:
        raise Unauthorized("Token is valid but user no longer exists.")
    return user

def get_optional_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User | None:
    token = _extract_token(request, creds)
    if not token:
        return None
    try:
        return _resolve_user(db, token)
    except JWTError as e:
        logger.debug("ignoring invalid token on optional auth: %s", e)
        return None

def require_roles(*roles: str):
    def _guard(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise Forbidden()
        return user
    return _guard
