"""
Session and identity.

The signed credential is a JWT carried in the `token` cookie (or a bearer
header). Handlers only ever see the resolved `CurrentUser`.
"""

from datetime import timedelta
from typing import Literal, Optional

import jwt
from fastapi import Depends, Header, Request
from passlib.context import CryptContext
from pydantic import BaseModel

from config import Settings, get_settings
from database import utc_now
from errors import AuthenticationError, AuthorizationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class CurrentUser(BaseModel):
    id: str
    name: str
    email: str
    role: Literal["admin", "user"] = "user"
    avatar: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        return False


def issue_token(user: CurrentUser, settings: Settings = None) -> str:
    settings = settings or get_settings()
    now = utc_now()
    payload = {
        **user.model_dump(),
        "sub": user.id,
        "iat": now,
        "exp": now + timedelta(days=settings.TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings: Settings = None) -> Optional[CurrentUser]:
    """Decode a credential; bad signatures, expiry and malformed claims yield None."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    try:
        return CurrentUser.model_validate(payload)
    except ValueError:
        return None


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Optional[CurrentUser]:
    token = request.cookies.get(settings.TOKEN_COOKIE_NAME)
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
    if not token:
        return None
    return verify_token(token, settings)


def require_user(user: Optional[CurrentUser]) -> CurrentUser:
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


def require_admin(user: Optional[CurrentUser]) -> CurrentUser:
    if user is None or not user.is_admin:
        raise AuthorizationError("Admin access required")
    return user
