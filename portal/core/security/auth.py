from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from passlib.context import CryptContext

from portal.core.config.settings import Settings
from portal.core.errors import Unauthorized

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ADMIN_ROLE = "admin"
USER_ROLE = "user"

ADMIN_COOKIE = "admin-token"
USER_COOKIE = "user-token"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def create_hashed_password(password: str) -> str:
    return pwd_context.hash(password)

def _secret_for(role: str, settings: Settings) -> str:
    if role == ADMIN_ROLE:
        return settings.ADMIN_JWT_SECRET
    if role == USER_ROLE:
        return settings.USER_JWT_SECRET
    raise ValueError(f"Unknown token role: {role}")

def generate_token(subject_id: int, role: str, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(subject_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, _secret_for(role, settings), algorithm=settings.ALGORITHM)

def resolve_token(token: str, role: str, settings: Settings) -> int:
    """Verify a token issued for ``role`` and return the subject id"""
    try:
        payload = jwt.decode(token, _secret_for(role, settings), algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    subject = payload.get("sub")
    if subject is None or payload.get("role") != role:
        raise Unauthorized("Invalid token")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token")
