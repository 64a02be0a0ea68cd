import logging
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from portal.core.config.settings import Settings
from portal.core.errors import Unauthorized
from portal.core.security.auth import (
    ADMIN_COOKIE, ADMIN_ROLE, USER_COOKIE, USER_ROLE, resolve_token
)
from portal.db.session import get_db
from portal.models.admin import Admin
from portal.models.user import User

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_admin(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Admin:
    token = request.cookies.get(ADMIN_COOKIE)
    if not token:
        raise Unauthorized("Not authenticated, token missing")

    admin_id = resolve_token(token, ADMIN_ROLE, settings)
    admin = db.query(Admin).filter(Admin.id == admin_id).first()
    if admin is None:
        logger.warning(f"Admin token refers to unknown admin {admin_id}")
        raise Unauthorized("Invalid token")
    return admin


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> User:
    token = request.cookies.get(USER_COOKIE)
    if not token:
        raise Unauthorized("Not authenticated, token missing")

    user_id = resolve_token(token, USER_ROLE, settings)
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.warning(f"User token refers to unknown user {user_id}")
        raise Unauthorized("Invalid token")
    return user


def admin_not_authenticated(request: Request) -> None:
    """Guard for register/login: the caller must not already hold an admin token"""
    if request.cookies.get(ADMIN_COOKIE):
        raise Unauthorized("Already authenticated, token present")


def user_not_authenticated(request: Request) -> None:
    if request.cookies.get(USER_COOKIE):
        raise Unauthorized("Already authenticated, token present")
