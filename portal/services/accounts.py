import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.errors import Conflict, NotFound, Unauthorized
from portal.core.security.auth import create_hashed_password, verify_password
from portal.models.admin import Admin
from portal.models.user import User
from portal.schemas.admin import AdminLoginRequest, AdminRegisterRequest
from portal.schemas.user import UserLoginRequest, UserRegisterRequest

logger = logging.getLogger(__name__)


def _persist(db: Session, record, duplicate_message: str):
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(duplicate_message)
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    return record


def register_admin(db: Session, request: AdminRegisterRequest) -> Admin:
    existing_admin = db.query(Admin).filter(Admin.email == request.email).first()
    if existing_admin:
        logger.warning(f"Admin with email {request.email} already exists")
        raise Conflict("Admin already exists")

    admin = Admin(
        email=request.email,
        hashed_password=create_hashed_password(request.password),
        name=request.name,
        department=request.department,
    )
    admin = _persist(db, admin, "Admin already exists")
    logger.info(f"Admin {admin.id} registered")
    return admin


def authenticate_admin(db: Session, request: AdminLoginRequest) -> Admin:
    admin = db.query(Admin).filter(Admin.email == request.email).first()
    if not admin:
        logger.warning(f"Admin with email {request.email} not found")
        raise NotFound("Admin not found")
    if not verify_password(request.password, admin.hashed_password):
        logger.warning(f"Invalid password for admin {admin.id}")
        raise Unauthorized("Invalid password")
    return admin


def register_user(db: Session, request: UserRegisterRequest) -> User:
    existing_user = db.query(User).filter(User.email == request.email).first()
    if existing_user:
        logger.warning(f"User with email {request.email} already exists")
        raise Conflict("User already exists")

    user = User(
        email=request.email,
        hashed_password=create_hashed_password(request.password),
        name=request.name,
    )
    user = _persist(db, user, "User already exists")
    logger.info(f"User {user.id} registered")
    return user


def authenticate_user(db: Session, request: UserLoginRequest) -> User:
    # Unknown email and wrong password are reported identically
    user = db.query(User).filter(User.email == request.email).first()
    if not user or not verify_password(request.password, user.hashed_password):
        logger.warning("Invalid user credentials")
        raise Unauthorized("Invalid Credentials")
    return user
