from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.core.config.settings import Settings
from portal.core.security.auth import USER_COOKIE, USER_ROLE, generate_token
from portal.db.session import get_db
from portal.dependencies.auth import get_app_settings, get_current_user, user_not_authenticated
from portal.dependencies.submissions import get_lifecycle
from portal.models.user import User
from portal.schemas.submission import SubmissionOut, SubmissionWithAssignment
from portal.schemas.user import UploadRequest, UserLoginRequest, UserOut, UserRegisterRequest
from portal.services import accounts, assignments
from portal.services.submissions import SubmissionLifecycle
from portal.utils.responses import api_response

router = APIRouter(prefix="/user", tags=["user"])


def _signed_in(user: User, status_code: int, message: str, settings: Settings):
    response = api_response(status_code, UserOut.model_validate(user), message)
    token = generate_token(user.id, USER_ROLE, settings)
    response.set_cookie(USER_COOKIE, token, httponly=True)
    return response


@router.post("/register", dependencies=[Depends(user_not_authenticated)])
def register_user(
    request: UserRegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = accounts.register_user(db, request)
    return _signed_in(user, status.HTTP_201_CREATED, "User Created", settings)


@router.post("/login", dependencies=[Depends(user_not_authenticated)])
def login_user(
    request: UserLoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = accounts.authenticate_user(db, request)
    return _signed_in(user, status.HTTP_200_OK, "User Logged In", settings)


@router.post("/logout")
def logout_user(current_user: User = Depends(get_current_user)):
    response = api_response(status.HTTP_200_OK, {}, "User Logged Out")
    response.delete_cookie(USER_COOKIE, httponly=True)
    return response


@router.post("/upload")
def upload_assignment(
    request: UploadRequest,
    current_user: User = Depends(get_current_user),
    lifecycle: SubmissionLifecycle = Depends(get_lifecycle),
):
    submission = lifecycle.submit(current_user.id, request.assignment_id, request.submit_text)
    return api_response(
        status.HTTP_201_CREATED,
        SubmissionOut.model_validate(submission),
        "Assignment Submitted",
    )


@router.get("/assignment")
def get_all_assignments(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return api_response(
        status.HTTP_200_OK,
        assignments.list_user_assignments(db, current_user.id),
        "Assignments fetched successfully",
    )


@router.get("/assignment/{assignment_id}")
def get_assignment_by_id(
    assignment_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return api_response(
        status.HTTP_200_OK,
        assignments.get_user_assignment(db, current_user.id, assignment_id),
        "Assignment fetched successfully",
    )


@router.get("/assignments/{assignment_id}/{submission_status}")
def get_assignment_by_status(
    assignment_id: int,
    submission_status: str,
    current_user: User = Depends(get_current_user),
    lifecycle: SubmissionLifecycle = Depends(get_lifecycle),
):
    submissions = lifecycle.query_by_status_for_user(current_user.id, assignment_id, submission_status)
    return api_response(
        status.HTTP_200_OK,
        [SubmissionWithAssignment.model_validate(s) for s in submissions],
        "Submissions fetched successfully",
    )


@router.get("/admins")
def get_all_admins(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return api_response(
        status.HTTP_200_OK,
        assignments.list_admins_for_user(db, current_user.id),
        "Admins fetched successfully",
    )
