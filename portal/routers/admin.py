from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.core.config.settings import Settings
from portal.core.security.auth import ADMIN_COOKIE, ADMIN_ROLE, generate_token
from portal.db.session import get_db
from portal.dependencies.auth import admin_not_authenticated, get_app_settings, get_current_admin
from portal.dependencies.submissions import get_lifecycle
from portal.models.admin import Admin
from portal.schemas.admin import (
    AdminLoginRequest, AdminOut, AdminRegisterRequest, AssignmentCreateRequest, GradeRequest
)
from portal.schemas.submission import (
    AssignmentOut, AssignmentWithSubmissions, SubmissionDetail, SubmissionOut
)
from portal.services import accounts, assignments
from portal.services.submissions import SubmissionLifecycle
from portal.utils.responses import api_response

router = APIRouter(prefix="/admin", tags=["admin"])


def _signed_in(admin: Admin, status_code: int, message: str, settings: Settings):
    response = api_response(status_code, AdminOut.model_validate(admin), message)
    token = generate_token(admin.id, ADMIN_ROLE, settings)
    response.set_cookie(ADMIN_COOKIE, token, httponly=True)
    return response


@router.post("/register", dependencies=[Depends(admin_not_authenticated)])
def register_admin(
    request: AdminRegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    admin = accounts.register_admin(db, request)
    return _signed_in(admin, status.HTTP_201_CREATED, "Admin registered successfully", settings)


@router.post("/login", dependencies=[Depends(admin_not_authenticated)])
def login_admin(
    request: AdminLoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    admin = accounts.authenticate_admin(db, request)
    return _signed_in(admin, status.HTTP_200_OK, "Admin logged in successfully", settings)


@router.post("/logout")
def logout_admin(current_admin: Admin = Depends(get_current_admin)):
    response = api_response(status.HTTP_200_OK, {}, "Admin logged out successfully")
    response.delete_cookie(ADMIN_COOKIE, httponly=True)
    return response


@router.get("/assignments")
def get_all_assignments(
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    owned = assignments.list_admin_assignments(db, current_admin.id)
    return api_response(
        status.HTTP_200_OK,
        [AssignmentWithSubmissions.model_validate(a) for a in owned],
        "Assignments fetched successfully",
    )


@router.post("/assignment")
def add_assignment(
    request: AssignmentCreateRequest,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    assignment = assignments.create_assignment(db, current_admin.id, request)
    return api_response(
        status.HTTP_201_CREATED,
        AssignmentOut.model_validate(assignment),
        "Assignment created successfully",
    )


@router.get("/assignments/{assignment_id}")
def get_assignment_by_id(
    assignment_id: int,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    assignment = assignments.get_admin_assignment(db, current_admin.id, assignment_id)
    return api_response(
        status.HTTP_200_OK,
        AssignmentWithSubmissions.model_validate(assignment),
        "Assignment fetched successfully",
    )


@router.post("/assignments/{assignment_id}/accept")
def accept_assignment(
    assignment_id: int,
    request: GradeRequest,
    current_admin: Admin = Depends(get_current_admin),
    lifecycle: SubmissionLifecycle = Depends(get_lifecycle),
):
    submission = lifecycle.accept(current_admin.id, assignment_id, request.user_id, request.feedback)
    return api_response(
        status.HTTP_200_OK,
        SubmissionOut.model_validate(submission),
        "Assignment submission accepted successfully.",
    )


@router.post("/assignments/{assignment_id}/reject")
def reject_assignment(
    assignment_id: int,
    request: GradeRequest,
    current_admin: Admin = Depends(get_current_admin),
    lifecycle: SubmissionLifecycle = Depends(get_lifecycle),
):
    submission = lifecycle.reject(current_admin.id, assignment_id, request.user_id, request.feedback)
    return api_response(
        status.HTTP_200_OK,
        SubmissionOut.model_validate(submission),
        "Assignment submission rejected successfully.",
    )


@router.get("/submissions")
def get_all_submissions(
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    submissions = assignments.list_admin_submissions(db, current_admin.id)
    return api_response(
        status.HTTP_200_OK,
        [SubmissionDetail.model_validate(s) for s in submissions],
        "Submissions fetched successfully",
    )


@router.get("/submissions/{submission_id}")
def get_submission_by_id(
    submission_id: int,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    submission = assignments.get_admin_submission(db, current_admin.id, submission_id)
    return api_response(
        status.HTTP_200_OK,
        SubmissionDetail.model_validate(submission),
        "Submission fetched successfully",
    )


@router.get("/submissions/{assignment_id}/{submission_status}")
def get_submissions_by_status(
    assignment_id: int,
    submission_status: str,
    current_admin: Admin = Depends(get_current_admin),
    lifecycle: SubmissionLifecycle = Depends(get_lifecycle),
):
    submissions = lifecycle.query_by_status_for_admin(current_admin.id, assignment_id, submission_status)
    return api_response(
        status.HTTP_200_OK,
        [SubmissionDetail.model_validate(s) for s in submissions],
        "Submissions fetched successfully",
    )
