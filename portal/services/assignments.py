import logging
from typing import Dict, List

from sqlalchemy.orm import Session, joinedload, selectinload

from portal.core.errors import Forbidden, Internal, NotFound
from portal.models.admin import Admin
from portal.models.assignment import Assignment
from portal.models.submission import AssignmentSubmission
from portal.schemas.admin import AssignmentCreateRequest
from portal.schemas.submission import (
    AdminWithAssignments, AssignmentWithMySubmission, SubmissionOut
)

logger = logging.getLogger(__name__)


def create_assignment(db: Session, admin_id: int, request: AssignmentCreateRequest) -> Assignment:
    assignment = Assignment(
        admin_id=admin_id,
        task=request.task,
        description=request.description,
        due_date=request.due_date,
    )
    db.add(assignment)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Assignment not created for admin {admin_id}", exc_info=True)
        raise Internal("Assignment not created")
    db.refresh(assignment)

    logger.info(f"Admin {admin_id} created assignment {assignment.id}")
    return assignment


# Admin views

def list_admin_assignments(db: Session, admin_id: int) -> List[Assignment]:
    return (
        db.query(Assignment)
        .options(selectinload(Assignment.submissions).joinedload(AssignmentSubmission.user))
        .filter(Assignment.admin_id == admin_id)
        .order_by(Assignment.id)
        .all()
    )


def get_admin_assignment(db: Session, admin_id: int, assignment_id: int) -> Assignment:
    assignment = (
        db.query(Assignment)
        .options(selectinload(Assignment.submissions).joinedload(AssignmentSubmission.user))
        .filter(Assignment.id == assignment_id, Assignment.admin_id == admin_id)
        .first()
    )
    if not assignment:
        raise Forbidden("Unauthorized or assignment not found.")
    return assignment


def _admin_submissions_query(db: Session, admin_id: int):
    return (
        db.query(AssignmentSubmission)
        .join(Assignment, AssignmentSubmission.assignment_id == Assignment.id)
        .options(
            joinedload(AssignmentSubmission.user),
            joinedload(AssignmentSubmission.assignment),
        )
        .filter(Assignment.admin_id == admin_id)
    )


def list_admin_submissions(db: Session, admin_id: int) -> List[AssignmentSubmission]:
    return _admin_submissions_query(db, admin_id).order_by(AssignmentSubmission.id).all()


def get_admin_submission(db: Session, admin_id: int, submission_id: int) -> AssignmentSubmission:
    submission = _admin_submissions_query(db, admin_id).filter(
        AssignmentSubmission.id == submission_id
    ).first()
    if not submission:
        raise NotFound("Submission not found.")
    return submission


# User views

def _with_my_submission(assignment: Assignment, mine: Dict[int, AssignmentSubmission]) -> AssignmentWithMySubmission:
    view = AssignmentWithMySubmission.model_validate(assignment)
    submission = mine.get(assignment.id)
    if submission is not None:
        view.submission = SubmissionOut.model_validate(submission)
    return view


def _submissions_by_assignment(db: Session, user_id: int) -> Dict[int, AssignmentSubmission]:
    submissions = db.query(AssignmentSubmission).filter(
        AssignmentSubmission.user_id == user_id
    ).all()
    return {submission.assignment_id: submission for submission in submissions}


def list_user_assignments(db: Session, user_id: int) -> List[AssignmentWithMySubmission]:
    mine = _submissions_by_assignment(db, user_id)
    assignments = db.query(Assignment).order_by(Assignment.id).all()
    return [_with_my_submission(assignment, mine) for assignment in assignments]


def get_user_assignment(db: Session, user_id: int, assignment_id: int) -> AssignmentWithMySubmission:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFound("Assignment not found")
    return _with_my_submission(assignment, _submissions_by_assignment(db, user_id))


def list_admins_for_user(db: Session, user_id: int) -> List[AdminWithAssignments]:
    mine = _submissions_by_assignment(db, user_id)
    admins = (
        db.query(Admin)
        .options(selectinload(Admin.assignments))
        .order_by(Admin.id)
        .all()
    )

    result = []
    for admin in admins:
        result.append(AdminWithAssignments(
            id=admin.id,
            name=admin.name,
            email=admin.email,
            department=admin.department,
            assignments=[_with_my_submission(a, mine) for a in admin.assignments],
        ))
    return result
