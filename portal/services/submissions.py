import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from portal.core.config.settings import Settings
from portal.core.errors import (
    Conflict, DuplicateSubmission, EmptyResult, Forbidden, NotFound
)
from portal.models.assignment import Assignment
from portal.models.submission import AssignmentSubmission, SubmissionStatus
from portal.utils.helpers import get_utc_now

logger = logging.getLogger(__name__)


class SubmissionLifecycle:
    """Creates submissions and moves them through their grading states.

    States are PENDING, SUBMITTED, ACCEPTED and REJECTED. New submissions
    start as SUBMITTED; admins move them to ACCEPTED or REJECTED. Every
    admin operation is scoped to assignments the admin owns, and a
    foreign assignment is reported exactly like a missing one.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.allow_regrade = settings.ALLOW_REGRADE
        self.default_feedback = settings.DEFAULT_FEEDBACK

    def _owned_assignment(self, admin_id: int, assignment_id: int) -> Assignment:
        assignment = self.db.query(Assignment).filter(
            Assignment.id == assignment_id,
            Assignment.admin_id == admin_id,
        ).first()
        if not assignment:
            logger.warning(
                f"Admin {admin_id} denied access to assignment {assignment_id}"
            )
            raise Forbidden("Unauthorized or assignment not found.")
        return assignment

    def _find(self, assignment_id: int, user_id: int) -> Optional[AssignmentSubmission]:
        return self.db.query(AssignmentSubmission).filter(
            AssignmentSubmission.assignment_id == assignment_id,
            AssignmentSubmission.user_id == user_id,
        ).first()

    def submit(self, user_id: int, assignment_id: int, text: str) -> AssignmentSubmission:
        assignment = self.db.query(Assignment).filter(Assignment.id == assignment_id).first()
        if not assignment:
            raise NotFound("Assignment not found")

        if self._find(assignment_id, user_id):
            logger.warning(f"User {user_id} already submitted assignment {assignment_id}")
            raise DuplicateSubmission()

        submission = AssignmentSubmission(
            assignment_id=assignment_id,
            user_id=user_id,
            submit_text=text,
            submitted_at=get_utc_now(),
            status=SubmissionStatus.SUBMITTED,
        )
        self.db.add(submission)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent upload for the same pair
            self.db.rollback()
            raise DuplicateSubmission()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(submission)

        logger.info(f"User {user_id} submitted assignment {assignment_id}")
        return submission

    def accept(self, admin_id: int, assignment_id: int, user_id: int, feedback: Optional[str] = None) -> AssignmentSubmission:
        return self._grade(admin_id, assignment_id, user_id, SubmissionStatus.ACCEPTED, feedback)

    def reject(self, admin_id: int, assignment_id: int, user_id: int, feedback: Optional[str] = None) -> AssignmentSubmission:
        return self._grade(admin_id, assignment_id, user_id, SubmissionStatus.REJECTED, feedback)

    def _grade(self, admin_id, assignment_id, user_id, new_status, feedback):
        self._owned_assignment(admin_id, assignment_id)

        submission = self._find(assignment_id, user_id)
        if not submission:
            raise NotFound("Submission not found.")

        if submission.status.is_terminal:
            if not self.allow_regrade:
                raise Conflict("Submission has already been graded")
            logger.warning(
                f"Submission {submission.id} regraded from "
                f"{submission.status.value} to {new_status.value}"
            )

        submission.status = new_status
        submission.feedback = feedback or self.default_feedback
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(submission)

        logger.info(
            f"Admin {admin_id} set submission {submission.id} to {new_status.value}"
        )
        return submission

    def query_by_status_for_admin(self, admin_id: int, assignment_id: int, status: str) -> List[AssignmentSubmission]:
        wanted = SubmissionStatus.parse(status)
        self._owned_assignment(admin_id, assignment_id)

        submissions = (
            self.db.query(AssignmentSubmission)
            .options(
                joinedload(AssignmentSubmission.user),
                joinedload(AssignmentSubmission.assignment),
            )
            .filter(
                AssignmentSubmission.assignment_id == assignment_id,
                AssignmentSubmission.status == wanted,
            )
            .order_by(AssignmentSubmission.id)
            .all()
        )
        if not submissions:
            raise EmptyResult()
        return submissions

    def query_by_status_for_user(self, user_id: int, assignment_id: int, status: str) -> List[AssignmentSubmission]:
        wanted = SubmissionStatus.parse(status)

        submissions = (
            self.db.query(AssignmentSubmission)
            .options(joinedload(AssignmentSubmission.assignment))
            .filter(
                AssignmentSubmission.assignment_id == assignment_id,
                AssignmentSubmission.user_id == user_id,
                AssignmentSubmission.status == wanted,
            )
            .order_by(AssignmentSubmission.id)
            .all()
        )
        if not submissions:
            raise EmptyResult()
        return submissions
