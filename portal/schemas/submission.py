from typing import List, Optional
from pydantic import EmailStr
from portal.models.admin import Department
from portal.models.submission import SubmissionStatus
from portal.schemas.common import CamelModel, UtcDatetime


class UserBrief(CamelModel):
    id: int
    name: str
    email: EmailStr


class AssignmentBrief(CamelModel):
    id: int
    task: str
    description: Optional[str] = None
    due_date: UtcDatetime


class SubmissionOut(CamelModel):
    id: int
    assignment_id: int
    user_id: int
    submitted_at: UtcDatetime
    submit_text: str
    status: SubmissionStatus
    feedback: Optional[str] = None


class SubmissionWithUser(SubmissionOut):
    user: UserBrief


class SubmissionWithAssignment(SubmissionOut):
    assignment: AssignmentBrief


class SubmissionDetail(SubmissionOut):
    user: UserBrief
    assignment: AssignmentBrief


class AssignmentOut(AssignmentBrief):
    admin_id: int


class AssignmentWithSubmissions(AssignmentOut):
    """Admin view: an owned assignment and everything submitted to it"""

    submissions: List[SubmissionWithUser] = []


class AssignmentWithMySubmission(AssignmentOut):
    """User view: an assignment and the caller's own submission, if any"""

    submission: Optional[SubmissionOut] = None


class AdminWithAssignments(CamelModel):
    id: int
    name: str
    email: EmailStr
    department: Department
    assignments: List[AssignmentWithMySubmission] = []
