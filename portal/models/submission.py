from sqlalchemy import Column, Integer, ForeignKey, DateTime, Enum, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
from portal.db.base import Base
from portal.core.errors import InvalidStatus

class SubmissionStatus(enum.Enum):
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: str) -> "SubmissionStatus":
        """Case-insensitive lookup, raising InvalidStatus for unknown values"""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidStatus(
                f"Invalid status '{value}'. Expected one of: "
                + ", ".join(member.value for member in cls)
            )

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionStatus.ACCEPTED, SubmissionStatus.REJECTED)

class AssignmentSubmission(Base):
    __tablename__ = "assignment_submissions"
    __table_args__ = (
        UniqueConstraint("assignment_id", "user_id", name="uq_submission_assignment_user"),
    )

    id = Column(Integer, primary_key=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    submitted_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    submit_text = Column(Text, nullable=False)
    status = Column(Enum(SubmissionStatus), nullable=False, default=SubmissionStatus.SUBMITTED)
    feedback = Column(Text, nullable=True)

    assignment = relationship("Assignment", back_populates="submissions")
    user = relationship("User", back_populates="submissions")
