from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from portal.db.base import Base

class Assignment(Base):
    __tablename__ = "assignments"
    id = Column(Integer, primary_key=True)
    task = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=False)
    admin_id = Column(Integer, ForeignKey("admins.id"), nullable=False, index=True)

    admin = relationship("Admin", back_populates="assignments")
    submissions = relationship(
        "AssignmentSubmission",
        back_populates="assignment",
        order_by="AssignmentSubmission.id",
    )
